from __future__ import annotations

from dataclasses import dataclass

from parampattern.constants import DEFAULT_CLOSE_BRACKET, DEFAULT_OPEN_BRACKET
from parampattern.core import ParamName
from parampattern.errors import InvalidArgumentError
from parampattern.source import Source, SourceSpan


def _not_blank(value: str | None, field_name: str) -> None:
    if value is None or not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{field_name} cannot be blank")


@dataclass(frozen=True, slots=True)
class Delimiters:
    open: str = DEFAULT_OPEN_BRACKET
    close: str = DEFAULT_CLOSE_BRACKET

    def __post_init__(self) -> None:
        _not_blank(self.open, "Open bracket")
        _not_blank(self.close, "Close bracket")


@dataclass(frozen=True, slots=True)
class PlaceholderBody:
    """Parsed text between the delimiters."""
    name: ParamName
    format: str | None    # None without a separator; possibly blank with one
    separator: int | None  # offset of the separator within the body text


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One appearance of a placeholder in a pattern."""
    name: ParamName
    source: Source
    span: SourceSpan  # open delimiter + body + close delimiter
    body: SourceSpan  # strictly between the delimiters
    format: str | None = None

    @property
    def start(self) -> int:
        return int(self.span.start)

    @property
    def end(self) -> int:
        return int(self.span.end)

    @property
    def text(self) -> str:
        return self.source.slice(self.span)

    def line_col(self) -> tuple[int, int, int, int]:
        sl, sc = self.source.pos_to_line_col(self.span.start)
        el, ec = self.source.pos_to_line_col(self.span.end)
        return (sl, sc, el, ec)
