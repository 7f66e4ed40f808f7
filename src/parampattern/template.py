from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TypeAlias

from parampattern.constants import DEFAULT_CLOSE_BRACKET, DEFAULT_OPEN_BRACKET, PATTERN_LABEL
from parampattern.core import ParamName
from parampattern.errors import InvalidArgumentError
from parampattern.placeholder.model import Delimiters, Occurrence
from parampattern.placeholder.scan import scan_occurrences
from parampattern.source import Source, SourceSpan

Parameters: TypeAlias = Mapping[ParamName, tuple[Occurrence, ...]]


@dataclass(frozen=True, slots=True)
class Template:
    """
    Compiled, immutable form of a pattern.

    `segments` always holds `len(occurrences) + 1` literal spans: segment i is the
    text before occurrence i, the last one is the text after the last occurrence.
    The leading and trailing segments may be empty; interior ones never are.
    """

    source: Source
    delimiters: Delimiters
    occurrences: tuple[Occurrence, ...]
    segments: tuple[SourceSpan, ...]
    params: Parameters  # name -> its occurrences, in first-appearance order

    @staticmethod
    def compile(
        pattern: str,
        open_bracket: str = DEFAULT_OPEN_BRACKET,
        close_bracket: str = DEFAULT_CLOSE_BRACKET,
    ) -> Template:
        if pattern is None or not isinstance(pattern, str) or not pattern.strip():
            raise InvalidArgumentError("Input string cannot be blank")
        delimiters = Delimiters(open_bracket, close_bracket)
        return Template.from_source(Source.from_string(pattern, PATTERN_LABEL), delimiters)

    @staticmethod
    def from_file(
        path: str | Path,
        open_bracket: str = DEFAULT_OPEN_BRACKET,
        close_bracket: str = DEFAULT_CLOSE_BRACKET,
        encoding: str = "utf-8",
    ) -> Template:
        source = Source.from_file(path, encoding=encoding)
        if not source.contents.strip():
            raise InvalidArgumentError(f"Pattern file cannot be blank: {source.file}")
        return Template.from_source(source, Delimiters(open_bracket, close_bracket))

    @staticmethod
    def from_source(source: Source, delimiters: Delimiters) -> Template:
        occurrences = scan_occurrences(source, delimiters)

        segments: list[SourceSpan] = []
        params: dict[ParamName, list[Occurrence]] = {}
        last = 0

        for occ in occurrences:
            segments.append(SourceSpan.from_ints(last, occ.start))
            params.setdefault(occ.name, []).append(occ)
            last = occ.end

        segments.append(SourceSpan.from_ints(last, len(source.contents)))

        return Template(
            source=source,
            delimiters=delimiters,
            occurrences=occurrences,
            segments=tuple(segments),
            params=MappingProxyType({name: tuple(occs) for name, occs in params.items()}),
        )

    @property
    def pattern(self) -> str:
        return self.source.contents

    @property
    def names(self) -> tuple[ParamName, ...]:
        return tuple(self.params)

    def literal(self, i: int) -> str:
        return self.source.slice(self.segments[i])

    def format_of(self, name: ParamName) -> str | None:
        """First format hint given for `name`, if any of its occurrences has one."""
        for occ in self.params[name]:
            if occ.format is not None:
                return occ.format
        return None
