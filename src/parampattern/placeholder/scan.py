from __future__ import annotations

import os
import warnings

from parampattern.constants import (
    ADJACENT_PLACEHOLDERS,
    BLANK_FORMAT,
    FORMAT_SEPARATOR,
    UNTERMINATED_PLACEHOLDER,
)
from parampattern.errors import InvalidPatternError, UnterminatedPlaceholderWarning
from parampattern.reporting.diagnostics import Diagnostic, Severity
from parampattern.source import Source, SourceSpan

from .model import Delimiters, Occurrence
from .parse import parse_body

# Warnings are attributed to the first frame outside the package.
_PACKAGE_DIR = os.path.dirname(os.path.dirname(__file__)) + os.sep


def _invalid(source: Source, pos: int, message: str, code: str, hint: str | None = None) -> InvalidPatternError:
    return InvalidPatternError(
        message,
        Diagnostic(
            message=message,
            severity=Severity.ERROR,
            span=SourceSpan.point(pos),
            source=source,
            code=code,
            hint=hint,
        ),
    )


def _occurrence(source: Source, outer: SourceSpan, body: SourceSpan) -> Occurrence:
    parsed = parse_body(source, body)

    if parsed.separator is not None and not parsed.format:
        raise _invalid(
            source,
            int(body.start) + parsed.separator,
            f"Expected format after '{FORMAT_SEPARATOR}' in {source.slice(outer)!r}",
            BLANK_FORMAT,
        )

    return Occurrence(
        name=parsed.name,
        source=source,
        span=outer,
        body=body,
        format=parsed.format,
    )


def _warn_unterminated(source: Source, pos: int, delimiters: Delimiters) -> None:
    warnings.warn(
        UnterminatedPlaceholderWarning(
            Diagnostic(
                message=f"'{delimiters.open}' has no matching '{delimiters.close}'; treating it as literal text",
                severity=Severity.WARN,
                span=SourceSpan.from_ints(pos, pos + len(delimiters.open)),
                source=source,
                code=UNTERMINATED_PLACEHOLDER,
            )
        ),
        skip_file_prefixes=(_PACKAGE_DIR,),
    )


def scan_occurrences(source: Source, delimiters: Delimiters) -> tuple[Occurrence, ...]:
    """
    Single left-to-right pass collecting every `open body close` occurrence.

    An open delimiter without a close delimiter after it is literal text. Two
    occurrences touching each other are rejected: nothing would tell where the
    first value ends when parsing.
    """
    text = source.contents
    found: list[Occurrence] = []
    pos = 0

    while True:
        open_idx = text.find(delimiters.open, pos)
        if open_idx < 0:
            break

        body_start = open_idx + len(delimiters.open)
        close_idx = text.find(delimiters.close, body_start)
        if close_idx < 0:
            _warn_unterminated(source, open_idx, delimiters)
            # no close delimiter further on, so no later open delimiter can be closed either
            break

        end = close_idx + len(delimiters.close)
        occ = _occurrence(
            source,
            SourceSpan.from_ints(open_idx, end),
            SourceSpan.from_ints(body_start, close_idx),
        )

        if found and found[-1].end == occ.start:
            raise _invalid(
                source,
                occ.start,
                f"Placeholders {found[-1].text!r} and {occ.text!r} must be separated by literal text",
                ADJACENT_PLACEHOLDERS,
                hint="Without a separator the boundary between both values cannot be recovered by parse().",
            )

        found.append(occ)
        pos = end

    return tuple(found)
