"""
parampattern exceptions and warnings: both optionally wrap a Diagnostic and render
using the same rich code-frame formatting.

The builtin second base of each subclass keeps `except ValueError` / `except KeyError`
callers working.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

from parampattern.reporting.diagnostics import Diagnostic, format_diagnostic, render_diagnostic

__all__ = [
    "PatternException",
    "InvalidArgumentError",
    "InvalidPatternError",
    "UnknownParameterError",
    "PatternMismatchError",
    "PatternWarning",
    "UnterminatedPlaceholderWarning",
]


@dataclass(slots=True, eq=False)
class PatternException(Exception):
    """
    Base parampattern exception. Errors tied to a location in a pattern or an input
    carry a Diagnostic; argument errors only carry a message.
    """

    message: str
    diagnostic: Diagnostic | None = None

    # Plain-text rendering with a caret frame (CI/log files; or if user didn't use Console)
    def __str__(self) -> str:
        if self.diagnostic is None:
            return self.message
        return format_diagnostic(self.diagnostic)

    # Pretty rendering when printed via Rich Console
    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        if self.diagnostic is None:
            yield Text(f"ERROR: {self.message}", style="bold red")
        else:
            yield render_diagnostic(self.diagnostic)


class InvalidArgumentError(PatternException, ValueError):
    """A required construction input (pattern, delimiter, parameter name) is blank."""


class InvalidPatternError(PatternException, ValueError):
    """The pattern is malformed: adjacent placeholders or a blank format."""


class UnknownParameterError(PatternException, KeyError):
    """The parameter name does not appear in the pattern."""


class PatternMismatchError(PatternException, ValueError):
    """The input cannot be aligned to the pattern."""

    @property
    def input(self) -> str:
        assert self.diagnostic is not None
        return self.diagnostic.source.contents

    @property
    def pattern(self) -> str:
        assert self.diagnostic is not None
        return self.diagnostic.related[0].source.contents


# ─────────── Warnings (parity with exceptions) ───────────


class PatternWarning(Warning):
    """Base parampattern warning category."""


@dataclass(slots=True, eq=False)
class UnterminatedPlaceholderWarning(PatternWarning):
    """
    An open delimiter without a matching close delimiter was kept as literal text.

    `str()` gives the plain caret frame that `warnings` prints by default; a rich
    Console prints the code-frame panel, e.g. for warnings collected with
    `warnings.catch_warnings(record=True)`.
    """

    diagnostic: Diagnostic

    def __str__(self) -> str:
        return format_diagnostic(self.diagnostic)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        yield render_diagnostic(self.diagnostic)
