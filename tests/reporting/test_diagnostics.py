from __future__ import annotations

import io
import warnings

import pytest
from rich.console import Console

from parampattern import ParameterizedString
from parampattern.errors import (
    InvalidArgumentError,
    InvalidPatternError,
    UnterminatedPlaceholderWarning,
)
from parampattern.reporting.diagnostics import (
    Diagnostic,
    FrameConfig,
    Related,
    Severity,
    format_diagnostic,
    render_diagnostic,
)
from parampattern.source import Source, SourceSpan


def _console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None)


def _output(console: Console) -> str:
    assert isinstance(console.file, io.StringIO)
    return console.file.getvalue()


def test_format_diagnostic_multiline_with_context() -> None:
    src = Source.from_string("first\nsecond {x\nthird\nfourth\nfifth", "<pattern>")
    d = Diagnostic(
        message="something odd",
        severity=Severity.WARN,
        span=SourceSpan.from_ints(13, 14),
        source=src,
        code="PP999",
        notes=["a note"],
        hint="a hint",
    )
    lines = format_diagnostic(d).splitlines()
    assert lines[0] == "WARN [PP999]: something odd"
    assert lines[1] == "  --> <pattern>:2:8"
    assert lines[2:6] == ["1 | first", "2 | second {x", " " * 11 + "^", "3 | third"]
    assert lines[6] == "4 | fourth"
    assert "5 | fifth" not in lines
    assert lines[-2:] == ["• a note", "Hint: a hint"]


def test_format_diagnostic_expands_tabs_for_caret() -> None:
    src = Source.from_string("\t{x}")
    d = Diagnostic("m", Severity.ERROR, SourceSpan.from_ints(1, 4), src)
    lines = format_diagnostic(d, cfg=FrameConfig(show_line_numbers=False)).splitlines()
    assert lines[2] == "    {x}"
    assert lines[3] == "    ^^^"


def test_format_diagnostic_related() -> None:
    pattern = Source.from_string("{a}-{a}", "<pattern>")
    inp = Source.from_string("x-y", "<input>")
    d = Diagnostic(
        "conflict",
        Severity.ERROR,
        SourceSpan.from_ints(2, 3),
        inp,
        related=[Related("here", SourceSpan.from_ints(4, 7), pattern)],
    )
    text = format_diagnostic(d)
    assert "here\n  --> <pattern>:1:5\n1 | {a}-{a}\n        ^^^" in text


def test_exception_renders_with_rich() -> None:
    console = _console()
    with pytest.raises(InvalidPatternError) as excinfo:
        ParameterizedString("{a}{b}")
    console.print(excinfo.value)
    out = _output(console)
    assert "ERROR [PP101]" in out
    assert "{a}{b}" in out
    assert "^" in out


def test_argument_error_renders_message_only() -> None:
    console = _console()
    with pytest.raises(InvalidArgumentError) as excinfo:
        ParameterizedString("  ")
    assert str(excinfo.value) == "Input string cannot be blank"
    console.print(excinfo.value)
    assert "ERROR: Input string cannot be blank" in _output(console)



def test_caret_without_line_numbers_sits_under_offset() -> None:
    src = Source.from_string("ab{c")
    d = Diagnostic("m", Severity.ERROR, SourceSpan.from_ints(2, 3), src)
    lines = format_diagnostic(d, cfg=FrameConfig(show_line_numbers=False)).splitlines()
    assert lines[2:] == ["ab{c", "  ^"]


def test_rich_caret_without_line_numbers_sits_under_offset() -> None:
    console = _console()
    src = Source.from_string("abcdefghij{klmnopqrstuvwxyz")
    d = Diagnostic("m", Severity.ERROR, SourceSpan.from_ints(10, 11), src)
    console.print(render_diagnostic(d, cfg=FrameConfig(show_line_numbers=False)))
    rows = _output(console).splitlines()
    code_row = next(r for r in rows if "abcdefghij{" in r)
    caret_row = next(r for r in rows if "^" in r)
    assert caret_row.index("^") == code_row.index("{")


def test_rich_frame_at_end_of_input() -> None:
    console = _console()
    src = Source.from_string("abcdefghijklmnopqrstuvwxyz")
    console.print(render_diagnostic(Diagnostic("at end", Severity.INFO, SourceSpan.point(26), src)))
    out = _output(console)
    assert "INFO: at end" in out
    assert "<string>:1:27" in out
    assert "1 | abcdefghijklmnopqrstuvwxyz" in out


def test_recorded_warning_renders_with_rich() -> None:
    console = _console()
    with warnings.catch_warnings(record=True) as record:
        warnings.simplefilter("always")
        ParameterizedString("www.google.com/{incomplete")
    assert len(record) == 1
    warning = record[0].message
    assert isinstance(warning, UnterminatedPlaceholderWarning)
    console.print(warning)
    out = _output(console)
    assert "WARN [PP104]" in out
    assert "www.google.com/{incomplete" in out
