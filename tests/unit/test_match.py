from __future__ import annotations

import pytest

from parampattern.errors import PatternMismatchError
from parampattern.match import match
from parampattern.template import Template


def test_concrete_path() -> None:
    tpt = Template.compile("{rootDir}/tmp/{parentDir}/{fileName}")
    assert match(tpt, "/home/user/tmp/testDirectory/testFile.txt") == {
        "rootDir": "/home/user",
        "parentDir": "testDirectory",
        "fileName": "testFile.txt",
    }


def test_single_placeholder_captures_everything() -> None:
    assert match(Template.compile("{all}"), "any text {at} all") == {"all": "any text {at} all"}


def test_no_placeholders_is_a_no_op() -> None:
    assert match(Template.compile("static"), "whatever") == {}


def test_leading_and_trailing_literals_are_anchored() -> None:
    tpt = Template.compile("{name}.txt")
    assert match(tpt, "notes.txt.txt") == {"name": "notes.txt"}

    tpt = Template.compile("http://{host}/{path}")
    assert match(tpt, "http://example.org/a/b") == {"host": "example.org", "path": "a/b"}


def test_interior_segment_takes_first_occurrence() -> None:
    tpt = Template.compile("{a}-{b}")
    assert match(tpt, "x-y-z") == {"a": "x", "b": "y-z"}


def test_empty_values() -> None:
    tpt = Template.compile("{a}/{b}")
    assert match(tpt, "/") == {"a": "", "b": ""}


def test_repeated_placeholder_consistent() -> None:
    assert match(Template.compile("{a}-{a}"), "x-x") == {"a": "x"}


def test_repeated_placeholder_conflict() -> None:
    with pytest.raises(PatternMismatchError) as excinfo:
        match(Template.compile("{a}-{a}"), "x-y")
    err = excinfo.value
    assert err.diagnostic is not None
    assert err.diagnostic.code == "PP302"
    assert err.input == "x-y"
    assert err.pattern == "{a}-{a}"
    lines = str(err).splitlines()
    assert lines[0] == "ERROR [PP302]: Parameter 'a' matched conflicting values 'x' and 'y'"
    assert lines[1] == "  --> <input>:1:3"
    assert lines[2] == "1 | x-y"
    assert lines[3] == " " * 6 + "^"
    assert "repeated placeholder" in lines
    assert "1 | {a}-{a}" in lines
    assert " " * 8 + "^^^" in lines


@pytest.mark.parametrize(
    "pattern,text,pos,fragment",
    [
        ("{a}/tmp/{b}", "xyz", 0, "expected '/tmp/' after position 0"),
        ("http://{host}/{path}", "ftp://a/b", 0, "expected 'http://' at the start of the input"),
        ("{name}.txt", "notes.csv", 0, "expected '.txt' at the end of the input"),
        ("{a}.{b}.txt", "x.txt", 2, "expected '.txt' at the end of the input"),
        ("{a}-{b}+{c}", "1-2", 2, "expected '+' after position 2"),
    ],
)
def test_segment_mismatch(pattern: str, text: str, pos: int, fragment: str) -> None:
    with pytest.raises(PatternMismatchError) as excinfo:
        match(Template.compile(pattern), text)
    err = excinfo.value
    assert err.diagnostic.code == "PP301"
    assert int(err.diagnostic.span.start) == pos
    assert fragment in err.message
    assert err.pattern == pattern
    assert err.input == text
    assert isinstance(err, ValueError)


def test_mismatch_caret_at_end_of_input() -> None:
    with pytest.raises(PatternMismatchError) as excinfo:
        match(Template.compile("{a}-{b}+{c}"), "1-")
    lines = str(excinfo.value).splitlines()
    assert lines[1] == "  --> <input>:1:3"
    assert lines[2] == "1 | 1-"
    assert lines[3] == " " * 6 + "^"
