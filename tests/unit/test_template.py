from __future__ import annotations

from types import MappingProxyType

import pytest

from parampattern.errors import InvalidArgumentError, InvalidPatternError
from parampattern.template import Template


def _literals(tpt: Template) -> list[str]:
    return [tpt.literal(i) for i in range(len(tpt.segments))]


def test_segments_surround_occurrences() -> None:
    tpt = Template.compile("{rootDir}/tmp/{parentDir}/{fileName}")
    assert len(tpt.segments) == len(tpt.occurrences) + 1
    assert _literals(tpt) == ["", "/tmp/", "/", ""]


def test_leading_and_trailing_literals() -> None:
    tpt = Template.compile("http://{host}:{port}/index.html")
    assert _literals(tpt) == ["http://", ":", "/index.html"]


def test_no_placeholders_single_segment() -> None:
    tpt = Template.compile("www.google.com")
    assert tpt.occurrences == ()
    assert _literals(tpt) == ["www.google.com"]
    assert tpt.names == ()


def test_names_in_first_appearance_order() -> None:
    tpt = Template.compile("{b}/{a}/{b}")
    assert tpt.names == ("b", "a")
    assert len(tpt.params["b"]) == 2
    assert isinstance(tpt.params, MappingProxyType)
    with pytest.raises(TypeError):
        tpt.params["c"] = ()  # type: ignore[index]


def test_format_of_uses_first_occurrence_with_a_format() -> None:
    tpt = Template.compile("{d}-{d, yyyy}-{d, MM}")
    assert tpt.format_of("d") == "yyyy"
    assert Template.compile("{d}").format_of("d") is None


@pytest.mark.parametrize(
    "pattern,open_,close",
    [("", "{", "}"), ("   ", "{", "}"), ("{a}", "", "}"), ("{a}", "{", " ")],
)
def test_blank_arguments(pattern: str, open_: str, close: str) -> None:
    with pytest.raises(InvalidArgumentError):
        Template.compile(pattern, open_, close)


def test_adjacent_rejected() -> None:
    with pytest.raises(InvalidPatternError):
        Template.compile("{a}{b}")


def test_from_file(tmp_path) -> None:
    p = tmp_path / "url.txt"
    p.write_text("https://{host}/{path}", encoding="utf-8")
    tpt = Template.from_file(p)
    assert tpt.names == ("host", "path")
    assert tpt.pattern == "https://{host}/{path}"


def test_from_blank_file(tmp_path) -> None:
    p = tmp_path / "blank.txt"
    p.write_text("  \n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError):
        Template.from_file(p)
