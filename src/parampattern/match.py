"""
Inverse of rendering: recover placeholder values from an input string.

Literal segments are plain text, so matching anchors on them instead of
building a regex: the leading segment must be a prefix of the input, each
interior segment is taken at its first occurrence after the cursor, and a
non-empty trailing segment must be a suffix. Whatever lies between two
anchors is the value of the placeholder separating them.
"""

from __future__ import annotations

from dataclasses import dataclass

from parampattern.constants import CONFLICTING_VALUES, INPUT_LABEL, SEGMENT_NOT_FOUND
from parampattern.core import ParamName
from parampattern.errors import PatternMismatchError
from parampattern.placeholder.model import Occurrence
from parampattern.reporting.diagnostics import Diagnostic, Related, Severity
from parampattern.source import Source, SourceSpan
from parampattern.template import Template


@dataclass(frozen=True, slots=True)
class Capture:
    occurrence: Occurrence
    span: SourceSpan  # in the input
    value: str


def _segment_mismatch(tpt: Template, inp: Source, cursor: int, seg_idx: int) -> PatternMismatchError:
    expected = tpt.literal(seg_idx)
    if seg_idx == 0:
        where = "at the start of the input"
    elif seg_idx == len(tpt.segments) - 1:
        where = "at the end of the input"
    else:
        where = f"after position {cursor}"
    message = f"Input does not match pattern: expected {expected!r} {where}"
    return PatternMismatchError(
        message,
        Diagnostic(
            message=message,
            severity=Severity.ERROR,
            span=SourceSpan.point(cursor),
            source=inp,
            code=SEGMENT_NOT_FOUND,
            related=[Related("expected by pattern", tpt.segments[seg_idx], tpt.source)],
        ),
    )


def _conflict(tpt: Template, inp: Source, first: Capture, second: Capture) -> PatternMismatchError:
    name = second.occurrence.name
    message = (
        f"Parameter {name!r} matched conflicting values "
        f"{first.value!r} and {second.value!r}"
    )
    return PatternMismatchError(
        message,
        Diagnostic(
            message=message,
            severity=Severity.ERROR,
            span=second.span,
            source=inp,
            code=CONFLICTING_VALUES,
            related=[
                Related("repeated placeholder", second.occurrence.span, tpt.source),
                Related(f"first value of {name!r}", first.span, inp),
            ],
            hint="Every occurrence of a placeholder must hold the same text.",
        ),
    )


def match(tpt: Template, text: str) -> dict[ParamName, str]:
    """
    Align `text` with the literal segments of `tpt` and return name -> captured text,
    in first-appearance order. Raises PatternMismatchError when a segment cannot be
    found or a repeated placeholder captures two different values.
    """
    if not tpt.occurrences:
        return {}

    inp = Source.from_string(text, INPUT_LABEL)
    last = len(tpt.occurrences)

    leading = tpt.literal(0)
    if not text.startswith(leading):
        raise _segment_mismatch(tpt, inp, 0, 0)
    cursor = len(leading)

    captures: dict[ParamName, Capture] = {}
    for i, occ in enumerate(tpt.occurrences, start=1):
        anchor = tpt.literal(i)
        value_start = cursor

        if i < last:
            value_end = text.find(anchor, cursor)
            if value_end < 0:
                raise _segment_mismatch(tpt, inp, cursor, i)
            cursor = value_end + len(anchor)
        else:
            value_end = len(text) - len(anchor)
            if value_end < cursor or not text.endswith(anchor):
                raise _segment_mismatch(tpt, inp, cursor, i)
            cursor = len(text)

        cap = Capture(occ, SourceSpan.from_ints(value_start, value_end), text[value_start:value_end])
        prev = captures.get(occ.name)
        if prev is None:
            captures[occ.name] = cap
        elif prev.value != cap.value:
            raise _conflict(tpt, inp, prev, cap)

    return {name: cap.value for name, cap in captures.items()}
