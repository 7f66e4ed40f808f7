from __future__ import annotations

from parampattern.core import ParamValue, ValueMap
from parampattern.template import Template


def _render_literal(val: ParamValue) -> str:
    return val if isinstance(val, str) else str(val)


def render(tpt: Template, values: ValueMap, default: ParamValue = None) -> str:
    """
    Substitute `values` into the template.

    Unset placeholders fall back to `default`; when there is no default either,
    the placeholder text (delimiters included) is kept. Literal segments
    and occurrences alternate, so the source offsets are never shifted by a
    substitution.
    """
    chunks: list[str] = [tpt.literal(0)]
    for i, occ in enumerate(tpt.occurrences, start=1):
        val = values.get(occ.name)
        if val is None:
            val = default
        chunks.append(occ.text if val is None else _render_literal(val))
        chunks.append(tpt.literal(i))

    return "".join(chunks)
