from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from types import MappingProxyType

from parampattern.constants import UNKNOWN_PARAMETER
from parampattern.core import ParamName, ParamValue, ValueItems
from parampattern.errors import UnknownParameterError
from parampattern.reporting.diagnostics import Diagnostic, Severity
from parampattern.render import render
from parampattern.template import Template


class ValueStore:
    """
    Mutable name -> value assignments for one Template.

    The Template is shared and never modified; each store owns its values, its
    default value policy and its render cache. Not thread-safe: give every
    concurrent user its own `copy()`.
    """

    __slots__ = (
        "template",
        "_values",
        "_default_value",
        "_convert_default_to_absent",
        "_rendered",
        "_dirty",
    )

    def __init__(
        self,
        template: Template,
        *,
        default_value: ParamValue = None,
        convert_default_to_absent: bool = False,
    ) -> None:
        self.template = template
        self._values: dict[ParamName, ParamValue] = {}
        self._default_value = default_value
        self._convert_default_to_absent = convert_default_to_absent
        self._rendered: str | None = None
        self._dirty = True

    # ----- name validation -----

    def check_name(self, name: ParamName) -> None:
        if name in self.template.params:
            return
        names = ", ".join(repr(n) for n in self.template.names) or "(none)"
        message = f"Parameter {name!r} not found in {self.template.pattern!r}"
        raise UnknownParameterError(
            message,
            Diagnostic(
                message=message,
                severity=Severity.ERROR,
                span=self.template.source.full_span(),
                source=self.template.source,
                code=UNKNOWN_PARAMETER,
                notes=[f"Available parameters: {names}"],
            ),
        )

    # ----- default value policy -----

    @property
    def default_value(self) -> ParamValue:
        return self._default_value

    @property
    def convert_default_to_absent(self) -> bool:
        return self._convert_default_to_absent

    def set_default_value(self, value: ParamValue) -> None:
        self._default_value = value
        self._drop_defaults()
        self._dirty = True

    def set_convert_default_to_absent(self, convert: bool) -> None:
        self._convert_default_to_absent = convert
        self._drop_defaults()
        self._dirty = True

    def _is_default(self, value: ParamValue) -> bool:
        if not self._convert_default_to_absent or self._default_value is None:
            return False
        return str(value) == str(self._default_value)

    def _drop_defaults(self) -> None:
        # keeps stored values genuinely different from the default
        for name in [n for n, v in self._values.items() if self._is_default(v)]:
            del self._values[name]

    # ----- values -----

    def set(self, name: ParamName, value: ParamValue) -> None:
        self.check_name(name)
        if value is None or self._is_default(value):
            self._values.pop(name, None)
        else:
            self._values[name] = value
        self._dirty = True

    def set_all(self, values: ValueItems) -> None:
        items = list(values.items() if isinstance(values, Mapping) else values)
        for name, _ in items:
            self.check_name(name)
        for name, value in items:
            self.set(name, value)

    def get(self, name: ParamName) -> ParamValue:
        self.check_name(name)
        return self._values.get(name)

    @property
    def values(self) -> Mapping[ParamName, ParamValue]:
        return MappingProxyType(self._values)

    def clear(self) -> None:
        self._values.clear()
        self._dirty = True

    def render(self) -> str:
        if self._dirty or self._rendered is None:
            self._rendered = render(self.template, self._values, self._default_value)
            self._dirty = False
        return self._rendered

    def copy(self) -> ValueStore:
        clone = ValueStore(
            self.template,
            default_value=deepcopy(self._default_value),
            convert_default_to_absent=self._convert_default_to_absent,
        )
        clone._values = deepcopy(self._values)
        return clone
