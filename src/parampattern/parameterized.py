from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from parampattern.constants import DEFAULT_CLOSE_BRACKET, DEFAULT_OPEN_BRACKET
from parampattern.core import ParamName, ParamValue, ValueItems
from parampattern.errors import PatternMismatchError
from parampattern.match import match
from parampattern.template import Template
from parampattern.values import ValueStore


class ParameterizedString:
    """
    A string with named parameters, e.g. ``"zero/{one}/{two}/{one}"``.

    Use `set` to assign values and `apply_values` to obtain the string with every
    known parameter replaced. Parameters without a value (and no default) are
    left untouched, so the string above with ``one`` set to 27 evaluates to
    ``"zero/27/{two}/27"``. `parse` does the reverse: it reads the parameter
    values back out of a string built from the same pattern.

    The compiled pattern is immutable and shared between copies; the values are
    not. To fill the same pattern from several threads, give each one a `copy()`.
    """

    __slots__ = ("_template", "_store")

    def __init__(
        self,
        pattern: str,
        open_bracket: str = DEFAULT_OPEN_BRACKET,
        close_bracket: str = DEFAULT_CLOSE_BRACKET,
    ) -> None:
        self._template = Template.compile(pattern, open_bracket, close_bracket)
        self._store = ValueStore(self._template)

    @classmethod
    def from_template(cls, template: Template) -> ParameterizedString:
        obj = cls.__new__(cls)
        obj._template = template
        obj._store = ValueStore(template)
        return obj

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        open_bracket: str = DEFAULT_OPEN_BRACKET,
        close_bracket: str = DEFAULT_CLOSE_BRACKET,
        encoding: str = "utf-8",
    ) -> ParameterizedString:
        return cls.from_template(Template.from_file(path, open_bracket, close_bracket, encoding))

    # ----- structure -----

    @property
    def template(self) -> Template:
        return self._template

    @property
    def parameters(self) -> tuple[ParamName, ...]:
        """Distinct parameter names, in order of first appearance."""
        return self._template.names

    def contains(self, name: ParamName) -> bool:
        return name in self._template.params

    def __contains__(self, name: object) -> bool:
        return name in self._template.params

    def format(self, name: ParamName) -> str | None:
        """Format hint of a parameter (``{DATE, yyyy-MM-dd}``), or None without one."""
        self._store.check_name(name)
        return self._template.format_of(name)

    # ----- values -----

    def set(self, name: ParamName, value: ParamValue) -> None:
        self._store.set(name, value)

    def set_all(self, values: ValueItems) -> None:
        """Sets several values at once; nothing is assigned if any name is unknown."""
        self._store.set_all(values)

    def get(self, name: ParamName) -> ParamValue:
        return self._store.get(name)

    @property
    def parameter_values(self) -> Mapping[ParamName, ParamValue]:
        """Read-only view of the values currently assigned."""
        return self._store.values

    def clear_values(self) -> None:
        self._store.clear()

    @property
    def default_value(self) -> ParamValue:
        return self._store.default_value

    def set_default_value(self, value: ParamValue) -> None:
        """
        Value rendered in place of any parameter left unset. Pass None to go back
        to keeping unset placeholders as they are.
        """
        self._store.set_default_value(value)

    @property
    def convert_default_to_absent(self) -> bool:
        return self._store.convert_default_to_absent

    def set_convert_default_to_absent(self, convert: bool) -> None:
        """
        When enabled, values whose text equals the default value are stored as
        unset, including values already assigned and values read by `parse`.
        """
        self._store.set_convert_default_to_absent(convert)

    # ----- render / parse -----

    def apply_values(self) -> str:
        return self._store.render()

    def parse(self, text: str) -> dict[ParamName, ParamValue]:
        """
        Reads the value of each parameter from `text`, assigns them, and returns
        them by name. On mismatch every value is cleared before the error propagates.
        """
        try:
            captured = match(self._template, text)
        except PatternMismatchError:
            self._store.clear()
            raise

        self._store.set_all(captured)
        return {name: self._store.get(name) for name in captured}

    # ----- surrounding content -----

    def index_before_first_parameter(self) -> int:
        """Offset of the first open bracket, or -1 without parameters."""
        occs = self._template.occurrences
        return occs[0].start if occs else -1

    def index_after_last_parameter(self) -> int:
        """Offset right after the last close bracket, or -1 without parameters."""
        occs = self._template.occurrences
        return occs[-1].end if occs else -1

    def content_before_first_parameter(self) -> str:
        """Text before the first parameter; the whole pattern without parameters."""
        return self._template.literal(0)

    def content_after_last_parameter(self) -> str:
        """Text after the last parameter; empty without parameters."""
        if not self._template.occurrences:
            return ""
        return self._template.literal(-1)

    # ----- copies & dunders -----

    def copy(self) -> ParameterizedString:
        """Independent copy of the values; the compiled pattern is shared."""
        obj = self.__class__.__new__(self.__class__)
        obj._template = self._template
        obj._store = self._store.copy()
        return obj

    clone = copy

    def __copy__(self) -> ParameterizedString:
        return self.copy()

    def __str__(self) -> str:
        return self._template.pattern

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._template.pattern!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParameterizedString):
            return NotImplemented
        return (
            self._template.pattern == other._template.pattern
            and self._template.delimiters == other._template.delimiters
            and dict(self.parameter_values) == dict(other.parameter_values)
        )

    __hash__ = None  # type: ignore[assignment]
