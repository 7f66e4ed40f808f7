from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

# Placeholder names are the whitespace-trimmed text before the format separator;
# any text is allowed, including the empty string for "{}".
ParamName: TypeAlias = str

# Values are rendered through str(); None means "unset".
ParamValue: TypeAlias = Any

ValueMap: TypeAlias = Mapping[ParamName, ParamValue]
ValueItems: TypeAlias = ValueMap | Iterable[tuple[ParamName, ParamValue]]
