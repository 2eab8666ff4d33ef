"""
Permissive scalar coercion used by ``Settings.get_typed``.

Conversions never raise: values that cannot be parsed degrade to the zero value
of the requested kind (``0``, ``0.0``, ``False``, ``""``), and numeric strings
are read up to their longest numeric prefix (``"42px"`` -> ``42``). Booleans
follow Python truthiness, so ``"false"`` is true; only ``"0"`` and ``""`` are
false among strings.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Mapping, Union

__all__ = ["coerce", "to_int", "to_float", "to_bool", "to_str"]

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _numeric_prefix(text: str) -> float:
    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


def to_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return _numeric_prefix(value)
    if isinstance(value, (Mapping, list, tuple)):
        return 1.0 if value else 0.0
    return 0.0


def to_int(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    number = to_float(value)
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def to_bool(value: Any) -> bool:
    # plain truthiness, except that "0" is false like the integer it spells
    if isinstance(value, str) and value.strip() == "0":
        return False
    return bool(value)


def to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


_CONVERTERS: Dict[Any, Callable[[Any], Any]] = {
    "int": to_int,
    "integer": to_int,
    int: to_int,
    "float": to_float,
    "double": to_float,
    float: to_float,
    "bool": to_bool,
    "boolean": to_bool,
    bool: to_bool,
    "string": to_str,
    "str": to_str,
    str: to_str,
}


def coerce(value: Any, kind: Union[str, type]) -> Any:
    """Convert ``value`` to ``kind``; unknown kinds return ``value`` unchanged."""
    key = kind.lower() if isinstance(kind, str) else kind
    try:
        converter = _CONVERTERS.get(key)
    except TypeError:
        # unhashable kind
        return value
    if converter is None:
        return value
    return converter(value)
