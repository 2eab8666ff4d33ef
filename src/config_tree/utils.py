from __future__ import annotations

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, Mapping

__all__ = [
    "_immutable_copy",
    "_owned_tree",
    "_redact_for_log",
]

_SECRET_MARKERS = ("secret", "password", "passwd", "token", "api_key", "key")


def _immutable_copy(value: Any) -> Any:
    try:
        return _recursive_immutable_copy(value)
    except Exception as e:
        raise ValueError("Value is not deepcopy-able") from e


def _recursive_immutable_copy(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_recursive_immutable_copy(v) for v in value)
    if isinstance(value, Mapping):
        return MappingProxyType({k: _recursive_immutable_copy(v) for k, v in value.items()})
    return deepcopy(value)


def _owned_tree(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Deep-copy ``data`` into plain nested dicts owned by the caller."""
    out: Dict[str, Any] = {}
    for k, v in data.items():
        out[k] = _owned_tree(v) if isinstance(v, Mapping) else deepcopy(v)
    return out


def _redact_for_log(name: str, value: Any) -> str:
    """
    Redact likely secrets in logs.
    """
    lowered = str(name).lower()
    if any(s in lowered for s in _SECRET_MARKERS):
        return "***"
    try:
        return repr(value)
    except Exception:
        return "<unreprable>"
