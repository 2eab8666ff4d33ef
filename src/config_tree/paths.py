"""
Dot-path navigation over a nested settings tree.

A key such as ``"database.pool.size"`` is split on ``.`` into segments and each
segment addresses one level of nested dictionaries. All helpers operate on
plain ``dict`` trees and never raise on missing paths.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, MutableMapping

logger = logging.getLogger("config_tree.paths")
logger.addHandler(logging.NullHandler())

__all__ = [
    "MISSING",
    "SEPARATOR",
    "split_key",
    "resolve",
    "assign",
    "unassign",
    "flatten",
]

SEPARATOR = "."


class _Missing:
    """Sentinel type for absent values, distinct from a stored ``None``."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def split_key(key: str) -> List[str]:
    return key.split(SEPARATOR)


def resolve(key: str, tree: Mapping[str, Any]) -> Any:
    """
    Walk ``tree`` along the segments of ``key``.

    Returns the terminal value (which may itself be a nested mapping) or
    ``MISSING`` when a segment is absent or an intermediate node is not a mapping.
    """
    current: Any = tree
    for segment in split_key(key):
        if not isinstance(current, Mapping) or segment not in current:
            logger.debug("resolve(%r) -> MISSING at segment %r", key, segment)
            return MISSING
        current = current[segment]
    return current


def assign(key: str, value: Any, tree: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Set ``value`` at the path named by ``key``, creating intermediate dicts.

    An intermediate segment holding a non-mapping value is replaced by an empty
    dict before descending; the previous value is lost. ``tree`` is mutated in
    place and returned.
    """
    *parents, leaf = split_key(key)
    current: MutableMapping[str, Any] = tree
    for segment in parents:
        child = current.get(segment)
        if not isinstance(child, MutableMapping):
            if segment in current:
                logger.debug(
                    "assign(%r) replacing non-mapping %s at segment %r",
                    key,
                    type(child).__name__,
                    segment,
                )
            child = {}
            current[segment] = child
        current = child
    current[leaf] = value
    return tree


def unassign(key: str, tree: MutableMapping[str, Any]) -> bool:
    *parents, leaf = split_key(key)
    current: Any = tree
    for segment in parents:
        current = current.get(segment) if isinstance(current, Mapping) else None
        if not isinstance(current, MutableMapping):
            return False
    if leaf in current:
        del current[leaf]
        return True
    return False


def flatten(tree: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings into ``{"a.b.c": leaf}`` form.

    When two paths collide (a literal ``"a.b"`` key next to a nested
    ``{"a": {"b": ...}}``) the entry produced last in traversal order wins.
    Empty nested mappings produce no entry; lists are treated as leaves.
    """
    result: Dict[str, Any] = {}
    for key, value in tree.items():
        full_key = f"{prefix}{SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            result.update(flatten(value, full_key))
        else:
            result[full_key] = value
    return result
