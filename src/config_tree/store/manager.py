from __future__ import annotations

import logging
from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from config_tree import paths
from config_tree.exceptions import InvalidConfigurationError
from config_tree.store.adaptors import PersistanceAdapterProtocol
from config_tree.utils import _immutable_copy, _owned_tree, _redact_for_log

logger = logging.getLogger("config_tree.store")
logger.addHandler(logging.NullHandler())


class TreeStore:
    """
    Owner of the nested settings tree.

    Every lookup tries the literal top-level key first and falls back to
    dot-path navigation, so ``{"app.name": ...}`` and ``{"app": {"name": ...}}``
    are both reachable as ``"app.name"``.
    """

    def __init__(
        self,
        data: Optional[Mapping[str, Any]] = None,
        persistance_adapter: Optional[PersistanceAdapterProtocol] = None,
    ) -> None:
        if data is not None and not isinstance(data, Mapping):
            logger.error("TreeStore data must be a mapping, got %s", type(data).__name__)
            raise InvalidConfigurationError(
                f"Settings must be a mapping, got {type(data).__name__}."
            )
        self._tree: Dict[str, Any] = _owned_tree(data or {})
        self._persistance_adapter = persistance_adapter
        if self._persistance_adapter is not None:
            self.load()

        logger.debug("TreeStore init top_level_keys=%d", len(self._tree))

    def lookup(self, key: str) -> Any:
        """Return the stored value (not a copy) or ``paths.MISSING``."""
        if key in self._tree:
            return self._tree[key]
        return paths.resolve(key, self._tree)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.lookup(key)
        if value is paths.MISSING:
            return default
        return deepcopy(value)

    def has(self, key: str) -> bool:
        return self.lookup(key) is not paths.MISSING

    def set(self, key: str, value: Any) -> None:
        value = _owned_tree(value) if isinstance(value, Mapping) else deepcopy(value)
        if key in self._tree:
            self._tree[key] = value
        else:
            paths.assign(key, value, self._tree)
        logger.debug("Store.set key=%r value=%s", key, _redact_for_log(key, value))

    def remove(self, key: str) -> bool:
        if key in self._tree:
            del self._tree[key]
            removed = True
        else:
            removed = paths.unassign(key, self._tree)
        logger.debug("Store.remove key=%r removed=%s", key, removed)
        return removed

    def keys(self) -> Tuple[str, ...]:
        return tuple(paths.flatten(self._tree))

    def flattened(self) -> Dict[str, Any]:
        return {k: deepcopy(v) for k, v in paths.flatten(self._tree).items()}

    def _adapter(
        self, adapter: Optional[PersistanceAdapterProtocol], action: str
    ) -> PersistanceAdapterProtocol:
        chosen = adapter if adapter is not None else self._persistance_adapter
        if chosen is None:
            logger.error("Cannot %s settings tree: no persistance adapter given", action)
            raise RuntimeError(f"No persistance adapter to {action} the settings tree")
        return chosen

    def load(self, adapter: Optional[PersistanceAdapterProtocol] = None) -> None:
        """
        Replace the tree with what ``adapter`` (or the attached adapter) returns.
        The current tree is kept when the adapter fails or returns a non-mapping.
        """
        source = self._adapter(adapter, "load")
        loaded = source.load()
        if not isinstance(loaded, Mapping):
            logger.error("%r returned %s instead of a mapping", source, type(loaded).__name__)
            raise InvalidConfigurationError("Persistance adapter must load a mapping")
        self._tree = _owned_tree(loaded)
        logger.debug("TreeStore loaded top_level_keys=%d from %r", len(self._tree), source)

    def save(self, adapter: Optional[PersistanceAdapterProtocol] = None) -> None:
        """Hand a detached copy of the tree to ``adapter`` (or the attached adapter)."""
        target = self._adapter(adapter, "save")
        target.save(self.snapshot_internal())
        logger.debug("TreeStore saved top_level_keys=%d to %r", len(self._tree), target)

    def snapshot_internal(self) -> Dict[str, Any]:
        return _owned_tree(self._tree)

    def snapshot_public(self) -> MappingProxyType[str, Any]:
        return _immutable_copy(self._tree)

    def clear(self) -> None:
        self._tree.clear()

    def __len__(self) -> int:
        return len(self._tree)
