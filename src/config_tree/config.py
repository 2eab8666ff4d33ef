from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Type, TypeVar, Union

from config_tree import coercion, sources
from config_tree.formats import ConfigFormat

from .locks import ImmutableGuard
from .store.adaptors import FileAdapter
from .store.manager import TreeStore
from .utils import _redact_for_log
from .validation import ValidatorProtocol, ValidatorRegistry

logger = logging.getLogger("config_tree.config")
logger.addHandler(logging.NullHandler())

S = TypeVar("S", bound="Settings")

PathArg = Union[str, "os.PathLike[str]"]

_UNSET = object()


class Settings:
    """
    Hierarchical settings store addressed by dot-paths.

    Values live in a nested dict tree. ``get("db.host")`` first looks for a
    literal top-level ``"db.host"`` key and then walks ``{"db": {"host": ...}}``.
    A store created with ``immutable=True`` rejects ``set`` and ``remove`` for
    its whole lifetime. Instances are not thread-safe; guard shared instances
    with an external lock.
    """

    def __init__(
        self,
        settings: Optional[Mapping[str, Any]] = None,
        immutable: bool = False,
    ) -> None:
        self._guard = ImmutableGuard(immutable)
        self._validators = ValidatorRegistry()
        self._store = TreeStore(settings)
        self._cache: Dict[str, Any] = {}
        logger.debug(
            "Settings created immutable=%s top_level_keys=%d", immutable, len(self._store)
        )

    @property
    def immutable(self) -> bool:
        """Return True if the store rejects mutation."""
        return self._guard.is_immutable()

    # core access
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the value at ``key``, or ``default`` when nothing is stored there.
        """
        return self._store.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Store ``value`` at ``key``, creating intermediate maps for dot-paths.

        Raises ImmutableConfigurationError on an immutable store and
        ConfigValidationError when the validator registered for the literal key
        rejects the value. Nothing is written when either check fails.
        """
        self._guard.ensure_mutable("set")
        self._validators.validate(key, value)
        self._store.set(key, value)
        logger.info("Config set key=%r value=%s", key, _redact_for_log(key, value))
        return True

    def has(self, key: str) -> bool:
        return self._store.has(key)

    def remove(self, key: str) -> bool:
        """
        Remove ``key``. Returns False when nothing was stored there.
        """
        self._guard.ensure_mutable("remove")
        removed = self._store.remove(key)
        if removed:
            logger.info("Config removed key=%r", key)
        return removed

    def all(self) -> MappingProxyType[str, Any]:
        """
        Return a read-only snapshot of the whole tree.

        Nested maps are wrapped in ``MappingProxyType`` and lists become tuples,
        so a stored ``{"a": [1, 2]}`` comes back as ``{"a": (1, 2)}`` and does
        not compare equal to the original map. Use ``get`` for a mutable copy.
        """
        return self._store.snapshot_public()

    def keys(self) -> Tuple[str, ...]:
        """Return the dot-joined path of every leaf value."""
        return self._store.keys()

    # scoped access
    def get_scoped(self, scope: str, key: str, default: Any = None) -> Any:
        return self.get(f"{scope}.{key}", default)

    def set_scoped(self, scope: str, key: str, value: Any) -> bool:
        return self.set(f"{scope}.{key}", value)

    def has_scoped(self, scope: str, key: str) -> bool:
        return self.has(f"{scope}.{key}")

    # cached / typed access
    def get_cached(self, key: str, default: Any = None) -> Any:
        """
        Return the value of ``key`` memoized on first read.

        The cache is never invalidated: later ``set``/``remove`` calls on the
        same key are not reflected here.
        """
        if key not in self._cache:
            self._cache[key] = self.get(key, default)
            logger.debug("Cached key=%r", key)
        return self._cache[key]

    def get_typed(self, key: str, kind: Union[str, type], default: Any = None) -> Any:
        """
        Return ``key`` converted to ``kind`` (``"int"``, ``"float"``, ``"bool"``,
        ``"string"`` or the matching builtin type). Conversion never raises.
        """
        return coercion.coerce(self.get(key, default), kind)

    # validation
    def add_validator(self, key: str, validator: ValidatorProtocol) -> None:
        """
        Register ``validator`` for the literal ``key``, replacing any previous one.
        Values already stored are not re-checked.
        """
        self._validators.register(key, validator)

    # persistence
    def save_to_file(
        self,
        path: PathArg,
        format: "ConfigFormat | str | None" = None,
        *,
        encoding: str = "utf-8",
    ) -> bool:
        """
        Write the tree to ``path``. ``format`` defaults to the one implied by the
        file suffix.
        """
        self._store.save(FileAdapter(path, format, encoding=encoding))
        return True

    @classmethod
    def load_from_file(
        cls: Type[S],
        path: PathArg,
        format: "ConfigFormat | str | None" = None,
        immutable: bool = False,
        *,
        encoding: str = "utf-8",
    ) -> S:
        return cls(FileAdapter(path, format, encoding=encoding).load(), immutable)

    # factories
    @classmethod
    def from_map(cls: Type[S], data: Mapping[str, Any], immutable: bool = False) -> S:
        return cls(data, immutable)

    @classmethod
    def from_literal_file(cls: Type[S], path: PathArg, immutable: bool = False) -> S:
        return cls(sources.read_literal_file(path), immutable)

    @classmethod
    def from_source(cls: Type[S], source: sources.Source, immutable: bool = False) -> S:
        return cls(sources.resolve_source(source), immutable)

    @classmethod
    def from_environment(
        cls: Type[S],
        keys: Iterable[str],
        prefix: str = "",
        immutable: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ) -> S:
        return cls(sources.environment_values(keys, prefix, environ), immutable)

    # mapping-style sugar
    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _UNSET)
        if value is _UNSET:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return (
            self._store.snapshot_internal() == other._store.snapshot_internal()
            and self.immutable == other.immutable
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} immutable={self.immutable} keys={len(self)}>"
