from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Protocol, runtime_checkable

from config_tree.exceptions import InvalidConfigurationError
from config_tree.formats import ConfigFormat

logger = logging.getLogger("config_tree.serialization")
logger.addHandler(logging.NullHandler())


@runtime_checkable
class Codec(Protocol):
    format: ConfigFormat

    def encode(self, tree: Mapping[str, Any]) -> str: ...

    def decode(self, text: str, source: str = "<string>") -> Dict[str, Any]: ...


def _ensure_mapping(data: Any, source: str) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        logger.error("Configuration root in %s is %s, not a mapping", source, type(data).__name__)
        raise InvalidConfigurationError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {source}"
        )
    return dict(data)
