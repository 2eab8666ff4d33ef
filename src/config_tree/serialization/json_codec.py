from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from config_tree.exceptions import SerializationError
from config_tree.formats import ConfigFormat

from .base import _ensure_mapping

logger = logging.getLogger("config_tree.serialization")
logger.addHandler(logging.NullHandler())


class JsonCodec:
    format = ConfigFormat.JSON

    def __init__(self, indent: int = 4) -> None:
        self._indent = indent

    def encode(self, tree: Mapping[str, Any]) -> str:
        try:
            return (
                json.dumps(dict(tree), indent=self._indent, ensure_ascii=False, allow_nan=False)
                + "\n"
            )
        except (TypeError, ValueError) as e:
            logger.error("JSON encoding failed: %s", e)
            raise SerializationError(f"Cannot encode settings as JSON: {e}") from e

    def decode(self, text: str, source: str = "<string>") -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("Malformed JSON in %s: %s", source, e)
            raise SerializationError(f"Malformed JSON in {source}: {e}") from e
        return _ensure_mapping(data, source)
