from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from config_tree.exceptions import SerializationError, UnsupportedFormatError
from config_tree.formats import ConfigFormat

from .base import _ensure_mapping

try:
    import yaml  # PyYAML
except ImportError:  # pragma: no cover - exercised by monkeypatching in tests
    yaml = None

logger = logging.getLogger("config_tree.serialization")
logger.addHandler(logging.NullHandler())


def yaml_available() -> bool:
    return yaml is not None


def _require_yaml() -> None:
    if yaml is None:
        logger.error("YAML requested but PyYAML is not installed")
        raise UnsupportedFormatError(
            "YAML support is not enabled. Install the 'yaml' extra (PyYAML)."
        )


class YamlCodec:
    format = ConfigFormat.YAML

    def encode(self, tree: Mapping[str, Any]) -> str:
        _require_yaml()
        try:
            return yaml.safe_dump(
                dict(tree),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        except yaml.YAMLError as e:
            logger.error("YAML encoding failed: %s", e)
            raise SerializationError(f"Cannot encode settings as YAML: {e}") from e

    def decode(self, text: str, source: str = "<string>") -> Dict[str, Any]:
        _require_yaml()
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.error("Malformed YAML in %s: %s", source, e)
            raise SerializationError(f"Malformed YAML in {source}: {e}") from e
        if data is None:
            return {}
        return _ensure_mapping(data, source)
