"""
Codec set: one serializer/deserializer pair per ``ConfigFormat``.

``encode``/``decode`` dispatch on the format; ``write_file``/``read_file`` add
the single synchronous write or read around them. Writes are not atomic: a
failed write can leave a truncated file behind.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from config_tree.exceptions import ConfigFileNotFoundError, SerializationError
from config_tree.formats import ConfigFormat

from .base import Codec
from .json_codec import JsonCodec
from .literal import LiteralCodec
from .yaml_codec import YamlCodec, yaml_available

logger = logging.getLogger("config_tree.serialization")
logger.addHandler(logging.NullHandler())

__all__ = [
    "Codec",
    "JsonCodec",
    "LiteralCodec",
    "YamlCodec",
    "decode",
    "encode",
    "get_codec",
    "read_file",
    "resolve_format",
    "write_file",
    "yaml_available",
]

PathArg = Union[str, "os.PathLike[str]"]

_CODECS: Dict[ConfigFormat, Codec] = {
    ConfigFormat.STRUCTURED: LiteralCodec(),
    ConfigFormat.JSON: JsonCodec(),
    ConfigFormat.YAML: YamlCodec(),
}


def get_codec(fmt: "ConfigFormat | str") -> Codec:
    return _CODECS[ConfigFormat.coerce(fmt)]


def resolve_format(path: PathArg, fmt: "ConfigFormat | str | None") -> ConfigFormat:
    if fmt is None:
        return ConfigFormat.from_path(path)
    return ConfigFormat.coerce(fmt)


def encode(tree: Mapping[str, Any], fmt: "ConfigFormat | str") -> str:
    return get_codec(fmt).encode(tree)


def decode(text: str, fmt: "ConfigFormat | str", source: str = "<string>") -> Dict[str, Any]:
    return get_codec(fmt).decode(text, source)


def write_file(
    path: PathArg,
    tree: Mapping[str, Any],
    fmt: "ConfigFormat | str | None" = None,
    *,
    encoding: str = "utf-8",
) -> ConfigFormat:
    resolved = resolve_format(path, fmt)
    content = encode(tree, resolved)
    target = Path(path)
    try:
        # encode before opening so an unencodable tree leaves the file untouched
        data = content.encode(encoding)
        target.write_bytes(data)
    except (OSError, UnicodeEncodeError, LookupError) as e:
        logger.error("Failed to write configuration to %s: %s", target, e)
        raise SerializationError(f"Failed to save configuration to file: {target}") from e
    logger.info("Configuration written to %s format=%s", target, resolved.value)
    return resolved


def read_file(
    path: PathArg,
    fmt: "ConfigFormat | str | None" = None,
    *,
    encoding: str = "utf-8",
) -> Dict[str, Any]:
    source = Path(path)
    if not source.is_file():
        logger.error("Configuration file does not exist: %s", source)
        raise ConfigFileNotFoundError(f"Configuration file does not exist: {source}")
    resolved = resolve_format(source, fmt)
    try:
        text = source.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error("Failed to read configuration from %s: %s", source, e)
        raise SerializationError(f"Failed to read configuration file: {source}") from e
    data = decode(text, resolved, str(source))
    logger.info("Configuration read from %s format=%s keys=%d", source, resolved.value, len(data))
    return data
