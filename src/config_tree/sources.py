"""
Loaders that turn construction sources into a plain settings mapping.

``Settings.from_*`` wraps the mappings returned here into store instances.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from config_tree import serialization
from config_tree.exceptions import InvalidConfigurationError
from config_tree.formats import ConfigFormat

logger = logging.getLogger("config_tree.sources")
logger.addHandler(logging.NullHandler())

__all__ = [
    "Source",
    "read_literal_file",
    "resolve_source",
    "environment_values",
]

Source = Union[Mapping[str, Any], Callable[[], Mapping[str, Any]], str, "os.PathLike[str]"]


def read_literal_file(path: Union[str, "os.PathLike[str]"]) -> Dict[str, Any]:
    """
    Read a structured-literal settings file.

    Raises:
    - ConfigFileNotFoundError: If ``path`` does not exist.
    - InvalidConfigurationError: If the literal in the file is not a mapping.
    - SerializationError: If the file is not a single literal.
    """
    return serialization.read_file(path, ConfigFormat.STRUCTURED)


def resolve_source(source: Source) -> Dict[str, Any]:
    """
    Produce a settings mapping from a producer function, a mapping or a file path.

    A producer is called with no arguments and must return a mapping. A string
    or path-like is only treated as a structured-literal file when it exists.
    """
    if callable(source):
        data = source()
        if not isinstance(data, Mapping):
            logger.error("Configuration producer returned %s", type(data).__name__)
            raise InvalidConfigurationError(
                f"Configuration producer must return a mapping, got {type(data).__name__}."
            )
        return dict(data)

    if isinstance(source, Mapping):
        return dict(source)

    if isinstance(source, (str, os.PathLike)) and Path(source).is_file():
        return read_literal_file(source)

    logger.error("Invalid configuration source: %r", source)
    raise InvalidConfigurationError(f"Invalid configuration source: {source!r}")


def environment_values(
    keys: Iterable[str],
    prefix: str = "",
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Optional[str]]:
    """
    Map each key to the environment variable ``(prefix + key).upper()``.

    Missing and empty variables map to ``None``. ``environ`` defaults to
    ``os.environ``.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Optional[str]] = {}
    for key in keys:
        env_key = f"{prefix}{key}".upper()
        values[key] = env.get(env_key) or None
        logger.debug("Environment %s -> %s", env_key, "set" if values[key] is not None else "unset")
    return values
