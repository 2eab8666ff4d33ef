from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Union

from .exceptions import UnsupportedFormatError

logger = logging.getLogger("config_tree.formats")
logger.addHandler(logging.NullHandler())


class ConfigFormat(str, Enum):
    STRUCTURED = "structured"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def coerce(cls, value: "ConfigFormat | str") -> "ConfigFormat":
        """Accept a member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered in (member.value, member.name.lower()):
                    return member
        logger.error("Unsupported configuration format: %r", value)
        raise UnsupportedFormatError(f"Unsupported configuration format: {value!r}")

    @classmethod
    def from_path(cls, path: Union[str, "os.PathLike[str]"]) -> "ConfigFormat":
        suffix = Path(path).suffix.lower()
        try:
            return _SUFFIXES[suffix]
        except KeyError:
            logger.error("Cannot infer configuration format from suffix %r", suffix)
            raise UnsupportedFormatError(
                f"Cannot infer configuration format from file name: {os.fspath(path)}"
            ) from None


_SUFFIXES = {
    ".py": ConfigFormat.STRUCTURED,
    ".pyconf": ConfigFormat.STRUCTURED,
    ".json": ConfigFormat.JSON,
    ".yaml": ConfigFormat.YAML,
    ".yml": ConfigFormat.YAML,
}
