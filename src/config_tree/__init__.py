"""
config_tree: a hierarchical, dot-path addressable settings store.

- Reads and writes nested settings through ``"section.key"`` paths.
- Optional immutability fixed at construction.
- Per-key validator predicates checked before every write.
- Round trips through structured-literal, JSON and YAML files.
"""

from __future__ import annotations

from config_tree.config import Settings
from config_tree.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    ImmutableConfigurationError,
    InvalidConfigurationError,
    SerializationError,
    UnsupportedFormatError,
)
from config_tree.formats import ConfigFormat
from config_tree.store import FileAdapter, PersistanceAdapterProtocol, TreeStore
from config_tree.validation import ValidatorProtocol

__all__ = [
    "Settings",
    "ConfigFormat",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    "ImmutableConfigurationError",
    "InvalidConfigurationError",
    "SerializationError",
    "UnsupportedFormatError",
    "FileAdapter",
    "PersistanceAdapterProtocol",
    "TreeStore",
    "ValidatorProtocol",
]
