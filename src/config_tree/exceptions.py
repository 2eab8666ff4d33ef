from __future__ import annotations

from typing import Dict


class ConfigError(Exception):
    """Base config exception."""


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """Raised when a configuration file does not exist."""


class InvalidConfigurationError(ConfigError):
    """Raised when a configuration source does not resolve to a mapping."""


class ImmutableConfigurationError(ConfigError):
    """Raised when attempting mutation on an immutable configuration."""


class ConfigValidationError(ConfigError):
    """Raised when a registered validator rejects a value."""

    def __init__(
        self, errors: Dict[str, str], key: str | None = None, value: object | None = None
    ) -> None:
        self.errors = errors
        self.key = key
        self.value = value
        msg = f"Validation errors: {errors}"
        if key is not None:
            msg += f" (key: {key}, value: {value!r})"
        super().__init__(msg)


class SerializationError(ConfigError):
    """Raised when encoding, decoding or writing a configuration file fails."""


class UnsupportedFormatError(ConfigError):
    """Raised when a file format is unknown or its runtime support is missing."""
