from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from config_tree.exceptions import ConfigValidationError
from config_tree.utils import _redact_for_log

from .protocol import ValidatorProtocol

logger = logging.getLogger("config_tree.validation")
logger.addHandler(logging.NullHandler())


class ValidatorRegistry:
    """
    Per-key predicate registry.

    Validators are keyed by the literal key string passed to ``register``; a key
    is never split into dot-path segments for lookup.
    """

    def __init__(self) -> None:
        self._validators: Dict[str, ValidatorProtocol] = {}

    def register(self, key: str, validator: ValidatorProtocol) -> None:
        if not callable(validator):
            raise TypeError("Validator must be callable")
        if key in self._validators:
            logger.debug("Validator overridden for %r", key)
        self._validators[key] = validator
        logger.debug("Validator registered for %r (total=%d)", key, len(self._validators))

    def get(self, key: str) -> Optional[ValidatorProtocol]:
        return self._validators.get(key)

    def has(self, key: str) -> bool:
        return key in self._validators

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._validators)

    def validate(self, key: str, value: Any) -> None:
        """
        Run the validator registered for ``key`` against ``value``.

        Keys without a validator accept any value. A validator that returns a
        falsy result or raises is reported as ``ConfigValidationError``.
        """
        validator = self._validators.get(key)
        if validator is None:
            return
        try:
            valid = validator(value)
        except Exception as e:
            logger.error(
                "Validator for %r raised on %s: %s", key, _redact_for_log(key, value), e
            )
            raise ConfigValidationError(
                {key: f"Validator raised exception: {e}"}, key, value
            ) from e
        if not valid:
            logger.error("Validator rejected %r=%s", key, _redact_for_log(key, value))
            raise ConfigValidationError({key: "Validator returned False."}, key, value)

    def clear(self) -> None:
        self._validators.clear()

    def __len__(self) -> int:
        return len(self._validators)
