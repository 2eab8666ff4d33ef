from __future__ import annotations

import logging

from .exceptions import ImmutableConfigurationError

logger = logging.getLogger("config_tree.locks")
logger.addHandler(logging.NullHandler())


class ImmutableGuard:
    """Write barrier whose state is fixed when it is created."""

    __slots__ = ("_immutable",)

    def __init__(self, immutable: bool = False) -> None:
        self._immutable = bool(immutable)

    def ensure_mutable(self, operation: str = "modify") -> None:
        if self._immutable:
            logger.error("Attempted %s on immutable configuration.", operation)
            raise ImmutableConfigurationError(
                f"Cannot {operation} immutable configuration."
            )

    def is_immutable(self) -> bool:
        return self._immutable
