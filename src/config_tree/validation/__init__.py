from __future__ import annotations

from .protocol import ValidatorProtocol
from .registry import ValidatorRegistry

__all__ = ["ValidatorProtocol", "ValidatorRegistry"]
