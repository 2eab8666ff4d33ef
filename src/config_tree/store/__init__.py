from __future__ import annotations

from .adaptors import FileAdapter, PersistanceAdapterProtocol
from .manager import TreeStore

__all__ = ["FileAdapter", "PersistanceAdapterProtocol", "TreeStore"]
