from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Protocol, Union

from typing_extensions import runtime_checkable

from config_tree import serialization
from config_tree.formats import ConfigFormat

logger = logging.getLogger("config_tree.store")
logger.addHandler(logging.NullHandler())


@runtime_checkable
class PersistanceAdapterProtocol(Protocol):
    def save(self, config: Dict[str, Any]) -> None: ...

    def load(self) -> Dict[str, Any]: ...


class FileAdapter:
    """Persist a settings tree to a single file through the codec set."""

    def __init__(
        self,
        path: Union[str, "os.PathLike[str]"],
        format: "ConfigFormat | str | None" = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path)
        self.format = serialization.resolve_format(self.path, format)
        self._encoding = encoding
        logger.debug("FileAdapter path=%s format=%s", self.path, self.format.value)

    def save(self, config: Dict[str, Any]) -> None:
        serialization.write_file(self.path, config, self.format, encoding=self._encoding)

    def load(self) -> Dict[str, Any]:
        return serialization.read_file(self.path, self.format, encoding=self._encoding)

    def exists(self) -> bool:
        return self.path.is_file()

    def __repr__(self) -> str:
        return f"<FileAdapter path={str(self.path)!r} format={self.format.value}>"
