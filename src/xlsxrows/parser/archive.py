from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import IO
from zipfile import BadZipFile, ZipFile

from ..errors import ArchiveEntryNotFound, MalformedDocumentError

logger = getLogger(__name__)


class Archive:
    """Named entries of a zip container, each opened as its own byte stream."""

    def __init__(self, source_path: str | Path) -> None:
        self.source_path = Path(source_path)
        try:
            self._zip = ZipFile(self.source_path)
        except BadZipFile as exc:
            raise MalformedDocumentError(f"Not a zip archive: {self.source_path}") from exc
        self._names = frozenset(self._zip.namelist())
        logger.debug(f"ARCHIVE: opened {self.source_path} with {len(self._names)} entries")

    def list_entries(self) -> frozenset[str]:
        return self._names

    def entry_exists(self, path: str) -> bool:
        return path in self._names

    def open_entry(self, path: str) -> IO[bytes]:
        if path not in self._names:
            raise ArchiveEntryNotFound(path)
        logger.debug(f"ARCHIVE: open entry {path}")
        return self._zip.open(path)

    def read_entry(self, path: str) -> bytes:
        if path not in self._names:
            raise ArchiveEntryNotFound(path)
        return self._zip.read(path)

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> Archive:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
