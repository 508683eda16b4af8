from __future__ import annotations


class XlsxRowsError(Exception):
    """Base class for every error raised while reading a workbook."""


class ArchiveEntryNotFound(XlsxRowsError, KeyError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Archive entry not found: {self.path}"


class MalformedDocumentError(XlsxRowsError):
    pass


class UnknownFormatIdError(XlsxRowsError):
    pass


class IndexOutOfRangeError(XlsxRowsError, IndexError):
    pass


class InvalidReferenceError(XlsxRowsError, ValueError):
    pass
