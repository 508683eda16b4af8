from .api import iter_rows, open_workbook
from .errors import (
    ArchiveEntryNotFound,
    IndexOutOfRangeError,
    InvalidReferenceError,
    MalformedDocumentError,
    UnknownFormatIdError,
    XlsxRowsError,
)
from .model import Cell, ReaderOptions, SheetInfo, ValueType
from .parser.ooxml import OOXMLWorkbook, Sheet

__all__ = [
    "ArchiveEntryNotFound",
    "Cell",
    "IndexOutOfRangeError",
    "InvalidReferenceError",
    "MalformedDocumentError",
    "OOXMLWorkbook",
    "ReaderOptions",
    "Sheet",
    "SheetInfo",
    "UnknownFormatIdError",
    "ValueType",
    "XlsxRowsError",
    "iter_rows",
    "open_workbook",
]
