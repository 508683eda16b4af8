from __future__ import annotations

from pathlib import Path
from typing import Iterator

from .model import ReaderOptions, Row
from .parser.ooxml import OOXMLWorkbook


def open_workbook(path: str | Path, *, options: ReaderOptions | None = None) -> OOXMLWorkbook:
    return OOXMLWorkbook(path, options or ReaderOptions())


def iter_rows(
    path: str | Path,
    sheet: str | int = 0,
    *,
    options: ReaderOptions | None = None,
) -> Iterator[Row]:
    with open_workbook(path, options=options) as workbook:
        yield from workbook.sheet(sheet).rows()
