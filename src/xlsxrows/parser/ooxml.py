from __future__ import annotations

import re
from functools import cached_property
from logging import getLogger
from pathlib import Path
from typing import Iterator
from xml.etree import ElementTree as ET

from ..errors import MalformedDocumentError
from ..model import ExternalLink, ReaderOptions, Row, SheetInfo
from .archive import Archive
from .formats import FormatClassifier
from .markup import iter_events
from .namespaces import (
    EXTERNAL_LINK_RELS_DIR,
    NS,
    PACKAGE_REL_NS,
    SHARED_STRINGS_PATH,
    STYLES_PATH,
    WORKBOOK_PATH,
)
from .rows import RowContext, estimate_row_count, iter_rows
from .shared_strings import SharedStringTable
from .styles import StyleTable

logger = getLogger(__name__)

EXTERNAL_LINK_RELS_RE = re.compile(
    rf"^{re.escape(EXTERNAL_LINK_RELS_DIR)}[^/]*?(\d+)\.xml\.rels$"
)


class OOXMLWorkbook:
    """An open .xlsx workbook.

    Styles are parsed when the workbook is opened; the shared string table
    is read on first use. Both are shared read-only by every sheet.
    """

    def __init__(self, source_path: str | Path, options: ReaderOptions | None = None) -> None:
        self.source_path = Path(source_path)
        self.options = options or ReaderOptions()
        self.archive = Archive(self.source_path)
        try:
            self.styles = StyleTable.parse(
                self.archive.read_entry(STYLES_PATH),
                include_formatting=self.options.include_formatting,
            )
            self.classifier = FormatClassifier(self.options.user_defined_formats)
        except Exception:
            self.archive.close()
            raise
        self._shared_strings: SharedStringTable | None = None
        self._sheets: list[Sheet] | None = None
        self._external_links: list[ExternalLink] | None = None

    @property
    def include_formatting(self) -> bool:
        return self.options.include_formatting

    def __enter__(self) -> OOXMLWorkbook:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.archive.close()

    def sheets(self) -> list[Sheet]:
        if self._sheets is None:
            self._sheets = [Sheet(self, info) for info in self._parse_sheet_infos()]
        return list(self._sheets)

    def sheet_list(self) -> list[SheetInfo]:
        return [sheet.info for sheet in self.sheets()]

    def sheet(self, key: str | int) -> Sheet:
        sheets = self.sheets()
        if isinstance(key, int):
            return sheets[key]
        for sheet in sheets:
            if sheet.name == key:
                return sheet
        raise KeyError(f"No sheet named {key!r}")

    def _parse_sheet_infos(self) -> list[SheetInfo]:
        wb_root = self._parse_xml(WORKBOOK_PATH)
        infos: list[SheetInfo] = []
        for idx, sheet in enumerate(wb_root.findall("a:sheets/a:sheet", NS)):
            infos.append(
                SheetInfo(
                    name=sheet.attrib.get("name", f"Sheet{idx + 1}"),
                    sheet_id=sheet.attrib.get("sheetId", ""),
                    index=idx + 1,
                )
            )
        logger.debug(f"WORKBOOK: {len(infos)} sheets: {[info.name for info in infos]}")
        return infos

    def shared_strings(self) -> SharedStringTable:
        if self._shared_strings is None:
            with self.archive.open_entry(SHARED_STRINGS_PATH) as stream:
                self._shared_strings = SharedStringTable.build(iter_events(stream, SHARED_STRINGS_PATH))
            logger.debug(f"WORKBOOK: {len(self._shared_strings)} shared strings")
        return self._shared_strings

    def string_lookup(self, index: int) -> str:
        return self.shared_strings().lookup(index)

    def external_links(self) -> list[ExternalLink]:
        if self._external_links is None:
            links: list[ExternalLink] = []
            for path in sorted(self.archive.list_entries()):
                match = EXTERNAL_LINK_RELS_RE.match(path)
                if not match:
                    continue
                root = self._parse_xml(path)
                for rel in root.findall(f"{{{PACKAGE_REL_NS}}}Relationship"):
                    target = rel.attrib.get("Target")
                    if target:
                        links.append(ExternalLink(id=int(match.group(1)), target=target))
            links.sort(key=lambda link: link.id)
            self._external_links = links
        return list(self._external_links)

    def row_context(self) -> RowContext:
        return RowContext(
            styles=self.styles,
            classifier=self.classifier,
            string_lookup=self.string_lookup,
            include_formatting=self.include_formatting,
        )

    def _parse_xml(self, path: str) -> ET.Element:
        try:
            return ET.fromstring(self.archive.read_entry(path))
        except ET.ParseError as exc:
            raise MalformedDocumentError(f"Malformed XML in {path}: {exc}") from exc


class Sheet:
    def __init__(self, workbook: OOXMLWorkbook, info: SheetInfo) -> None:
        self.workbook = workbook
        self.info = info

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def sheet_id(self) -> str:
        return self.info.sheet_id

    @property
    def index(self) -> int:
        return self.info.index

    @property
    def path(self) -> str:
        return self.info.path

    def __repr__(self) -> str:
        return f"Sheet(name={self.name!r}, sheet_id={self.sheet_id!r}, index={self.index})"

    def rows(self) -> Iterator[Row]:
        """Yield the sheet's rows in order, reading the part lazily.

        Each call opens its own stream over the part, so iterations are
        independent. The stream is closed when the generator finishes or
        is closed early.
        """
        if not self.workbook.archive.entry_exists(self.path):
            logger.warning(f"SHEET: {self.name!r} has no part at {self.path}; yielding no rows")
            return
        context = self.workbook.row_context()
        with self.workbook.archive.open_entry(self.path) as stream:
            yield from iter_rows(iter_events(stream, self.path), context)

    def __iter__(self) -> Iterator[Row]:
        return self.rows()

    def estimated_row_count(self) -> int | None:
        if not self.workbook.archive.entry_exists(self.path):
            return None
        with self.workbook.archive.open_entry(self.path) as stream:
            return estimate_row_count(iter_events(stream, self.path))

    @cached_property
    def row_count(self) -> int | None:
        return self.estimated_row_count()
