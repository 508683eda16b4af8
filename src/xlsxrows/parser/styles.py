from __future__ import annotations

from logging import getLogger
from typing import Mapping, Sequence
from xml.etree import ElementTree as ET

from ..errors import IndexOutOfRangeError, MalformedDocumentError, UnknownFormatIdError
from ..model import BorderAttributes, FillAttributes, FontAttributes, NumberFormat, StyleRecord
from .formats import STANDARD_FORMATS
from .namespaces import NS

logger = getLogger(__name__)

# Default Office theme, by theme color index. 0 and 1 follow the system colors.
THEME_COLORS: dict[int, str | None] = {
    0: None,
    1: None,
    2: "1F497D",
    3: "EEECE1",
    4: "4F81BD",
    5: "C0504D",
    6: "9BBB59",
    7: "8064A2",
    8: "4BACC6",
    9: "F79646",
    10: "0000FF",
    11: "800080",
}

# Legacy indexed palette. 64 and 65 are the system foreground/background slots.
INDEXED_COLORS: dict[int, str | None] = dict(
    enumerate(
        (
            "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
            "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
            "800000", "008000", "000080", "808000", "800080", "008080", "C0C0C0", "808080",
            "9999FF", "993366", "FFFFCC", "CCFFFF", "660066", "FF8080", "0066CC", "CCCCFF",
            "000080", "FF00FF", "FFFF00", "00FFFF", "800080", "800000", "008080", "0000FF",
            "00CCFF", "CCFFFF", "CCFFCC", "FFFF99", "99CCFF", "FF99CC", "CC99FF", "FFCC99",
            "3366FF", "33CCCC", "99CC00", "FFCC00", "FF9900", "FF6600", "666699", "969696",
            "003366", "339966", "003300", "333300", "993300", "993366", "333399", "333333",
            None, None,
        )
    )
)

FILL_PATTERNS = {"none", "solid"}
BORDER_SIDES = ("left", "right", "top", "bottom")


def resolve_color(attrib: Mapping[str, str]) -> str | None:
    """Resolve a color element's attributes to an RGB hex string.

    Priority: theme index, then explicit ARGB (alpha dropped), then the
    indexed palette.
    """
    theme = attrib.get("theme")
    if theme is not None:
        return THEME_COLORS.get(_to_int(theme, "theme"))
    rgb = attrib.get("rgb")
    if rgb is not None:
        return rgb[-6:].upper()
    indexed = attrib.get("indexed")
    if indexed is not None:
        return INDEXED_COLORS.get(_to_int(indexed, "indexed"))
    return None


def _to_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedDocumentError(f"Invalid {name} value in styles: {raw!r}") from exc


def _flag(elem: ET.Element | None) -> bool:
    if elem is None:
        return False
    return elem.attrib.get("val", "1").lower() not in {"0", "false"}


def _color_of(elem: ET.Element | None) -> str | None:
    if elem is None:
        return None
    return resolve_color(elem.attrib)


class StyleTable:
    def __init__(
        self,
        num_formats: Mapping[int, str],
        cell_xfs: Sequence[StyleRecord],
        fonts: Sequence[FontAttributes] | None = None,
        fills: Sequence[FillAttributes] | None = None,
        borders: Sequence[BorderAttributes] | None = None,
    ) -> None:
        self.num_formats = dict(num_formats)
        self.cell_xfs = tuple(cell_xfs)
        self.fonts = tuple(fonts) if fonts is not None else None
        self.fills = tuple(fills) if fills is not None else None
        self.borders = tuple(borders) if borders is not None else None

    @property
    def include_formatting(self) -> bool:
        return self.fonts is not None

    @classmethod
    def parse(cls, xml: bytes, *, include_formatting: bool = True) -> StyleTable:
        try:
            root = ET.fromstring(xml)
        except ET.ParseError as exc:
            raise MalformedDocumentError(f"Malformed styles part: {exc}") from exc

        num_formats: dict[int, str] = {}
        for num_fmt in root.findall("a:numFmts/a:numFmt", NS):
            fmt_id = _to_int(num_fmt.attrib.get("numFmtId", ""), "numFmtId")
            num_formats[fmt_id] = num_fmt.attrib.get("formatCode", "")

        cell_xfs: list[StyleRecord] = []
        for xf in root.findall("a:cellXfs/a:xf", NS):
            cell_xfs.append(
                StyleRecord(
                    num_fmt_id=_to_int(xf.attrib.get("numFmtId", "0"), "numFmtId"),
                    font_id=_to_int(xf.attrib.get("fontId", "0"), "fontId"),
                    fill_id=_to_int(xf.attrib.get("fillId", "0"), "fillId"),
                    border_id=_to_int(xf.attrib.get("borderId", "0"), "borderId"),
                )
            )

        fonts = fills = borders = None
        if include_formatting:
            fonts = [cls._parse_font(font) for font in root.findall("a:fonts/a:font", NS)]
            fills = [cls._parse_fill(fill) for fill in root.findall("a:fills/a:fill", NS)]
            borders = [cls._parse_border(border) for border in root.findall("a:borders/a:border", NS)]

        logger.debug(
            f"STYLES: {len(num_formats)} custom formats, {len(cell_xfs)} cellXfs, "
            f"formatting={'on' if include_formatting else 'off'}"
        )
        return cls(num_formats, cell_xfs, fonts, fills, borders)

    @staticmethod
    def _parse_font(font: ET.Element) -> FontAttributes:
        size = font.find("a:sz", NS)
        name = font.find("a:name", NS)
        underline = font.find("a:u", NS)
        return FontAttributes(
            bold=_flag(font.find("a:b", NS)),
            italic=_flag(font.find("a:i", NS)),
            underline=underline is not None and underline.attrib.get("val", "single") != "none",
            size=float(size.attrib["val"]) if size is not None and "val" in size.attrib else None,
            name=name.attrib.get("val") if name is not None else None,
            color=_color_of(font.find("a:color", NS)),
        )

    @staticmethod
    def _parse_fill(fill: ET.Element) -> FillAttributes:
        pattern = fill.find("a:patternFill", NS)
        if pattern is None:
            return FillAttributes()
        pattern_type = pattern.attrib.get("patternType", "none")
        return FillAttributes(
            pattern=pattern_type if pattern_type in FILL_PATTERNS else "solid",
            fg_color=_color_of(pattern.find("a:fgColor", NS)),
        )

    @staticmethod
    def _parse_border(border: ET.Element) -> BorderAttributes:
        sides: dict[str, str | None] = {}
        for side in BORDER_SIDES:
            elem = border.find(f"a:{side}", NS)
            sides[side] = elem.attrib.get("style") if elem is not None else None
        return BorderAttributes(**sides)

    def style(self, style_index: int) -> StyleRecord:
        if not 0 <= style_index < len(self.cell_xfs):
            raise IndexOutOfRangeError(
                f"Style index {style_index} outside cellXfs table of {len(self.cell_xfs)} entries"
            )
        return self.cell_xfs[style_index]

    def number_format(self, style_index: int) -> NumberFormat:
        fmt_id = self.style(style_index).num_fmt_id
        code = self.num_formats.get(fmt_id)
        if code is None:
            code = STANDARD_FORMATS.get(fmt_id)
        if code is None:
            raise UnknownFormatIdError(f"Style {style_index} uses unknown number format id {fmt_id}")
        return NumberFormat(id=fmt_id, code=code)

    def number_format_code(self, style_index: int) -> str:
        return self.number_format(style_index).code

    def font_for(self, style_index: int) -> FontAttributes | None:
        if self.fonts is None:
            return None
        return self._lookup(self.fonts, self.style(style_index).font_id, "font")

    def fill_for(self, style_index: int) -> FillAttributes | None:
        if self.fills is None:
            return None
        return self._lookup(self.fills, self.style(style_index).fill_id, "fill")

    def border_for(self, style_index: int) -> BorderAttributes | None:
        if self.borders is None:
            return None
        return self._lookup(self.borders, self.style(style_index).border_id, "border")

    @staticmethod
    def _lookup(table, record_id: int, kind: str):
        # id 0 is the workbook default and means "no override"
        if record_id == 0:
            return None
        if not 0 < record_id < len(table):
            raise IndexOutOfRangeError(f"{kind} id {record_id} outside table of {len(table)} entries")
        return table[record_id]
