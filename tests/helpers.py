from __future__ import annotations

from pathlib import Path
from zipfile import ZipFile

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

XML_DECL = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

DEFAULT_STYLES = f"""{XML_DECL}<styleSheet xmlns="{SPREADSHEET_NS}">
  <numFmts count="2">
    <numFmt numFmtId="164" formatCode="yyyy-mm-dd"/>
    <numFmt numFmtId="165" formatCode="0.000"/>
  </numFmts>
  <fonts count="2">
    <font><sz val="11"/><name val="Calibri"/></font>
    <font><b/><i/><u/><sz val="14"/><color rgb="FF112233"/><name val="Arial"/></font>
  </fonts>
  <fills count="3">
    <fill><patternFill patternType="none"/></fill>
    <fill><patternFill patternType="gray125"/></fill>
    <fill><patternFill patternType="solid"><fgColor indexed="10"/></patternFill></fill>
  </fills>
  <borders count="2">
    <border><left/><right/><top/><bottom/></border>
    <border><left style="thin"/><right/><top style="double"/><bottom/></border>
  </borders>
  <cellXfs count="6">
    <xf numFmtId="0" fontId="0" fillId="0" borderId="0"/>
    <xf numFmtId="164" fontId="1" fillId="2" borderId="1"/>
    <xf numFmtId="10" fontId="0" fillId="0" borderId="0"/>
    <xf numFmtId="165" fontId="0" fillId="1" borderId="0"/>
    <xf numFmtId="20" fontId="0" fillId="0" borderId="0"/>
    <xf numFmtId="99" fontId="0" fillId="0" borderId="0"/>
  </cellXfs>
</styleSheet>
"""

DEFAULT_SHARED_STRINGS = f"""{XML_DECL}<sst xmlns="{SPREADSHEET_NS}" count="3" uniqueCount="3">
  <si><t>name</t></si>
  <si><r><rPr><b/></rPr><t>rich</t></r><r><t xml:space="preserve"> text</t></r></si>
  <si><t/></si>
</sst>
"""


def workbook_xml(sheet_names: list[str]) -> str:
    sheets = "".join(
        f'<sheet name="{name}" sheetId="{idx + 1}" r:id="rId{idx + 1}"/>'
        for idx, name in enumerate(sheet_names)
    )
    return (
        f'{XML_DECL}<workbook xmlns="{SPREADSHEET_NS}" xmlns:r="{DOCUMENT_REL_NS}">'
        f"<sheets>{sheets}</sheets></workbook>"
    )


def worksheet_xml(sheet_data: str, dimension: str | None = None) -> str:
    dim = f'<dimension ref="{dimension}"/>' if dimension else ""
    return f'{XML_DECL}<worksheet xmlns="{SPREADSHEET_NS}">{dim}<sheetData>{sheet_data}</sheetData></worksheet>'


def external_link_rels(target: str) -> str:
    return (
        f'{XML_DECL}<Relationships xmlns="{PACKAGE_REL_NS}">'
        f'<Relationship Id="rId1" Type="{DOCUMENT_REL_NS}/externalLinkPath" '
        f'Target="{target}" TargetMode="External"/></Relationships>'
    )


def build_xlsx(
    path: Path,
    sheets: dict[str, str],
    *,
    styles: str | None = DEFAULT_STYLES,
    shared_strings: str | None = DEFAULT_SHARED_STRINGS,
    extra_entries: dict[str, str] | None = None,
    omit_sheet_parts: set[int] | None = None,
) -> Path:
    """Write a minimal workbook; ``sheets`` maps sheet name -> worksheet XML."""
    with ZipFile(path, "w") as zf:
        zf.writestr("xl/workbook.xml", workbook_xml(list(sheets)))
        if styles is not None:
            zf.writestr("xl/styles.xml", styles)
        if shared_strings is not None:
            zf.writestr("xl/sharedStrings.xml", shared_strings)
        for idx, xml in enumerate(sheets.values(), start=1):
            if omit_sheet_parts and idx in omit_sheet_parts:
                continue
            zf.writestr(f"xl/worksheets/sheet{idx}.xml", xml)
        for name, content in (extra_entries or {}).items():
            zf.writestr(name, content)
    return path


def values(row: list) -> list:
    return [cell.value if cell is not None else None for cell in row]
