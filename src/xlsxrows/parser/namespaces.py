SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

NS = {
    "a": SPREADSHEET_NS,
    "r": DOCUMENT_REL_NS,
}

WORKBOOK_PATH = "xl/workbook.xml"
STYLES_PATH = "xl/styles.xml"
SHARED_STRINGS_PATH = "xl/sharedStrings.xml"
EXTERNAL_LINK_RELS_DIR = "xl/externalLinks/_rels/"
