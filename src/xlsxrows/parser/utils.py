from __future__ import annotations

import re
from string import ascii_uppercase

from ..errors import IndexOutOfRangeError

COLUMN_PART_RE = re.compile(r"^\$?([A-Za-z]+)")
TRAILING_ROW_RE = re.compile(r"(\d+)$")

MAX_COLUMN_LETTERS = 3
# A..Z, AA..ZZ, AAA..ZZZ
MAX_COLUMNS = 26 + 26**2 + 26**3


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def column_name(index: int) -> str:
    """Return the column label for a 0-based column index (0 -> "A")."""
    if not 0 <= index < MAX_COLUMNS:
        raise IndexOutOfRangeError(f"Column index out of range: {index}")
    result: list[str] = []
    value = index + 1
    while value > 0:
        value, rem = divmod(value - 1, 26)
        result.append(ascii_uppercase[rem])
    return "".join(reversed(result))


def column_index(label: str) -> int:
    """Return the 0-based column index for a label ("A" -> 0, "AA" -> 26)."""
    if not label or len(label) > MAX_COLUMN_LETTERS or not label.isascii() or not label.isalpha():
        raise IndexOutOfRangeError(f"Column label out of range: {label!r}")
    value = 0
    for char in label.upper():
        value = value * 26 + (ord(char) - 64)
    return value - 1


def column_of_ref(ref: str) -> int:
    match = COLUMN_PART_RE.match(ref)
    if not match:
        raise IndexOutOfRangeError(f"Invalid cell reference: {ref!r}")
    return column_index(match.group(1))


def rowcol_to_coord(row: int, col: int) -> str:
    if row < 1:
        raise ValueError("row must be >= 1")
    return f"{column_name(col)}{row}"


def last_row_of_range(ref: str) -> int | None:
    match = TRAILING_ROW_RE.search(ref.strip())
    if not match:
        return None
    return int(match.group(1))
