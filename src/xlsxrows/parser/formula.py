from __future__ import annotations

import re

from ..errors import InvalidReferenceError
from ..model import SharedFormulaAnchor
from .utils import MAX_COLUMNS, column_index, column_name

# Quoted literals and sheet names are matched first so references inside
# them are passed through untouched.
REFERENCE_RE = re.compile(
    r"""
    "[^"]*"
    | '[^']*'
    | (?<![A-Za-z0-9_])
      (?P<col_abs>\$?)(?P<col>[A-Z]{1,3})
      (?P<row_abs>\$?)(?P<row>\d+)
      (?![A-Za-z0-9_(])
    """,
    re.VERBOSE,
)


def translate_shared_formula(anchor: SharedFormulaAnchor, row: int, column: int) -> str:
    """Rewrite the anchor's formula text for the cell at (row, column).

    ``row`` is the 1-based sheet row and ``column`` the 0-based column index,
    in the same coordinates the anchor was recorded with. Relative parts of
    each reference move by the distance from the anchor; ``$``-marked parts
    stay put.
    """
    row_shift = row - anchor.row
    col_shift = column - anchor.column

    def shift(match: re.Match) -> str:
        if match.group("col") is None:
            return match.group(0)

        col_label = match.group("col")
        if not match.group("col_abs") and col_shift:
            new_col = column_index(col_label) + col_shift
            if not 0 <= new_col < MAX_COLUMNS:
                raise InvalidReferenceError(
                    f"Shifting {match.group(0)} by {col_shift} columns leaves the sheet"
                )
            col_label = column_name(new_col)

        row_text = match.group("row")
        if not match.group("row_abs") and row_shift:
            row_number = int(row_text) + row_shift
            if row_number < 1:
                raise InvalidReferenceError(
                    f"Shifting {match.group(0)} by {row_shift} rows leaves the sheet"
                )
            row_text = str(row_number)

        return f"{match.group('col_abs')}{col_label}{match.group('row_abs')}{row_text}"

    return REFERENCE_RE.sub(shift, anchor.template)
