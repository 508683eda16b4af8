from __future__ import annotations

from typing import Mapping

from ..model import ValueType

# Number format code (lower case) -> semantic value type.
BUILTIN_FORMAT_TYPES: dict[str, ValueType] = {
    "general": ValueType.FLOAT,
    "0": ValueType.FLOAT,
    "0.00": ValueType.FLOAT,
    "#,##0": ValueType.FLOAT,
    "#,##0.00": ValueType.FLOAT,
    "0%": ValueType.PERCENTAGE,
    "0.00%": ValueType.PERCENTAGE,
    "0.00e+00": ValueType.FLOAT,
    "# ?/?": ValueType.FLOAT,
    "# ??/??": ValueType.FLOAT,
    "mm-dd-yy": ValueType.DATE,
    "d-mmm-yy": ValueType.DATE,
    "d-mmm": ValueType.DATE,
    "mmm-yy": ValueType.DATE,
    "h:mm am/pm": ValueType.DATE,
    "h:mm:ss am/pm": ValueType.DATE,
    "h:mm": ValueType.TIME,
    "h:mm:ss": ValueType.TIME,
    "m/d/yy h:mm": ValueType.DATE,
    "#,##0 ;(#,##0)": ValueType.FLOAT,
    "#,##0 ;[red](#,##0)": ValueType.FLOAT,
    "#,##0.00;(#,##0.00)": ValueType.FLOAT,
    "#,##0.00;[red](#,##0.00)": ValueType.FLOAT,
    "mm:ss": ValueType.TIME,
    "[h]:mm:ss": ValueType.TIME,
    "mmss.0": ValueType.TIME,
    "##0.0e+0": ValueType.FLOAT,
    "@": ValueType.STRING,
    # Not in the standard table, but written by LibreOffice and localized Excel.
    "yyyy-mm-dd": ValueType.DATE,
    "yyyy\\-mm\\-dd": ValueType.DATE,
    "dd/mm/yy": ValueType.DATE,
    "dd/mm/yyyy": ValueType.DATE,
    "hh:mm:ss": ValueType.TIME,
    "dd/mm/yy\\ hh:mm": ValueType.DATETIME,
    "yyyy-mm-dd hh:mm:ss": ValueType.DATETIME,
    "m/d/yy": ValueType.DATE,
    "m/d/yyyy": ValueType.DATE,
    "m/d/yyyy h:mm": ValueType.DATETIME,
    "mm/dd/yy": ValueType.DATE,
    "mm/dd/yyyy": ValueType.DATE,
}

# Built-in number format ids that a styles part may reference without declaring.
STANDARD_FORMATS: dict[int, str] = {
    0: "General",
    1: "0",
    2: "0.00",
    3: "#,##0",
    4: "#,##0.00",
    9: "0%",
    10: "0.00%",
    11: "0.00E+00",
    12: "# ?/?",
    13: "# ??/??",
    14: "mm-dd-yy",
    15: "d-mmm-yy",
    16: "d-mmm",
    17: "mmm-yy",
    18: "h:mm AM/PM",
    19: "h:mm:ss AM/PM",
    20: "h:mm",
    21: "h:mm:ss",
    22: "m/d/yy h:mm",
    37: "#,##0 ;(#,##0)",
    38: "#,##0 ;[Red](#,##0)",
    39: "#,##0.00;(#,##0.00)",
    40: "#,##0.00;[Red](#,##0.00)",
    45: "mm:ss",
    46: "[h]:mm:ss",
    47: "mmss.0",
    48: "##0.0E+0",
    49: "@",
}


class FormatClassifier:
    """Maps a number format code to the ValueType its cells hold.

    Built-in codes win over caller overrides; anything unknown is a float.
    """

    def __init__(self, overrides: Mapping[str, ValueType | str] | None = None) -> None:
        self._overrides: dict[str, ValueType] = {
            code.lower(): ValueType(value) for code, value in (overrides or {}).items()
        }

    def classify(self, code: str) -> ValueType:
        key = code.lower()
        builtin = BUILTIN_FORMAT_TYPES.get(key)
        if builtin is not None:
            return builtin
        return self._overrides.get(key, ValueType.FLOAT)
