from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Union


class ValueType(str, Enum):
    FLOAT = "float"
    PERCENTAGE = "percentage"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    STRING = "string"


CellValue = Union[str, float, datetime]


@dataclass(slots=True)
class ReaderOptions:
    include_formatting: bool = True
    user_defined_formats: Mapping[str, ValueType | str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NumberFormat:
    id: int
    code: str


@dataclass(frozen=True, slots=True)
class StyleRecord:
    num_fmt_id: int
    font_id: int = 0
    fill_id: int = 0
    border_id: int = 0


@dataclass(frozen=True, slots=True)
class FontAttributes:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    size: float | None = None
    name: str | None = None
    color: str | None = None


@dataclass(frozen=True, slots=True)
class FillAttributes:
    pattern: str = "none"
    fg_color: str | None = None


@dataclass(frozen=True, slots=True)
class BorderAttributes:
    left: str | None = None
    right: str | None = None
    top: str | None = None
    bottom: str | None = None


@dataclass(slots=True)
class Cell:
    column: int
    value: CellValue | None = None
    formula: str | None = None
    font: FontAttributes | None = None
    fill: FillAttributes | None = None
    border: BorderAttributes | None = None


Row = list[Union[Cell, None]]


@dataclass(frozen=True, slots=True)
class SharedFormulaAnchor:
    row: int
    column: int
    template: str


@dataclass(frozen=True, slots=True)
class SheetInfo:
    name: str
    sheet_id: str
    index: int

    @property
    def path(self) -> str:
        return f"xl/worksheets/sheet{self.index}.xml"


@dataclass(frozen=True, slots=True)
class ExternalLink:
    id: int
    target: str
