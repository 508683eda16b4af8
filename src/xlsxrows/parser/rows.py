"""Row streaming for worksheet parts.

A worksheet's ``<sheetData>`` is consumed as a flat event stream and turned
into rows of :class:`~xlsxrows.model.Cell`. All cumulative state lives in a
:class:`RowParserState` that :func:`handle_event` threads through, so the
state machine can be driven by hand in tests without any XML at all.

Sparse sheets are padded: a skipped row number produces an empty row and a
skipped column produces a ``None`` placeholder, so ``rows[n]`` is always
sheet row ``n + 1`` and ``row[i]`` is always column ``i``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger
from typing import Callable, Iterable, Iterator

from ..errors import MalformedDocumentError
from ..model import Cell, CellValue, Row, SharedFormulaAnchor, ValueType
from .dates import serial_to_datetime
from .formats import FormatClassifier
from .formula import translate_shared_formula
from .markup import EndEvent, MarkupEvent, StartEvent, TextEvent
from .styles import StyleTable
from .utils import column_name, column_of_ref, last_row_of_range, rowcol_to_coord

logger = getLogger(__name__)

# Declared cell types whose text is never numeric.
TEXT_CELL_TYPES = {"str", "inlineStr", "e", "d"}
# Declared cell types that skip format lookup when formatting detail is off.
UNSTYLED_CELL_TYPES = {"s", "b"}
RAW_NUMERIC_TYPES = {ValueType.PERCENTAGE, ValueType.TIME, ValueType.DATETIME}


class Capture(Enum):
    NONE = "none"
    VALUE = "value"
    INLINE_TEXT = "inline_text"
    FORMULA = "formula"


@dataclass(slots=True)
class RowContext:
    """Read-only workbook tables shared by every row stream."""

    styles: StyleTable
    classifier: FormatClassifier
    string_lookup: Callable[[int], str]
    include_formatting: bool = True


@dataclass(slots=True)
class RowParserState:
    row_number: int = 0
    column: int = 0
    row: Row | None = None
    cell: Cell | None = None
    cell_type: str | None = None
    value_type: ValueType | None = None
    capture: Capture = Capture.NONE
    text: list[str] = field(default_factory=list)
    # shared formula group index waiting for its template text
    pending_anchor: int | None = None
    in_phonetic: bool = False
    anchors: dict[int, SharedFormulaAnchor] = field(default_factory=dict)


def iter_rows(events: Iterable[MarkupEvent], context: RowContext) -> Iterator[Row]:
    state = RowParserState()
    for event in events:
        yield from handle_event(state, event, context)


def handle_event(state: RowParserState, event: MarkupEvent, context: RowContext) -> Iterator[Row]:
    if isinstance(event, StartEvent):
        yield from _on_start(state, event, context)
    elif isinstance(event, TextEvent):
        if state.capture is not Capture.NONE:
            state.text.append(event.text)
    elif isinstance(event, EndEvent):
        yield from _on_end(state, event, context)


def _on_start(state: RowParserState, event: StartEvent, context: RowContext) -> Iterator[Row]:
    name = event.name
    if name == "row":
        yield from _start_row(state, event)
    elif state.row is None:
        return
    elif name == "c":
        _start_cell(state, event, context)
    elif state.cell is None:
        return
    elif name == "v":
        _begin_capture(state, Capture.VALUE, event)
    elif name == "is":
        state.text = []
        state.in_phonetic = False
    elif name == "rPh":
        state.in_phonetic = not event.self_closing
    elif name == "t":
        # runs of one inline string accumulate until </is>
        if not event.self_closing and not state.in_phonetic:
            state.capture = Capture.INLINE_TEXT
    elif name == "f":
        _start_formula(state, event)


def _start_row(state: RowParserState, event: StartEvent) -> Iterator[Row]:
    state.row_number += 1
    declared = event.attrs.get("r")
    if declared:
        target = _int_attr(declared, f"row number after row {state.row_number - 1}")
        if target > state.row_number:
            logger.debug(f"ROWS: padding {target - state.row_number} empty rows before row {target}")
        while target > state.row_number:
            yield []
            state.row_number += 1
    state.row = []
    state.column = 0
    state.cell = None
    if event.self_closing:
        state.row = None
        yield []


def _start_cell(state: RowParserState, event: StartEvent, context: RowContext) -> None:
    row = state.row
    ref = event.attrs.get("r")
    if ref:
        target = column_of_ref(ref)
        if target < state.column:
            raise MalformedDocumentError(
                f"Cell {ref} in row {state.row_number} appears after column {column_name(state.column - 1)}"
            )
        while state.column < target:
            row.append(None)
            state.column += 1

    cell = Cell(column=state.column)
    row.append(cell)
    state.column += 1
    state.cell = cell
    state.cell_type = event.attrs.get("t")
    state.value_type = None
    state.capture = Capture.NONE
    state.text = []
    state.pending_anchor = None

    style = event.attrs.get("s")
    if style is None:
        return
    if not context.include_formatting and state.cell_type in UNSTYLED_CELL_TYPES:
        return
    style_index = _int_attr(style, f"style index on cell {_cell_label(state)}")
    state.value_type = context.classifier.classify(context.styles.number_format_code(style_index))
    if context.include_formatting:
        cell.font = context.styles.font_for(style_index)
        cell.fill = context.styles.fill_for(style_index)
        cell.border = context.styles.border_for(style_index)


def _begin_capture(state: RowParserState, capture: Capture, event: StartEvent) -> None:
    state.text = []
    state.capture = Capture.NONE if event.self_closing else capture


def _start_formula(state: RowParserState, event: StartEvent) -> None:
    if event.attrs.get("t") != "shared":
        _begin_capture(state, Capture.FORMULA, event)
        return

    group = _int_attr(event.attrs.get("si", "0"), f"shared formula group on cell {_cell_label(state)}")
    anchor = state.anchors.get(group)
    if anchor is not None:
        # dependent cells carry no template; their text is derived right away
        state.cell.formula = translate_shared_formula(anchor, state.row_number, state.cell.column)
        state.capture = Capture.NONE
        return

    state.pending_anchor = group
    _begin_capture(state, Capture.FORMULA, event)


def _on_end(state: RowParserState, event: EndEvent, context: RowContext) -> Iterator[Row]:
    name = event.name
    if name == "row":
        if state.row is not None:
            row, state.row = state.row, None
            yield row
        return
    if state.cell is None:
        return
    if name == "c":
        state.cell = None
        state.capture = Capture.NONE
    elif name == "v" and state.capture is Capture.VALUE:
        state.cell.value = convert_value("".join(state.text), state, context)
        state.capture = Capture.NONE
    elif name == "t" and state.capture is Capture.INLINE_TEXT:
        state.capture = Capture.NONE
    elif name == "rPh":
        state.in_phonetic = False
    elif name == "is":
        state.cell.value = convert_value("".join(state.text), state, context)
    elif name == "f" and state.capture is Capture.FORMULA:
        _finish_formula(state)


def _finish_formula(state: RowParserState) -> None:
    text = "".join(state.text)
    state.capture = Capture.NONE
    if state.pending_anchor is not None:
        anchor = SharedFormulaAnchor(row=state.row_number, column=state.cell.column, template=text)
        state.anchors[state.pending_anchor] = anchor
        logger.debug(
            f"ROWS: shared formula {state.pending_anchor} anchored at "
            f"{rowcol_to_coord(anchor.row, anchor.column)}"
        )
        state.pending_anchor = None
    if text:
        state.cell.formula = text


def convert_value(raw: str, state: RowParserState, context: RowContext) -> CellValue:
    cell_type = state.cell_type
    if cell_type == "s":
        return context.string_lookup(_parse_int(raw, state))
    if cell_type in TEXT_CELL_TYPES:
        return raw

    value_type = state.value_type
    if value_type is ValueType.FLOAT or value_type in RAW_NUMERIC_TYPES:
        return _parse_float(raw, state)
    if value_type is ValueType.DATE:
        serial = _parse_float(raw, state)
        try:
            return serial_to_datetime(serial)
        except (OverflowError, ValueError):
            # outside the datetime range: the serial is kept as is
            logger.warning(f"ROWS: cell {_cell_label(state)} has out-of-range date serial {raw!r}")
            return serial
    return raw


def _cell_label(state: RowParserState) -> str:
    return rowcol_to_coord(state.row_number, state.cell.column)


def _int_attr(raw: str, what: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedDocumentError(f"Invalid {what}: {raw!r}") from exc


def _parse_int(raw: str, state: RowParserState) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedDocumentError(f"Cell {_cell_label(state)}: invalid string index {raw!r}") from exc


def _parse_float(raw: str, state: RowParserState) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise MalformedDocumentError(f"Cell {_cell_label(state)}: invalid number {raw!r}") from exc


def estimate_row_count(events: Iterable[MarkupEvent]) -> int | None:
    """Read the last row number from the sheet's ``<dimension>`` hint.

    Returns ``None`` when cell data starts before any usable hint.
    """
    for event in events:
        if not isinstance(event, StartEvent):
            continue
        if event.name == "dimension":
            ref = event.attrs.get("ref")
            if ref:
                return last_row_of_range(ref)
        elif event.name == "sheetData":
            return None
    return None
