from __future__ import annotations

import pytest

from xlsxrows.errors import InvalidReferenceError
from xlsxrows.model import SharedFormulaAnchor
from xlsxrows.parser.formula import translate_shared_formula


def test_relative_reference_shifts_and_absolute_stays() -> None:
    anchor = SharedFormulaAnchor(row=2, column=1, template="A2+$A$1")

    assert translate_shared_formula(anchor, 3, 2) == "B3+$A$1"


def test_mixed_references() -> None:
    anchor = SharedFormulaAnchor(row=1, column=0, template="$A1+A$1")

    assert translate_shared_formula(anchor, 3, 2) == "$A3+C$1"


def test_anchor_cell_translates_to_itself() -> None:
    anchor = SharedFormulaAnchor(row=4, column=3, template="SUM(A01:C4)*$B$2")

    assert translate_shared_formula(anchor, 4, 3) == "SUM(A01:C4)*$B$2"


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("SUM(A1:A3)", "SUM(B2:B4)"),
        ('IF(A1="B2",1,0)', 'IF(B2="B2",1,0)'),
        ("LOG10(A1)", "LOG10(B2)"),
        ("Sheet2!B2*2", "Sheet2!C3*2"),
        ("'Q1'!A1", "'Q1'!B2"),
        ("Z1+1", "AA2+1"),
    ],
)
def test_only_references_are_rewritten(template: str, expected: str) -> None:
    anchor = SharedFormulaAnchor(row=1, column=0, template=template)

    assert translate_shared_formula(anchor, 2, 1) == expected


def test_column_shift_past_first_column() -> None:
    anchor = SharedFormulaAnchor(row=1, column=1, template="A1")

    with pytest.raises(InvalidReferenceError):
        translate_shared_formula(anchor, 1, 0)


def test_column_shift_past_last_column() -> None:
    anchor = SharedFormulaAnchor(row=1, column=0, template="ZZZ1")

    with pytest.raises(InvalidReferenceError):
        translate_shared_formula(anchor, 1, 1)


def test_row_shift_above_first_row() -> None:
    anchor = SharedFormulaAnchor(row=2, column=0, template="A1")

    with pytest.raises(InvalidReferenceError):
        translate_shared_formula(anchor, 1, 0)
