from __future__ import annotations

import pytest

from xlsxrows.errors import IndexOutOfRangeError
from xlsxrows.parser.utils import (
    MAX_COLUMNS,
    column_index,
    column_name,
    column_of_ref,
    last_row_of_range,
    rowcol_to_coord,
)


def test_col_index_roundtrip() -> None:
    assert column_index("A") == 0
    assert column_index("Z") == 25
    assert column_index("AA") == 26
    assert column_index("zz") == 701
    assert column_name(0) == "A"
    assert column_name(26) == "AA"
    assert column_name(51) == "AZ"
    assert column_name(702) == "AAA"
    assert column_name(MAX_COLUMNS - 1) == "ZZZ"


def test_every_supported_column_roundtrips_in_label_order() -> None:
    previous = None
    for index in range(MAX_COLUMNS):
        label = column_name(index)
        assert column_index(label) == index
        if previous is not None:
            assert (len(previous), previous) < (len(label), label)
        previous = label


@pytest.mark.parametrize("index", [-1, MAX_COLUMNS])
def test_column_name_out_of_range(index: int) -> None:
    with pytest.raises(IndexOutOfRangeError):
        column_name(index)


@pytest.mark.parametrize("label", ["", "AAAA", "A1", "Ä"])
def test_column_index_out_of_range(label: str) -> None:
    with pytest.raises(IndexOutOfRangeError):
        column_index(label)


def test_coord_roundtrip() -> None:
    assert rowcol_to_coord(3, 27) == "AB3"
    assert rowcol_to_coord(12, 2) == "C12"
    assert column_of_ref("XFD1048576") == 16383


def test_last_row_of_range() -> None:
    assert last_row_of_range("A1:D20") == 20
    assert last_row_of_range("B7") == 7
    assert last_row_of_range("A:A") is None
