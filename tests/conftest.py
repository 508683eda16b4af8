from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import build_xlsx, worksheet_xml

SAMPLE_SHEET = worksheet_xml(
    dimension="A1:D5",
    sheet_data="""
<row r="1">
  <c r="A1" t="s"><v>0</v></c>
  <c r="B1" t="s" s="1"><v>1</v></c>
  <c r="D1" t="inlineStr"><is><t>inline</t></is></c>
</row>
<row r="2">
  <c r="A2" s="3"><v>1.5</v></c>
  <c r="B2" s="1"><v>45000</v></c>
  <c r="C2" s="2"><v>0.25</v></c>
  <c r="D2"><f>A2*2</f><v>3</v></c>
</row>
<row r="5">
  <c r="B5" s="4"><v>0.5</v></c>
  <c r="C5" t="b"><v>1</v></c>
</row>
""",
)


@pytest.fixture
def sample_xlsx(tmp_path: Path) -> Path:
    return build_xlsx(
        tmp_path / "sample.xlsx",
        {"Data": SAMPLE_SHEET, "Empty": worksheet_xml("")},
    )
