from __future__ import annotations

from datetime import datetime, timedelta

# Serial 60 is the phantom 1900-02-29, so the epoch sits at 1899-12-30
# and every serial from 61 onwards lands on the right calendar day.
EXCEL_EPOCH = datetime(1899, 12, 30)


def serial_to_datetime(days: float) -> datetime:
    return EXCEL_EPOCH + timedelta(days=days)
