from __future__ import annotations

import argparse
import logging
import sys
from itertools import islice
from pathlib import Path

from .api import open_workbook
from .errors import XlsxRowsError
from .model import Cell, ReaderOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stream rows out of an .xlsx workbook")
    parser.add_argument("input", type=Path, help="Input .xlsx file")
    parser.add_argument(
        "--sheet",
        default="0",
        help="Sheet name or 0-based position (default: first sheet)",
    )
    parser.add_argument("--list", action="store_true", help="List sheets and exit")
    parser.add_argument(
        "--no-formatting",
        action="store_true",
        help="Skip font/fill/border resolution",
    )
    parser.add_argument("--limit", type=int, default=None, help="Stop after N rows")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_cell(cell: Cell | None) -> str:
    if cell is None:
        return ""
    if cell.value is None:
        return f"={cell.formula}" if cell.formula else ""
    return str(cell.value)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    options = ReaderOptions(include_formatting=not args.no_formatting)
    try:
        with open_workbook(args.input, options=options) as workbook:
            if args.list:
                for info in workbook.sheet_list():
                    print(f"{info.index}\t{info.sheet_id}\t{info.name}")
                return 0

            key: str | int = int(args.sheet) if args.sheet.isdigit() else args.sheet
            rows = workbook.sheet(key).rows()
            for row in islice(rows, args.limit):
                print("\t".join(format_cell(cell) for cell in row))
    except (XlsxRowsError, KeyError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
