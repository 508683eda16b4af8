from __future__ import annotations

from typing import Iterable, Iterator

from ..errors import IndexOutOfRangeError
from .markup import EndEvent, MarkupEvent, StartEvent, TextEvent


class SharedStringTable:
    """Ordered, read-only list of the workbook's de-duplicated strings."""

    def __init__(self, values: list[str]) -> None:
        self._values = values

    @classmethod
    def build(cls, events: Iterable[MarkupEvent]) -> SharedStringTable:
        # Every <t> run inside an <si> item is concatenated; run formatting and
        # phonetic guides (<rPh>) are dropped.
        values: list[str] = []
        parts: list[str] | None = None
        in_text = False
        in_phonetic = False
        for event in events:
            if isinstance(event, StartEvent):
                if event.name == "si":
                    if event.self_closing:
                        values.append("")
                    else:
                        parts = []
                elif event.name == "rPh":
                    in_phonetic = not event.self_closing
                elif event.name == "t" and parts is not None and not in_phonetic:
                    in_text = not event.self_closing
            elif isinstance(event, TextEvent):
                if in_text and parts is not None:
                    parts.append(event.text)
            elif isinstance(event, EndEvent):
                if event.name == "t":
                    in_text = False
                elif event.name == "rPh":
                    in_phonetic = False
                elif event.name == "si" and parts is not None:
                    values.append("".join(parts))
                    parts = None
        return cls(values)

    def lookup(self, index: int) -> str:
        if not 0 <= index < len(self._values):
            raise IndexOutOfRangeError(
                f"Shared string index {index} outside table of {len(self._values)} entries"
            )
        return self._values[index]

    def __getitem__(self, index: int) -> str:
        return self.lookup(index)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def as_list(self) -> list[str]:
        return list(self._values)
