"""Forward-only markup events over ``xml.etree.ElementTree.iterparse``.

Elements are detached from their parent as soon as they close, so memory use
stays flat no matter how large the part is.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Iterator, Union
from xml.etree import ElementTree as ET

from ..errors import MalformedDocumentError
from .utils import local_name


@dataclass(slots=True)
class StartEvent:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    self_closing: bool = False


@dataclass(slots=True)
class EndEvent:
    name: str


@dataclass(slots=True)
class TextEvent:
    text: str


MarkupEvent = Union[StartEvent, EndEvent, TextEvent]


def _start(elem: ET.Element, self_closing: bool) -> StartEvent:
    attrs = {local_name(key): value for key, value in elem.attrib.items()}
    return StartEvent(local_name(elem.tag), attrs, self_closing)


def iter_events(stream: IO[bytes], source: str = "<stream>") -> Iterator[MarkupEvent]:
    """Yield start/text/end events in document order.

    An element with neither children nor text is reported as a single
    self-closing start event with no matching end event. Tail text between
    sibling elements is not reported.
    """
    pending: ET.Element | None = None
    stack: list[ET.Element] = []
    try:
        for event, elem in ET.iterparse(stream, events=("start", "end")):
            if event == "start":
                if pending is not None:
                    # pending's leading text is complete once a child starts
                    yield _start(pending, False)
                    if pending.text:
                        yield TextEvent(pending.text)
                pending = elem
                stack.append(elem)
                continue

            stack.pop()
            if pending is elem:
                if elem.text:
                    yield _start(elem, False)
                    yield TextEvent(elem.text)
                    yield EndEvent(local_name(elem.tag))
                else:
                    yield _start(elem, True)
            else:
                yield EndEvent(local_name(elem.tag))
            pending = None
            if stack:
                stack[-1].remove(elem)
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"Malformed XML in {source}: {exc}") from exc
