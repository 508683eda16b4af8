from __future__ import annotations

from io import BytesIO

import pytest

from xlsxrows.errors import MalformedDocumentError
from xlsxrows.parser.markup import EndEvent, StartEvent, TextEvent, iter_events


def _events(xml: str) -> list:
    return list(iter_events(BytesIO(xml.encode("utf-8"))))


def test_events_in_document_order() -> None:
    events = _events('<a k="1"><b/><c>x</c><d><e>y</e></d></a>')

    assert events == [
        StartEvent("a", {"k": "1"}),
        StartEvent("b", self_closing=True),
        StartEvent("c"),
        TextEvent("x"),
        EndEvent("c"),
        StartEvent("d"),
        StartEvent("e"),
        TextEvent("y"),
        EndEvent("e"),
        EndEvent("d"),
        EndEvent("a"),
    ]


def test_namespaces_are_stripped() -> None:
    events = _events('<x:a xmlns:x="urn:x" x:k="v"/>')

    assert events == [StartEvent("a", {"k": "v"}, self_closing=True)]


def test_malformed_markup_raises() -> None:
    with pytest.raises(MalformedDocumentError):
        _events("<a><b></a>")
