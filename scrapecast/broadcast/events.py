"""Lifecycle events broadcast to ``/events`` subscribers.

Wire format
-----------
Each event is one SSE frame whose ``data:`` line is a JSON object::

    data: {"type": "scrape_start",  "payload": {"url": "..."}}
    data: {"type": "scrape_result", "payload": {"url": "...", "summary": "...", "fullContent": "<base64>"}}
    data: {"type": "scrape_error",  "payload": {"error": "..."}}

``fullContent`` is the UTF-8 encoding of the extracted text, base64-encoded,
so multi-byte characters survive any transport exactly.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class EventKind(str, Enum):
    START = "scrape_start"
    RESULT = "scrape_result"
    ERROR = "scrape_error"


# ---------------------------------------------------------------------------
# Unicode-safe text codec
# ---------------------------------------------------------------------------

def encode_unicode(text: str) -> str:
    """Encode *text* as base64 over its UTF-8 bytes."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_unicode(encoded: str) -> str:
    """Inverse of :func:`encode_unicode`."""
    return base64.b64decode(encoded.encode("ascii")).decode("utf-8")


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    kind: EventKind
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @classmethod
    def start(cls, url: str) -> "Event":
        return cls(EventKind.START, {"url": url})

    @classmethod
    def result(cls, url: str, summary: str, content: str) -> "Event":
        return cls(
            EventKind.RESULT,
            {"url": url, "summary": summary, "fullContent": encode_unicode(content)},
        )

    @classmethod
    def error(cls, message: str) -> "Event":
        return cls(EventKind.ERROR, {"error": message})

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "payload": dict(self.payload)}

    def to_sse(self) -> str:
        """Format the event as a single SSE ``data:`` frame."""
        return f"data: {json.dumps(self.to_dict())}\n\n"
