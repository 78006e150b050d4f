"""Broadcast package: lifecycle events and the SSE fan-out transport."""

from scrapecast.broadcast.events import Event, EventKind, decode_unicode, encode_unicode
from scrapecast.broadcast.transport import BroadcastTransport, DeliveryError, Subscriber

__all__ = [
    "BroadcastTransport",
    "DeliveryError",
    "Event",
    "EventKind",
    "Subscriber",
    "decode_unicode",
    "encode_unicode",
]
