"""Fan-out of SSE frames to a dynamic set of live subscribers.

A :class:`Subscriber` is one ``/events`` connection: a bounded FIFO queue the
streaming response drains.  :class:`BroadcastTransport` owns the set of
subscribers, serialises each event once and offers it to every queue.

Delivery never awaits.  A subscriber that is closed or whose queue is full
raises :class:`DeliveryError`; the transport logs it, drops that subscriber
and carries on with the rest.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from typing import AsyncIterator, Optional

from scrapecast.broadcast.events import Event

logger = logging.getLogger(__name__)

KEEPALIVE_FRAME = ": keep-alive\n\n"

_ids = itertools.count(1)


class DeliveryError(Exception):
    """A single subscriber's channel is broken.  Never escapes the transport."""


class Subscriber:
    """One live outbound event stream."""

    def __init__(self, max_queue: int = 100) -> None:
        self.id = next(_ids)
        self._queue: asyncio.Queue[Optional[str]] = asyncio.Queue(maxsize=max_queue + 1)
        self._max_queue = max_queue
        self._closed = False

    def __repr__(self) -> str:
        return f"<Subscriber #{self.id}{' closed' if self._closed else ''}>"

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, frame: str) -> None:
        """Queue one encoded frame, or raise :class:`DeliveryError`."""
        if self._closed:
            raise DeliveryError(f"subscriber #{self.id} is closed")
        # One slot is reserved for the close sentinel.
        if self._queue.qsize() >= self._max_queue:
            raise DeliveryError(f"subscriber #{self.id} queue is full")
        self._queue.put_nowait(frame)

    def close(self) -> None:
        """Stop accepting frames; the stream ends once queued frames drain.

        Idempotent.
        """
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)

    async def frames(self, keepalive: Optional[float] = None) -> AsyncIterator[str]:
        """Yield queued frames in order until the subscriber is closed.

        With a positive *keepalive*, :data:`KEEPALIVE_FRAME` is yielded after
        that many idle seconds.
        """
        timeout = keepalive if keepalive and keepalive > 0 else None
        while True:
            try:
                frame = await asyncio.wait_for(self._queue.get(), timeout=timeout)
            except asyncio.TimeoutError:
                if self._closed:
                    return
                yield KEEPALIVE_FRAME
                continue
            if frame is None:
                return
            yield frame


class BroadcastTransport:
    """The subscriber set for one server instance."""

    def __init__(self) -> None:
        self._subscribers: dict[int, Subscriber] = {}
        self._lock = threading.Lock()

    def register(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers[subscriber.id] = subscriber
            count = len(self._subscribers)
        logger.info("Subscriber #%d connected (%d connected)", subscriber.id, count)

    def unregister(self, subscriber: Subscriber) -> None:
        with self._lock:
            removed = self._subscribers.pop(subscriber.id, None)
            count = len(self._subscribers)
        if removed is not None:
            logger.info("Subscriber #%d disconnected (%d connected)", subscriber.id, count)

    def count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def broadcast(self, event: Event) -> None:
        """Deliver *event* to every subscriber registered at call time."""
        frame = event.to_sse()
        with self._lock:
            snapshot = list(self._subscribers.values())

        for subscriber in snapshot:
            try:
                subscriber.deliver(frame)
            except DeliveryError as exc:
                logger.warning("Error broadcasting to subscriber: %s", exc)
                self.unregister(subscriber)
                subscriber.close()

    def close_all(self) -> None:
        """Close and forget every subscriber (used on shutdown)."""
        with self._lock:
            snapshot = list(self._subscribers.values())
            self._subscribers.clear()
        for subscriber in snapshot:
            subscriber.close()
