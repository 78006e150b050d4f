"""Live event stream (Server-Sent Events).

Routes
------
GET /events    Opens a ``text/event-stream`` that stays open until the client
               disconnects.  Every scrape lifecycle event is pushed as::

                   data: {"type": "scrape_start", "payload": {...}}

No history is replayed: a subscriber sees only events broadcast while it is
connected.
"""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from scrapecast.broadcast.transport import BroadcastTransport, Subscriber

router = APIRouter()


# ---------------------------------------------------------------------------
# SSE generator
# ---------------------------------------------------------------------------

async def _events_sse_generator(
    transport: BroadcastTransport,
    subscriber: Subscriber,
    keepalive: float,
) -> AsyncIterator[str]:
    """Forward the subscriber's frames; unregister however the stream ends."""
    try:
        async for frame in subscriber.frames(keepalive=keepalive):
            yield frame
    finally:
        transport.unregister(subscriber)
        subscriber.close()


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

@router.get("/events")
async def events(request: Request) -> StreamingResponse:
    """Register a new subscriber and stream broadcast events to it."""
    transport: BroadcastTransport = request.app.state.transport
    settings = request.app.state.settings

    subscriber = Subscriber(max_queue=settings.subscriber_queue_size)
    transport.register(subscriber)

    return StreamingResponse(
        _events_sse_generator(transport, subscriber, settings.sse_keepalive_interval),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",   # disable nginx proxy buffering
        },
    )
