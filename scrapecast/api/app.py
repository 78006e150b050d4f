"""FastAPI application factory.

State
-----
Each application instance owns exactly one
:class:`~scrapecast.broadcast.transport.BroadcastTransport` and one
:class:`~scrapecast.orchestrator.ScrapeOrchestrator` built on it, both
stored on ``app.state``.  Nothing is shared between instances, so tests can
run several apps side by side.

Lifespan
--------
On shutdown every open ``/events`` stream is closed so uvicorn can exit
without waiting for clients to hang up.

Routes
------
    GET  /events   — Server-Sent Events stream of scrape lifecycle events
    POST /scrape   — scrape, summarise and broadcast one URL
    GET  /status   — liveness plus connected subscriber count
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

import scrapecast
from scrapecast.api.middleware import CorsHeadersMiddleware
from scrapecast.api.routers import events as events_router
from scrapecast.api.routers import scrape as scrape_router
from scrapecast.api.routers import status as status_router
from scrapecast.broadcast.events import Event
from scrapecast.broadcast.transport import BroadcastTransport
from scrapecast.config import Settings, settings as default_settings
from scrapecast.orchestrator import ScrapeOrchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close all subscriber streams on shutdown."""
    logger.info("scrapecast %s ready", scrapecast.__version__)
    try:
        yield
    finally:
        app.state.transport.close_all()


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def _not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Unknown paths and unsupported methods both answer a plain 404."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return await http_exception_handler(request, exc)


async def _invalid_body_handler(request: Request, exc: RequestValidationError) -> Response:
    """A malformed ``/scrape`` body is a failed scrape like any other."""
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
    message = f"Invalid request body: {detail}"
    request.app.state.transport.broadcast(Event.error(message))
    return JSONResponse({"error": message}, status_code=400)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    settings = settings or default_settings

    app = FastAPI(
        title="scrapecast",
        description=(
            "Scrapes a web page, extracts and summarises its text, and "
            "streams scrape lifecycle events to every connected client "
            "over Server-Sent Events."
        ),
        version=scrapecast.__version__,
        lifespan=lifespan,
        # The route table is fixed; interactive docs would add paths.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    transport = BroadcastTransport()
    app.state.settings = settings
    app.state.transport = transport
    app.state.orchestrator = ScrapeOrchestrator(transport, settings=settings)

    app.add_middleware(CorsHeadersMiddleware)
    app.add_exception_handler(StarletteHTTPException, _not_found_handler)
    app.add_exception_handler(RequestValidationError, _invalid_body_handler)

    app.include_router(events_router.router, tags=["events"])
    app.include_router(scrape_router.router, tags=["scrape"])
    app.include_router(status_router.router, tags=["status"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn scrapecast.api.app:app --reload
app = create_app()
