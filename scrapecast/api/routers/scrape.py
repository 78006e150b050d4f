"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://...", "selector": "optional css"}

Runs the scrape pipeline to completion before replying:

- 200 ``{"success": true}``
- 400 ``{"error": "..."}`` (missing URL, fetch or parse failure)

Progress is broadcast to ``/events`` subscribers as a side effect.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from scrapecast.orchestrator import ScrapeOrchestrator
from scrapecast.results import Failed
from scrapecast.scraper.models import ScrapeRequest

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeBody(BaseModel):
    # Optional here so a missing URL reaches the orchestrator's own check.
    url: Optional[str] = None
    selector: Optional[str] = None


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

@router.post("/scrape")
async def scrape(body: ScrapeBody, request: Request) -> JSONResponse:
    """Scrape and summarise ``body.url``; broadcast start/result/error."""
    orchestrator: ScrapeOrchestrator = request.app.state.orchestrator

    outcome = await orchestrator.execute(
        ScrapeRequest(url=body.url or "", selector=body.selector)
    )
    if isinstance(outcome, Failed):
        return JSONResponse({"error": outcome.message}, status_code=400)
    return JSONResponse({"success": True})
