"""Scrape-and-summarise pipeline that reports its lifecycle as broadcast events.

``ScrapeOrchestrator.execute`` is the single entry point.  One call runs the
stages below strictly in sequence and returns an
:class:`~scrapecast.results.Ok` or :class:`~scrapecast.results.Failed`:

    validate → [start] → fetch → extract → summarise → [result]
                              ╰──────── any failure ────────╯→ [error]

Bracketed stages are broadcasts.  A request without a URL emits only
``error`` and never reaches the network; every other request emits ``start``
followed by exactly one of ``result`` or ``error``, whether or not anyone is
subscribed.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from scrapecast.broadcast.events import Event
from scrapecast.broadcast.transport import BroadcastTransport
from scrapecast.config import Settings, settings as default_settings
from scrapecast.results import ErrorKind, Failed, Ok, Outcome
from scrapecast.scraper.extractor import extract_content
from scrapecast.scraper.fetcher import fetch_url
from scrapecast.scraper.models import RawPage, ScrapeRequest, ScrapeResult
from scrapecast.scraper.summarizer import summarize

logger = logging.getLogger(__name__)

URL_REQUIRED = "URL is required"

Fetcher = Callable[[str, Optional[float]], Awaitable[Outcome[RawPage]]]


class ScrapeOrchestrator:
    """Drives one scrape per :meth:`execute` call against a shared transport."""

    def __init__(
        self,
        transport: BroadcastTransport,
        settings: Optional[Settings] = None,
        fetcher: Fetcher = fetch_url,
    ) -> None:
        self.transport = transport
        self.settings = settings or default_settings
        self._fetch = fetcher

    async def execute(self, request: ScrapeRequest) -> Outcome[ScrapeResult]:
        url = request.url
        if not url:
            self.transport.broadcast(Event.error(URL_REQUIRED))
            return Failed(ErrorKind.VALIDATION, URL_REQUIRED)

        logger.info("Scrape started: %s", url)
        self.transport.broadcast(Event.start(url))

        outcome = await self._run_pipeline(url, request.selector)

        if isinstance(outcome, Failed):
            logger.warning("Scrape failed: %s", outcome.message)
            self.transport.broadcast(Event.error(outcome.message))
            return outcome

        result = outcome.value
        logger.info("Scrape finished: %s (%d chars)", url, len(result.content))
        self.transport.broadcast(Event.result(url, result.summary, result.content))
        return outcome

    async def _run_pipeline(
        self, url: str, selector: Optional[str]
    ) -> Outcome[ScrapeResult]:
        fetched = await self._fetch(url, self.settings.request_timeout)
        if isinstance(fetched, Failed):
            return fetched

        extracted = extract_content(fetched.value.html, selector)
        if isinstance(extracted, Failed):
            return Failed(extracted.kind, f"Failed to scrape {url}: {extracted.message}")

        content = extracted.value
        summary = summarize(content, self.settings.summary_max_length)
        return Ok(ScrapeResult(url=url, content=content, summary=summary))
