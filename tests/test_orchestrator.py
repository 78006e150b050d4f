"""Tests for the scrape orchestrator.

A recording subscriber on a private transport captures every broadcast.
Most tests inject a fake fetcher; the end-to-end cases use ``respx`` so the
real httpx fetcher runs without network access.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import httpx
import respx

from scrapecast.broadcast.events import decode_unicode
from scrapecast.broadcast.transport import BroadcastTransport, DeliveryError, Subscriber
from scrapecast.config import Settings
from scrapecast.orchestrator import URL_REQUIRED, ScrapeOrchestrator
from scrapecast.results import ErrorKind, Failed, Ok
from scrapecast.scraper.models import RawPage, ScrapeRequest

_HTML = """\
<html><body>
  <nav>Navigation</nav>
  <article>
    <p>The first sentence of the story is informative enough. A second line follows here!</p>
    <p>Unicode works too: café 日本語 🎉.</p>
  </article>
</body></html>
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class RecordingSubscriber(Subscriber):
    def __init__(self) -> None:
        super().__init__()
        self.received: list[dict] = []

    def deliver(self, frame: str) -> None:
        self.received.append(json.loads(frame[len("data: "):]))

    @property
    def types(self) -> list[str]:
        return [e["type"] for e in self.received]


class BrokenSubscriber(Subscriber):
    def deliver(self, frame: str) -> None:
        raise DeliveryError("gone")


class FakeFetcher:
    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.calls: list[str] = []

    async def __call__(self, url: str, timeout: Optional[float] = None):
        self.calls.append(url)
        return self.outcome


def _make(fetcher=None, **overrides):
    transport = BroadcastTransport()
    recorder = RecordingSubscriber()
    transport.register(recorder)
    settings = Settings(**overrides)
    kwargs = {"fetcher": fetcher} if fetcher is not None else {}
    return ScrapeOrchestrator(transport, settings=settings, **kwargs), recorder


def _ok_page(url: str = "https://example.com/story", html: str = _HTML):
    return Ok(RawPage(url=url, html=html, status_code=200))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestValidation:
    def test_empty_url_fails_without_fetch_or_start(self) -> None:
        fetcher = FakeFetcher(_ok_page())
        orchestrator, recorder = _make(fetcher)

        outcome = asyncio.run(orchestrator.execute(ScrapeRequest(url="")))

        assert outcome == Failed(ErrorKind.VALIDATION, URL_REQUIRED)
        assert outcome.message == "URL is required"
        assert fetcher.calls == []
        assert recorder.types == ["scrape_error"]
        assert recorder.received[0]["payload"] == {"error": "URL is required"}

    def test_blank_url_is_fetched_as_given(self) -> None:
        failure = Failed(ErrorKind.FETCH, "Failed to scrape    : bad URL")
        fetcher = FakeFetcher(failure)
        orchestrator, recorder = _make(fetcher)

        outcome = asyncio.run(orchestrator.execute(ScrapeRequest(url="   ")))

        assert outcome == failure
        assert fetcher.calls == ["   "]
        assert recorder.types == ["scrape_start", "scrape_error"]

    def test_start_event_carries_url_as_received(self) -> None:
        orchestrator, recorder = _make(FakeFetcher(_ok_page()))

        asyncio.run(orchestrator.execute(ScrapeRequest(url=" https://example.com/story")))

        assert recorder.received[0]["payload"] == {"url": " https://example.com/story"}
        assert recorder.received[1]["payload"]["url"] == " https://example.com/story"


class TestSuccess:
    def test_emits_start_then_result(self) -> None:
        orchestrator, recorder = _make(FakeFetcher(_ok_page()))

        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )

        assert isinstance(outcome, Ok)
        assert recorder.types == ["scrape_start", "scrape_result"]
        assert recorder.received[0]["payload"] == {"url": "https://example.com/story"}

        payload = recorder.received[1]["payload"]
        assert payload["url"] == "https://example.com/story"
        assert payload["summary"] == outcome.value.summary
        assert decode_unicode(payload["fullContent"]) == outcome.value.content

    def test_result_content_is_article_text(self) -> None:
        orchestrator, _ = _make(FakeFetcher(_ok_page()))

        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )

        content = outcome.value.content
        assert "Navigation" not in content
        assert content.endswith("café 日本語 🎉.")

    def test_summary_respects_configured_length(self) -> None:
        orchestrator, _ = _make(FakeFetcher(_ok_page()), summary_max_length=0)

        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )

        assert outcome.value.summary == "The first sentence of the story is informative enough."

    def test_selector_is_passed_to_extractor(self) -> None:
        html = "<html><body><p class='keep'>Kept text.</p><p>Dropped.</p></body></html>"
        orchestrator, _ = _make(FakeFetcher(_ok_page(html=html)))

        outcome = asyncio.run(
            orchestrator.execute(
                ScrapeRequest(url="https://example.com/story", selector="p.keep")
            )
        )

        assert outcome.value.content == "Kept text."

    def test_no_subscribers_still_succeeds(self) -> None:
        orchestrator = ScrapeOrchestrator(
            BroadcastTransport(), settings=Settings(), fetcher=FakeFetcher(_ok_page())
        )
        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )
        assert isinstance(outcome, Ok)

    def test_broken_subscriber_does_not_affect_outcome(self) -> None:
        orchestrator, recorder = _make(FakeFetcher(_ok_page()))
        orchestrator.transport.register(BrokenSubscriber())

        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )

        assert isinstance(outcome, Ok)
        assert recorder.types == ["scrape_start", "scrape_result"]
        assert orchestrator.transport.count() == 1


class TestFailure:
    def test_fetch_failure_emits_single_error(self) -> None:
        failure = Failed(ErrorKind.FETCH, "Failed to scrape https://x.test/: boom")
        orchestrator, recorder = _make(FakeFetcher(failure))

        outcome = asyncio.run(orchestrator.execute(ScrapeRequest(url="https://x.test/")))

        assert outcome == failure
        assert recorder.types == ["scrape_start", "scrape_error"]
        assert recorder.received[1]["payload"] == {"error": failure.message}

    def test_parse_failure_message_names_url(self) -> None:
        orchestrator, recorder = _make(FakeFetcher(_ok_page(html="")))

        outcome = asyncio.run(
            orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
        )

        assert isinstance(outcome, Failed)
        assert outcome.kind is ErrorKind.PARSE
        assert outcome.message == (
            "Failed to scrape https://example.com/story: Failed to parse HTML"
        )
        assert recorder.types == ["scrape_start", "scrape_error"]


class TestWithHttp:
    def test_unreachable_host(self) -> None:
        orchestrator, recorder = _make()
        with respx.mock:
            respx.get("https://unreachable.invalid/").mock(
                side_effect=httpx.ConnectError("Name or service not known")
            )
            outcome = asyncio.run(
                orchestrator.execute(ScrapeRequest(url="https://unreachable.invalid/"))
            )

        assert isinstance(outcome, Failed)
        assert "https://unreachable.invalid/" in outcome.message
        assert recorder.types == ["scrape_start", "scrape_error"]

    def test_real_fetcher_success(self) -> None:
        orchestrator, recorder = _make()
        with respx.mock:
            respx.get("https://example.com/story").mock(
                return_value=httpx.Response(200, text=_HTML)
            )
            outcome = asyncio.run(
                orchestrator.execute(ScrapeRequest(url="https://example.com/story"))
            )

        assert isinstance(outcome, Ok)
        assert recorder.types == ["scrape_start", "scrape_result"]
