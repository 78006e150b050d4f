"""Async HTTP fetcher with a rotating browser User-Agent."""

from __future__ import annotations

import random
from typing import Optional

import httpx

from scrapecast.config import settings
from scrapecast.results import ErrorKind, Failed, Ok, Outcome
from scrapecast.scraper.models import RawPage

USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Edge/122.0.0.0 Safari/537.36",
)

_BASE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def random_user_agent() -> str:
    """Return one entry of :data:`USER_AGENTS`, chosen uniformly."""
    return random.choice(USER_AGENTS)


def build_headers() -> dict[str, str]:
    return {"User-Agent": random_user_agent(), **_BASE_HEADERS}


def _describe(exc: Exception) -> str:
    # httpx timeouts frequently stringify to ""
    return str(exc) or exc.__class__.__name__


async def fetch_url(url: str, timeout: Optional[float] = None) -> Outcome[RawPage]:
    """Fetch *url* and return ``Ok(RawPage)`` or ``Failed(FETCH, ...)``.

    The request is bounded by *timeout* seconds (``settings.request_timeout``
    when omitted).  A non-2xx status, a transport error, and a timeout all
    come back as a :class:`~scrapecast.results.Failed` whose message names
    the URL.  Nothing is retried.
    """
    if timeout is None:
        timeout = settings.request_timeout

    try:
        async with httpx.AsyncClient(
            headers=build_headers(),
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return Failed(ErrorKind.FETCH, f"Failed to scrape {url}: {_describe(exc)}")
    except httpx.InvalidURL as exc:
        return Failed(ErrorKind.FETCH, f"Failed to scrape {url}: {_describe(exc)}")

    if not response.is_success:
        return Failed(
            ErrorKind.FETCH,
            f"Failed to scrape {url}: HTTP error! status: {response.status_code}",
        )

    return Ok(RawPage(url=url, html=response.text, status_code=response.status_code))
