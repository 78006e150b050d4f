"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ScrapeRequest:
    """One inbound scrape job; discarded once the orchestrator finishes."""

    url: str
    selector: Optional[str] = None


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass
class ScrapeResult:
    """Normalised page text and its extractive summary."""

    url: str
    content: str
    summary: str
