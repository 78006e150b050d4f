"""Scraper package: web fetch, content extraction and summarisation."""

from scrapecast.scraper.extractor import extract_content, normalize_text
from scrapecast.scraper.fetcher import fetch_url
from scrapecast.scraper.models import RawPage, ScrapeRequest, ScrapeResult
from scrapecast.scraper.summarizer import summarize

__all__ = [
    "fetch_url",
    "extract_content",
    "normalize_text",
    "summarize",
    "RawPage",
    "ScrapeRequest",
    "ScrapeResult",
]
