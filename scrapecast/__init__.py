"""scrapecast: scrape a page, summarise it, and stream the result to SSE subscribers."""

__version__ = "0.1.0"
