"""scrapecast CLI: entry-point for running the server and one-off scrapes.

Usage:
    scrapecast --help

Commands:
    serve      → run the HTTP/SSE server under uvicorn
    scrape     → scrape and summarise one URL locally
    summarize  → summarise a local text file
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from scrapecast.config import settings

app = typer.Typer(
    name="scrapecast",
    help="scrapecast server CLI.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind."),
    port: int = typer.Option(settings.port, help="Port to listen on."),
    log_level: str = typer.Option(settings.log_level, help="Logging level."),
) -> None:
    """Start the scrape server (``/events``, ``/scrape``, ``/status``)."""
    import uvicorn

    from scrapecast.api.app import create_app

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    typer.echo(f"[serve] Starting scrapecast server on {host}:{port} …")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=log_level.lower())


# ---------------------------------------------------------------------------
# One-off commands
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="URL to scrape."),
    selector: Optional[str] = typer.Option(None, help="CSS selector to extract."),
    max_length: int = typer.Option(
        settings.summary_max_length, help="Target summary length in characters."
    ),
) -> None:
    """Scrape a URL and print its summary (no events are streamed)."""
    from dataclasses import replace

    from scrapecast.broadcast.transport import BroadcastTransport
    from scrapecast.orchestrator import ScrapeOrchestrator
    from scrapecast.results import Failed
    from scrapecast.scraper.models import ScrapeRequest

    orchestrator = ScrapeOrchestrator(
        BroadcastTransport(), settings=replace(settings, summary_max_length=max_length)
    )
    typer.echo(f"[scrape] Fetching {url!r} …")
    outcome = asyncio.run(orchestrator.execute(ScrapeRequest(url=url, selector=selector)))

    if isinstance(outcome, Failed):
        typer.echo(f"[scrape] {outcome.message}", err=True)
        raise typer.Exit(1)

    result = outcome.value
    typer.echo(f"[scrape] Words  : {len(result.content.split())}")
    typer.echo("")
    typer.echo(result.summary)


@app.command("summarize")
def summarize_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file."),
    max_length: int = typer.Option(
        settings.summary_max_length, help="Target summary length in characters."
    ),
) -> None:
    """Print an extractive summary of a local text file."""
    from scrapecast.scraper.extractor import normalize_text
    from scrapecast.scraper.summarizer import summarize

    text = normalize_text(path.read_text(encoding="utf-8"))
    typer.echo(summarize(text, max_length))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
