"""Content extraction: turns raw HTML into normalised plain text."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from scrapecast.results import ErrorKind, Failed, Ok, Outcome

# Elements that never carry readable page content.
_CHROME_TAGS = ["script", "style", "nav", "header", "footer"]

_WHITESPACE_RE = re.compile(r"\s+")
_NEWLINES_RE = re.compile(r"\n+")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse(html: str) -> Optional[BeautifulSoup]:
    if not html or not html.strip():
        return None
    return BeautifulSoup(html, "html.parser")


def _select_text(soup: BeautifulSoup, selector: str) -> str:
    """Join the text of every element matching *selector*, one per line."""
    return "\n".join(el.get_text() for el in soup.select(selector))


def _default_text(soup: BeautifulSoup) -> str:
    """Return the first ``<article>`` text, else the de-chromed page text.

    ``html.parser`` only builds a ``<body>`` when the markup has one, so a
    bodiless page falls back to the whole document minus its ``<head>``.
    """
    article = soup.find("article")
    if article is not None:
        return article.get_text()

    # soup is a private parse of the page, so it is safe to mutate.
    for tag in soup(_CHROME_TAGS):
        tag.decompose()
    if soup.body is not None:
        return soup.body.get_text()
    for tag in soup(["head", "title"]):
        tag.decompose()
    return soup.get_text()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space and newline runs to one newline."""
    text = _WHITESPACE_RE.sub(" ", text)
    text = _NEWLINES_RE.sub("\n", text)
    return text.strip()


def extract_content(html: str, selector: Optional[str] = None) -> Outcome[str]:
    """Extract readable text from *html*.

    With a *selector*, the text of every matching element is used.  Without
    one, the first ``<article>`` wins; failing that, ``<body>`` (or the whole
    document when it has none) is used after
    ``script``/``style``/``nav``/``header``/``footer`` are stripped.

    Returns ``Ok(text)`` with normalised text, or ``Failed(PARSE, detail)``
    when the document is empty or the selector is invalid.  The detail does
    not include the URL; the orchestrator adds it.
    """
    soup = _parse(html)
    if soup is None:
        return Failed(ErrorKind.PARSE, "Failed to parse HTML")

    if selector:
        try:
            content = _select_text(soup, selector)
        except SelectorSyntaxError as exc:
            return Failed(ErrorKind.PARSE, f"Invalid selector {selector!r}: {exc}")
    else:
        content = _default_text(soup)

    return Ok(normalize_text(content))
