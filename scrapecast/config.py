"""scrapecast runtime settings.

Every field reads its default from an environment variable when a
:class:`Settings` is built.  A `.env` beside the package is read once at
import time and never overrides variables already set in the process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(
        default_factory=lambda: os.environ.get("SCRAPECAST_HOST", "0.0.0.0")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPECAST_PORT", "8000"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    summary_max_length: int = field(
        default_factory=lambda: int(os.environ.get("SUMMARY_MAX_LENGTH", "500"))
    )

    # ------------------------------------------------------------------
    # Event stream
    # ------------------------------------------------------------------
    subscriber_queue_size: int = field(
        default_factory=lambda: int(os.environ.get("SUBSCRIBER_QUEUE_SIZE", "100"))
    )
    sse_keepalive_interval: float = field(
        default_factory=lambda: float(os.environ.get("SSE_KEEPALIVE_INTERVAL", "15.0"))
    )


# Shared by callers that do not build their own.
settings = Settings()
