"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from scrapecast.api import app

    uvicorn scrapecast.api:app --reload
"""

from scrapecast.api.app import app, create_app

__all__ = ["app", "create_app"]
