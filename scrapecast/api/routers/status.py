"""Health endpoint.

Routes
------
GET /status    {"status": "ok", "connectedClients": <int>}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/status")
def status(request: Request) -> dict[str, Any]:
    return {
        "status": "ok",
        "connectedClients": request.app.state.transport.count(),
    }
