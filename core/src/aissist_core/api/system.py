from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from aissist_core import __version__

router = APIRouter(tags=["system"])


class Health(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
    auth: str
    ai: str
    endpoints: list[str]


@router.get("/health", response_model=Health)
@router.get("/status", response_model=Health, include_in_schema=False)
async def health(request: Request) -> Health:
    # Keep this stable and boring: liveness plus the route list, nothing from config.
    endpoints = getattr(request.app.state, "available_endpoints", None) or []
    return Health(
        status="OK",
        service="AIssist",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        auth="enabled",
        ai="enabled",
        endpoints=list(endpoints),
    )
