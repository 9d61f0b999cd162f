from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

DEMO_PAGE_FILENAME = "demo.html"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])

# Mock numbers shown on the dashboards.
DASHBOARD_STATS: dict[str, Any] = {
    "total_users": 127,
    "active_subscriptions": 23,
    "queries_today": 847,
    "monthly_revenue": "R$ 1.247",
    "conversion_rate": "18.3%",
}

SYSTEMS: list[tuple[str, str]] = [
    ("Database PostgreSQL", "Online"),
    ("IA Service (ReViva LLM)", "Online"),
    ("API Gateway", "Online"),
    ("Payment System", "Ready"),
]


def _deployed_at(request: Request) -> datetime:
    started = getattr(request.app.state, "started_at", None)
    return started if isinstance(started, datetime) else datetime.now(UTC)


def _context(request: Request, title: str) -> dict[str, Any]:
    deployed = _deployed_at(request)
    return {
        "title": title,
        "stats": DASHBOARD_STATS,
        "systems": SYSTEMS,
        "deployed_at_iso": deployed.isoformat(timespec="seconds").replace("+00:00", "Z"),
        "deployed_at_display": deployed.strftime("%d/%m/%Y, %H:%M:%S"),
    }


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
@router.get("/admin", response_class=HTMLResponse)
async def admin_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "admin.html", _context(request, "AIssist - Admin Dashboard")
    )


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "dashboard.html", _context(request, "AIssist - Dashboard")
    )


@router.get("/demo", response_model=None)
@router.get("/demo.html", response_model=None, include_in_schema=False)
async def demo_page(request: Request) -> Response:
    """Serve ${pages_dir}/demo.html when present, else the built-in fallback page."""

    paths = getattr(request.app.state, "aissist_paths", None)
    if paths is not None:
        candidate = paths.pages_dir / DEMO_PAGE_FILENAME
        if candidate.is_file():
            return FileResponse(candidate, media_type="text/html")

    logger.info("Demo file not found, serving fallback page")
    endpoints = getattr(request.app.state, "available_endpoints", None) or []
    return templates.TemplateResponse(
        request,
        "demo.html",
        {"title": "AIssist - Auth Working!", "endpoints": endpoints},
    )
