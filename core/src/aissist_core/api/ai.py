from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, model_validator

from aissist_core import catalog
from aissist_core.api.models import CamelModel
from aissist_core.auth import require_bearer_token
from aissist_core.config import AIConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


def _ai_config(request: Request) -> AIConfig:
    config = getattr(request.app.state, "aissist_config", None)
    return config.ai if config is not None else AIConfig()


class ChatRequest(BaseModel):
    message: str | None = None
    query: str | None = None
    context: Any | None = None

    @model_validator(mode="after")
    def _require_text(self) -> ChatRequest:
        if not (self.message or "").strip() and not (self.query or "").strip():
            raise ValueError("Either 'message' or 'query' must be provided")
        return self

    @property
    def text(self) -> str:
        # 'message' wins when both are sent.
        return (self.message or "").strip() or (self.query or "").strip()


class Recommendation(BaseModel):
    title: str
    rating: float
    year: int


class ChatResponse(CamelModel):
    success: bool = True
    response: str
    recommendations: list[Recommendation]
    queries_remaining: int
    processing_time: int


class AIStatus(BaseModel):
    success: bool = True
    service: str
    healthy: bool
    endpoint: str
    model: str
    uptime: int
    timestamp: str
    version: str


@router.post(
    "/chat",
    response_model=ChatResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def chat(request: Request, payload: ChatRequest) -> ChatResponse:
    text = payload.text
    logger.info("AI chat: message=%r", text)

    delay_ms = _ai_config(request).response_delay_ms
    if delay_ms:
        await asyncio.sleep(delay_ms / 1000)

    return ChatResponse(
        response=catalog.pick_chat_reply(text),
        recommendations=[Recommendation.model_validate(r) for r in catalog.RECOMMENDATIONS],
        queries_remaining=catalog.CHAT_QUERIES_REMAINING,
        processing_time=catalog.simulated_processing_ms(),
    )


@router.get("/status", response_model=AIStatus)
async def status(request: Request) -> AIStatus:
    ai = _ai_config(request)
    started = getattr(request.app.state, "started_monotonic", None)
    uptime = int(time.monotonic() - started) if started is not None else 0

    return AIStatus(
        service=ai.service,
        healthy=True,
        endpoint=ai.endpoint,
        model=ai.model,
        uptime=uptime,
        timestamp=datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        version=ai.version,
    )
