from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str
    details: Any | None = None


class NotFoundResponse(ErrorResponse):
    path: str
    available_endpoints: list[str]


class CamelModel(BaseModel):
    """Snake_case fields on the Python side, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def fail(*, code: str, message: str, details: Any | None = None) -> ErrorResponse:
    return ErrorResponse(error=code, message=message, details=details)


def not_found(*, path: str, available_endpoints: list[str]) -> NotFoundResponse:
    return NotFoundResponse(
        error="not_found",
        message="Not found",
        path=path,
        available_endpoints=available_endpoints,
    )
