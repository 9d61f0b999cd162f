from __future__ import annotations

import logging
import random
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends
from pydantic import Field, field_validator

from aissist_core import catalog
from aissist_core.api.models import CamelModel
from aissist_core.auth import (
    LOGIN_TOKEN_PREFIX,
    SIGNUP_TOKEN_PREFIX,
    issue_token,
    require_bearer_token,
)
from aissist_core.catalog import SubscriptionTier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _utc_iso(moment: datetime | None = None) -> str:
    value = moment or datetime.now(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SignupRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = ""
    plan_type: SubscriptionTier = catalog.DEFAULT_TIER

    @field_validator("plan_type", mode="before")
    @classmethod
    def _default_plan(cls, value: object) -> object:
        # An absent, null or blank plan means the free tier.
        if value is None or (isinstance(value, str) and not value.strip()):
            return catalog.DEFAULT_TIER
        return value


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = ""


class User(CamelModel):
    id: int
    email: str
    subscription_tier: SubscriptionTier
    remaining_queries: int
    total_queries: int | None = None
    created_at: str | None = None
    last_login_at: str | None = None


class AuthResponse(CamelModel):
    success: bool = True
    user: User
    token: str
    message: str


class MeResponse(CamelModel):
    success: bool = True
    user: User


class Usage(CamelModel):
    today_queries: int
    daily_limit: int
    remaining_queries: int
    reset_time: str
    subscription_tier: SubscriptionTier


class UsageResponse(CamelModel):
    success: bool = True
    usage: Usage


@router.post(
    "/signup",
    response_model=AuthResponse,
    response_model_exclude_none=True,
)
async def signup(payload: SignupRequest) -> AuthResponse:
    logger.info("Signup: email=%s plan=%s", payload.email, payload.plan_type)

    user = User(
        id=random.randrange(1000),
        email=payload.email,
        subscription_tier=payload.plan_type,
        remaining_queries=catalog.quota_for_tier(payload.plan_type),
        created_at=_utc_iso(),
    )
    return AuthResponse(
        user=user,
        token=issue_token(SIGNUP_TOKEN_PREFIX),
        message=catalog.SIGNUP_MESSAGE,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
)
async def login(payload: LoginRequest) -> AuthResponse:
    logger.info("Login: email=%s", payload.email)

    user = User(
        id=1,
        email=payload.email,
        subscription_tier=catalog.LOGIN_TIER,
        remaining_queries=catalog.LOGIN_REMAINING_QUERIES,
        last_login_at=_utc_iso(),
    )
    return AuthResponse(
        user=user,
        token=issue_token(LOGIN_TOKEN_PREFIX),
        message=catalog.LOGIN_MESSAGE,
    )


@router.get(
    "/me",
    response_model=MeResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_bearer_token)],
)
async def me() -> MeResponse:
    # The token is never looked up; every caller is the demo account.
    user = User(
        id=1,
        email=catalog.DEMO_EMAIL,
        subscription_tier=catalog.LOGIN_TIER,
        remaining_queries=catalog.LOGIN_REMAINING_QUERIES,
        total_queries=catalog.DEMO_TOTAL_QUERIES,
        created_at=catalog.DEMO_CREATED_AT,
        last_login_at=_utc_iso(),
    )
    return MeResponse(user=user)


@router.get(
    "/usage",
    response_model=UsageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def usage() -> UsageResponse:
    daily_limit = catalog.quota_for_tier(catalog.LOGIN_TIER)
    reset_time = _utc_iso(datetime.now(UTC) + timedelta(days=1))
    return UsageResponse(
        usage=Usage(
            today_queries=catalog.USAGE_TODAY_QUERIES,
            daily_limit=daily_limit,
            remaining_queries=daily_limit - catalog.USAGE_TODAY_QUERIES,
            reset_time=reset_time,
            subscription_tier=catalog.LOGIN_TIER,
        )
    )
