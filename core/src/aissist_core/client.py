"""HTTP client for the AIssist auth + AI endpoints.

Holds an optional session (token + user snapshot) and issues plain HTTP calls.
Methods never raise on transport or server errors; they return a ``ClientResult``
with ``success=False`` and a human-readable ``error`` instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from aissist_core.session import SessionStore, StoredSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://aissist.rafante-tec.online"
DEFAULT_TIMEOUT_S = 10.0

CONNECTION_ERROR = "Erro de conexão"
AI_CONNECTION_ERROR = "Erro de conexão com IA"

UPGRADE_PITCH = (
    "⚠️ Limite de consultas atingido!\n\n"
    "Você atingiu o limite do seu plano {tier}.\n\n"
    "💎 Faça upgrade para mais consultas:\n"
    "• Premium: 100/dia por R$ 19/mês\n"
    "• Pro: 500/dia por R$ 39/mês"
)


@dataclass(frozen=True)
class ClientResult:
    success: bool
    user: dict[str, Any] | None = None
    response: str | None = None
    error: str | None = None


def _error_from(body: Any, status_code: int) -> str:
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)
    return f"HTTP {status_code}"


class AIssistClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http_client: httpx.Client | None = None,
        session_store: SessionStore | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._owns_http = http_client is None
        self._store = session_store

        self.token: str | None = None
        self.user: dict[str, Any] | None = None

        stored = session_store.read() if session_store is not None else None
        if stored is not None:
            self.token = stored.token
            self.user = stored.user or None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> AIssistClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _remember(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user
        if self._store is not None:
            self._store.write(StoredSession(token=token, user=user))

    def _authenticate(self, path: str, payload: dict[str, Any]) -> ClientResult:
        try:
            response = self._http.post(path, json=payload)
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Auth request to %s failed: %s", path, exc)
            return ClientResult(success=False, error=CONNECTION_ERROR)

        if not response.is_success:
            return ClientResult(success=False, error=_error_from(body, response.status_code))

        self._remember(body["token"], body["user"])
        return ClientResult(success=True, user=self.user)

    def login(self, email: str, password: str) -> ClientResult:
        return self._authenticate("/auth/login", {"email": email, "password": password})

    def signup(self, email: str, password: str, tier: str = "free") -> ClientResult:
        return self._authenticate(
            "/auth/signup", {"email": email, "password": password, "planType": tier}
        )

    def validate_token(self) -> bool:
        """Refresh the user snapshot from /auth/me; any failure ends the session."""

        if not self.token:
            return False

        try:
            response = self._http.get("/auth/me", headers=self._auth_headers())
            body = response.json() if response.is_success else None
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Token validation failed: %s", exc)
            self.logout()
            return False

        if body is None:
            self.logout()
            return False

        self._remember(self.token, body.get("user") or {})
        return True

    def logout(self) -> None:
        self.token = None
        self.user = None
        if self._store is not None:
            self._store.clear()

    def is_logged_in(self) -> bool:
        return bool(self.token and self.user)

    def get_usage(self) -> dict[str, Any] | None:
        if not self.token:
            return None

        try:
            response = self._http.get("/auth/usage", headers=self._auth_headers())
            if response.is_success:
                return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch usage: %s", exc)
        return None

    def send_ai_query(self, query: str) -> ClientResult:
        try:
            response = self._http.post(
                "/ai/chat", json={"message": query}, headers=self._auth_headers()
            )
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("AI query failed: %s", exc)
            return ClientResult(success=False, error=AI_CONNECTION_ERROR)

        if not response.is_success:
            return ClientResult(success=False, error=_error_from(body, response.status_code))
        return ClientResult(success=True, response=body.get("response"))

    def enhanced_reply(self, query: str) -> str:
        """Text to show the user for a query, including an upgrade pitch on rate limits."""

        result = self.send_ai_query(query)
        if result.success:
            return result.response or ""

        error = result.error or ""
        if "rate limit" in error.lower():
            tier = (self.user or {}).get("subscriptionTier") or "free"
            return UPGRADE_PITCH.format(tier=tier)
        return f"❌ Erro: {error}"
