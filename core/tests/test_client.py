from __future__ import annotations

import json
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from aissist_core.app import create_app
from aissist_core.client import AI_CONNECTION_ERROR, CONNECTION_ERROR, AIssistClient
from aissist_core.session import SessionStore


def _no_delay(home: Path) -> None:
    (home / "server.json").write_text(
        json.dumps({"ai": {"response_delay_ms": 0}}), encoding="utf-8"
    )


def _mock_http(handler) -> httpx.Client:
    return httpx.Client(base_url="http://aissist.test", transport=httpx.MockTransport(handler))


def test_signup_login_and_session_roundtrip(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))
    _no_delay(tmp_path)
    store = SessionStore(tmp_path / "session.json")

    with TestClient(create_app()) as http:
        client = AIssistClient(http_client=http, session_store=store)
        assert client.is_logged_in() is False

        result = client.signup("new@aissist.com", "secret", tier="pro")
        assert result.success is True
        assert result.user is not None
        assert result.user["email"] == "new@aissist.com"
        assert result.user["remainingQueries"] == 500
        assert client.is_logged_in() is True

        stored = store.read()
        assert stored is not None
        assert stored.token == client.token

        # A fresh client picks the session back up from the store.
        restored = AIssistClient(http_client=http, session_store=store)
        assert restored.token == client.token
        assert restored.is_logged_in() is True

        login = restored.login("new@aissist.com", "secret")
        assert login.success is True
        assert restored.token is not None
        assert restored.token.startswith("jwt_login_")


def test_validate_usage_and_ai_query(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))
    _no_delay(tmp_path)

    with TestClient(create_app()) as http:
        client = AIssistClient(http_client=http)

        assert client.validate_token() is False
        assert client.get_usage() is None

        anonymous = client.send_ai_query("comédias")
        assert anonymous.success is False
        assert anonymous.error == "Token não fornecido"

        assert client.login("me@aissist.com", "pw").success is True
        assert client.validate_token() is True
        assert client.user is not None
        assert client.user["email"] == "demo@aissist.com"

        usage = client.get_usage()
        assert usage is not None
        assert usage["usage"]["dailyLimit"] == 100

        answer = client.send_ai_query("comédias")
        assert answer.success is True
        assert answer.response is not None
        assert "comédias" in answer.response

        assert "comédias" in client.enhanced_reply("comédias")


def test_logout_clears_store(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))
    store = SessionStore(tmp_path / "session.json")

    with TestClient(create_app()) as http:
        client = AIssistClient(http_client=http, session_store=store)
        assert client.login("me@aissist.com", "pw").success is True
        assert store.read() is not None

        client.logout()
        assert client.token is None
        assert client.user is None
        assert store.read() is None


def test_rejected_token_ends_session(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"success": False, "message": "Token inválido"})

    store = SessionStore(tmp_path / "session.json")
    client = AIssistClient(http_client=_mock_http(handler), session_store=store)
    client.token = "stale"
    client.user = {"email": "old@aissist.com"}

    assert client.validate_token() is False
    assert client.token is None
    assert client.is_logged_in() is False


def test_connection_errors_become_failed_results(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = AIssistClient(http_client=_mock_http(handler))

    login = client.login("a@b.com", "pw")
    assert login.success is False
    assert login.error == CONNECTION_ERROR

    chat = client.send_ai_query("oi")
    assert chat.success is False
    assert chat.error == AI_CONNECTION_ERROR

    assert client.enhanced_reply("oi") == f"❌ Erro: {AI_CONNECTION_ERROR}"


def test_rate_limit_turns_into_upgrade_pitch() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429, json={"success": False, "error": "rate_limited", "message": "Rate limit exceeded"}
        )

    client = AIssistClient(http_client=_mock_http(handler))
    client.token = "t"
    client.user = {"subscriptionTier": "premium"}

    reply = client.enhanced_reply("oi")
    assert "Limite de consultas atingido" in reply
    assert "plano premium" in reply
