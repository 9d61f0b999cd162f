from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from aissist_core.app import create_app


def test_admin_and_root_render_dashboard(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        for path in ("/", "/admin"):
            r = client.get(path)
            assert r.status_code == 200
            assert r.headers["content-type"].startswith("text/html")
            assert "AIssist Admin Dashboard" in r.text
            assert "Deploy realizado" in r.text
            assert "/movies/popular" in r.text


def test_compact_dashboard(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/dashboard")
        assert r.status_code == 200
        assert "Status dos Sistemas" in r.text
        assert "18.3%" in r.text


def test_demo_falls_back_to_builtin_page(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/demo")
        assert r.status_code == 200
        assert "AIssist Auth Server Working!" in r.text
        assert "/auth/signup [POST]" in r.text

        assert client.get("/demo.html").status_code == 200


def test_demo_serves_page_from_pages_dir(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))
    pages_dir = tmp_path / "pages"
    pages_dir.mkdir(parents=True, exist_ok=True)
    (pages_dir / "demo.html").write_text("<h1>Custom demo</h1>", encoding="utf-8")

    with TestClient(create_app()) as client:
        r = client.get("/demo")
        assert r.status_code == 200
        assert r.text == "<h1>Custom demo</h1>"
