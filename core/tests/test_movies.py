from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from aissist_core.app import create_app


def test_popular_movies(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/movies/popular")
        assert r.status_code == 200
        results = r.json()["results"]
        assert [m["title"] for m in results] == ["Demo Movie 1", "Demo Movie 2"]


def test_search_echoes_query(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/movies/search", params={"query": "matrix"})
        assert r.status_code == 200
        body = r.json()
        assert body["query"] == "matrix"
        assert body["results"] == [{"id": 1, "title": "Resultado para: matrix", "rating": 8.0}]


def test_search_without_query_is_empty(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("AISSIST_HOME", str(tmp_path))

    with TestClient(create_app()) as client:
        r = client.get("/movies/search")
        assert r.status_code == 200
        assert r.json() == {"success": True, "results": [], "query": ""}
