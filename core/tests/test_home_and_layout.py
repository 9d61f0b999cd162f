from __future__ import annotations

from pathlib import Path

from aissist_core.home import prepare_paths, resolve_home


def test_resolve_home_from_env(tmp_path: Path) -> None:
    home = resolve_home({"AISSIST_HOME": str(tmp_path)})
    assert home == tmp_path.resolve()


def test_resolve_home_relative_is_under_user_home() -> None:
    home = resolve_home({"AISSIST_HOME": "aissist-test-home"})
    assert home == (Path.home() / "aissist-test-home").resolve()


def test_resolve_home_default() -> None:
    assert resolve_home({}) == (Path.home() / ".aissist").resolve()


def test_prepare_paths_creates_logs_and_pages(tmp_path: Path) -> None:
    paths = prepare_paths(tmp_path)

    assert paths.logs_dir == (tmp_path / "logs").resolve()
    assert paths.pages_dir == (tmp_path / "pages").resolve()
    assert paths.logs_dir.is_dir()
    assert paths.pages_dir.is_dir()
    assert paths.config_path == tmp_path / "server.json"


def test_prepare_paths_overrides(tmp_path: Path) -> None:
    elsewhere = tmp_path / "elsewhere" / "pages"
    paths = prepare_paths(tmp_path, logs_dir="custom_logs", pages_dir=str(elsewhere))

    # Relative overrides sit under home; absolute ones are kept.
    assert paths.logs_dir == (tmp_path / "custom_logs").resolve()
    assert paths.pages_dir == elsewhere.resolve()
    assert paths.logs_dir.is_dir()
    assert paths.pages_dir.is_dir()
