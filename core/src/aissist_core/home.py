from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

HOME_ENV = "AISSIST_HOME"
CONFIG_FILENAME = "server.json"


@dataclass(frozen=True)
class RuntimePaths:
    """Where the server reads its config and pages and writes its logs."""

    home: Path
    logs_dir: Path
    pages_dir: Path

    @property
    def config_path(self) -> Path:
        return self.home / CONFIG_FILENAME


def resolve_home(environ: dict[str, str] | None = None) -> Path:
    """``$AISSIST_HOME`` if set (relative values sit under the user home), else ``~/.aissist``."""

    env = os.environ if environ is None else environ
    raw = (env.get(HOME_ENV) or "").strip()
    if not raw:
        return (Path.home() / ".aissist").resolve()
    return (Path.home() / Path(raw).expanduser()).resolve()


def prepare_paths(
    home: Path, *, logs_dir: str | None = None, pages_dir: str | None = None
) -> RuntimePaths:
    """Create home, logs and pages dirs; relative overrides resolve under home."""

    def _dir(override: str | None, default_name: str) -> Path:
        chosen = (override or "").strip() or default_name
        return (home / Path(chosen).expanduser()).resolve()

    paths = RuntimePaths(
        home=home,
        logs_dir=_dir(logs_dir, "logs"),
        pages_dir=_dir(pages_dir, "pages"),
    )
    for d in (paths.home, paths.logs_dir, paths.pages_dir):
        d.mkdir(parents=True, exist_ok=True)
    return paths
