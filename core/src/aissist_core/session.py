from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: dict[str, Any] = field(default_factory=dict)


def _parse_session(data: dict[str, Any]) -> StoredSession | None:
    token = data.get("auth_token")
    if not isinstance(token, str) or not token:
        return None
    user = data.get("user_data")
    return StoredSession(token=token, user=user if isinstance(user, dict) else {})


class SessionStore:
    """JSON file holding the client's token and user snapshot between runs."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> StoredSession | None:
        if not self.path.exists():
            return None
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid session file format at {self.path}")
        return _parse_session(data)

    def write(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"auth_token": session.token, "user_data": session.user}
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)
            f.write("\n")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
