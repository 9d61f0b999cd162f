from __future__ import annotations

import secrets
import string
import time
from typing import Final

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

AUTHORIZATION_HEADER: Final[str] = "Authorization"
SIGNUP_TOKEN_PREFIX: Final[str] = "jwt"
LOGIN_TOKEN_PREFIX: Final[str] = "jwt_login"

_SUFFIX_ALPHABET: Final[str] = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH: Final[int] = 9

_bearer_scheme = HTTPBearer(auto_error=False)


def issue_token(prefix: str) -> str:
    """Mint an opaque session token: ``<prefix>_<unix millis>_<random base36>``.

    Tokens are never stored or verified; only their presence matters.
    """

    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def extract_token_from_request(request: Request) -> str | None:
    """Second whitespace-separated part of ``Authorization``, whatever the scheme."""

    parts = (request.headers.get(AUTHORIZATION_HEADER) or "").split()
    if len(parts) < 2:
        return None
    return parts[1]


async def require_bearer_token(
    request: Request,
    _documented: HTTPAuthorizationCredentials | None = Security(_bearer_scheme),  # noqa: B008
) -> str:
    """Presence-only token check.

    Any scheme carrying a non-empty value is accepted; a missing value yields 401.
    The HTTPBearer security dependency only advertises the scheme in OpenAPI.
    """

    provided = extract_token_from_request(request)
    if not provided:
        raise HTTPException(status_code=401, detail="Token não fornecido")
    return provided
