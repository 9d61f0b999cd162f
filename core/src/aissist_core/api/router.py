from __future__ import annotations

from collections.abc import Iterable

from fastapi import APIRouter
from fastapi.routing import APIRoute

from aissist_core.api.ai import router as ai_router
from aissist_core.api.auth import router as auth_router
from aissist_core.api.movies import router as movies_router
from aissist_core.api.system import router as system_router

# Leaf routers in registration order; their APIRoute paths already carry the prefix.
API_ROUTERS: tuple[APIRouter, ...] = (auth_router, ai_router, system_router, movies_router)

router = APIRouter()

for _leaf in API_ROUTERS:
    router.include_router(_leaf)


def list_endpoints(routers: Iterable[APIRouter]) -> list[str]:
    """Render the routes of ``routers`` as ``"<path> [<METHOD>]"`` in registration order.

    Reads the leaf routers directly; ``app.routes`` may hold wrapper objects for
    included routers instead of their APIRoutes.
    """

    out: list[str] = []
    for leaf in routers:
        for route in leaf.routes:
            if not isinstance(route, APIRoute):
                continue
            for method in sorted(route.methods or ()):
                if method == "HEAD":
                    continue
                entry = f"{route.path} [{method}]"
                if entry not in out:
                    out.append(entry)
    return out
