from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from aissist_core import __version__
from aissist_core.api.models import fail, not_found
from aissist_core.api.router import API_ROUTERS, list_endpoints
from aissist_core.api.router import router as api_router
from aissist_core.config import apply_env_overrides, load_server_config, runtime_paths
from aissist_core.home import resolve_home
from aissist_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)

LOG_FILENAME = "server.log"

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]

_STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    422: "validation_error",
}


def _status_to_code(status_code: int) -> str:
    code = _STATUS_CODES.get(status_code)
    if code is not None:
        return code
    if 400 <= status_code < 500:
        return "client_error"
    return "server_error"


def _is_malformed_json(exc: RequestValidationError) -> bool:
    return any(err.get("type") == "json_invalid" for err in exc.errors())


def _error_details(exc: RequestValidationError) -> list[dict]:
    # ctx may hold the raised exception object, which is not JSON.
    stripped = [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
    return jsonable_encoder(stripped)


def _internal_error() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=fail(code="internal_error", message="Internal Server Error").model_dump(
            mode="json"
        ),
    )


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_home()
        config = apply_env_overrides(load_server_config(home), os.environ)
        paths = runtime_paths(home, config)

        log_path = paths.logs_dir / LOG_FILENAME
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.logging.max_size_mb * 1024 * 1024,
            backupCount=config.logging.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)

        root = logging.getLogger()
        root.setLevel(logging.INFO)
        # Avoid adding duplicate handlers if reloaded
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            root.addHandler(file_handler)

        logger.info("AIssist server starting up (mock mode, no persistence)")
        logger.info(f"Logs directory: {paths.logs_dir}")

        app.state.aissist_home = home
        app.state.aissist_paths = paths
        app.state.aissist_config = config
        app.state.started_at = datetime.now(UTC)
        app.state.started_monotonic = time.monotonic()

        try:
            yield
        finally:
            logger.info("AIssist server shutting down")
            if file_handler in root.handlers:
                root.removeHandler(file_handler)
            file_handler.close()

    app = FastAPI(title="AIssist", version=__version__, lifespan=_lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        # Preflights are answered by CORSMiddleware; any other OPTIONS is a no-op 200.
        if request.method == "OPTIONS":
            return Response(status_code=200)
        try:
            response = await call_next(request)
        except Exception:
            # CORS wraps this middleware but not ServerErrorMiddleware.
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _internal_error()
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if _is_malformed_json(exc):
            return JSONResponse(
                status_code=400,
                content=fail(code="bad_request", message="Invalid JSON body").model_dump(
                    mode="json"
                ),
            )
        return JSONResponse(
            status_code=422,
            content=fail(
                code="validation_error",
                message="Request validation failed",
                details=_error_details(exc),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=str(exc.detail),
            ).model_dump(mode="json"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=not_found(
                    path=request.url.path,
                    available_endpoints=list(request.app.state.available_endpoints),
                ).model_dump(mode="json"),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=fail(
                code=_status_to_code(exc.status_code),
                message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
            ).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _internal_error()

    app.include_router(api_router)
    app.include_router(ui_router)

    app.state.available_endpoints = list_endpoints([*API_ROUTERS, ui_router])

    return app
