from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from aissist_core.home import CONFIG_FILENAME, RuntimePaths, prepare_paths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3030, ge=1, le=65535)


class AIConfig(BaseModel):
    """Canned AI service identity and the simulated processing delay."""

    service: str = Field(default="AIssist LLM")
    model: str = Field(default="aissist-v1.0")
    endpoint: str = Field(default="aissist.rafante-tec.online")
    version: str = Field(default="1.0.0")
    response_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Artificial delay applied before answering /ai/chat.",
    )


class PathOverrides(BaseModel):
    logs_dir: str | None = None
    pages_dir: str | None = None


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class ServerConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_server_config(home: Path) -> ServerConfig:
    """Read ``<home>/server.json``; a missing file means all defaults."""

    config_path = home / CONFIG_FILENAME
    if not config_path.exists():
        return ServerConfig()
    return ServerConfig.model_validate(json.loads(config_path.read_text(encoding="utf-8")))


def runtime_paths(home: Path, config: ServerConfig) -> RuntimePaths:
    return prepare_paths(
        home, logs_dir=config.paths.logs_dir, pages_dir=config.paths.pages_dir
    )


def apply_env_overrides(config: ServerConfig, environ: Mapping[str, str]) -> ServerConfig:
    """Layer PORT / AISSIST_BIND over the file config.

    Both go through NetworkConfig, so a bad value raises pydantic's ValidationError.
    """

    updates: dict[str, Any] = {}
    raw_port = (environ.get("PORT") or "").strip()
    if raw_port:
        updates["port"] = raw_port
    raw_bind = (environ.get("AISSIST_BIND") or "").strip()
    if raw_bind:
        updates["bind_host"] = raw_bind
    if not updates:
        return config

    network = NetworkConfig.model_validate({**config.network.model_dump(), **updates})
    return config.model_copy(update={"network": network})
