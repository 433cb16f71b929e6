from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from eqn.util.logging import resolve_level


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8080, ge=1, le=65535)
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: Any) -> str:
        if not isinstance(value, (int, str)):
            raise ValueError(f"Unknown log level: {value!r}")
        name = logging.getLevelName(resolve_level(value))
        if name.startswith("Level "):
            raise ValueError(f"Unknown log level: {value!r}")
        return name


def load_config_dict(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config must be a mapping: {path}")
    # The server section may be nested or at the top level.
    server = cfg.get("server", cfg)
    if not isinstance(server, dict):
        raise ValueError(f"config 'server' section must be a mapping: {path}")
    return server


def merge_server_config(cfg: dict[str, Any], overrides: dict[str, Any]) -> ServerConfig:
    merged = dict(cfg)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return ServerConfig.model_validate(merged)


def load_server_config(path: str | Path | None = None, **overrides: Any) -> ServerConfig:
    cfg = load_config_dict(path) if path else {}
    return merge_server_config(cfg, overrides)
