"""Config loader — parse and validate telegram-mcp.yaml."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from contracts.config import API_HASH_ENV, API_ID_ENV, ServerConfig, TelegramConfig
from contracts.errors import MissingConfigurationError

CONFIG_ENV = "TELEGRAM_MCP_CONFIG"
DEFAULT_CONFIG_PATH = "./telegram-mcp.yaml"


def _fill_credentials(section: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Take api_id / api_hash from the environment when the file omits them."""
    section = dict(section)
    if section.get("api_id") in (None, ""):
        raw = environ.get(API_ID_ENV)
        if raw is None:
            raise MissingConfigurationError(API_ID_ENV)
        section["api_id"] = raw
    if section.get("api_hash") in (None, ""):
        raw = environ.get(API_HASH_ENV)
        if raw is None:
            raise MissingConfigurationError(API_HASH_ENV)
        section["api_hash"] = raw
    return section


def load_config(
    path: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Load a telegram-mcp.yaml file and return a validated ServerConfig.

    Uses ``TELEGRAM_MCP_CONFIG`` if *path* is not provided.  When neither is
    set and the default file does not exist, the configuration is built from
    the environment alone.
    """
    env = os.environ if environ is None else environ
    explicit = path is not None or CONFIG_ENV in env
    if path is None:
        path = env.get(CONFIG_ENV, DEFAULT_CONFIG_PATH)

    p = Path(path)
    if not p.exists():
        if explicit:
            raise FileNotFoundError(f"Config not found: {path}")
        config = ServerConfig(telegram=TelegramConfig.from_environment(env))
        config.telegram.check()
        return config

    raw = p.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    telegram = data.get("telegram") or {}
    if not isinstance(telegram, dict):
        raise ValueError("'telegram' section must be a YAML mapping")
    data["telegram"] = _fill_credentials(telegram, env)

    config = ServerConfig(**data)
    config.telegram.check()
    return config
