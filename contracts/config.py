"""Server configuration (telegram-mcp.yaml) schema — Pydantic models."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel

from contracts.errors import MissingConfigurationError

API_ID_ENV = "TELEGRAM_API_ID"
API_HASH_ENV = "TELEGRAM_API_HASH"


# ── Sections ─────────────────────────────────────────────────────────


class AppInfo(BaseModel):
    name: str = "telegram"
    version: str = "1.0.0"


class TelegramConfig(BaseModel):
    """TDLib client parameters.  api_id / api_hash come from my.telegram.org."""

    api_id: int
    api_hash: str
    database_directory: str = "tdlib_data"
    files_directory: str = "tdlib_files"
    use_message_database: bool = True
    use_file_database: bool = True
    use_chat_info_database: bool = True
    system_language_code: str = "en"
    device_model: str = "iOS"
    application_version: str = "1.0.0"
    tdjson_path: str | None = None   # resolved with ctypes.util.find_library if unset
    log_verbosity: int = 1

    def check(self) -> None:
        """Raise ``MissingConfigurationError`` if the credentials are unusable."""
        if self.api_id <= 0:
            raise MissingConfigurationError("API ID must be positive")
        if not self.api_hash:
            raise MissingConfigurationError("API Hash is required")

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> TelegramConfig:
        env = os.environ if environ is None else environ
        raw_id = env.get(API_ID_ENV, "")
        try:
            api_id = int(raw_id)
        except ValueError:
            raise MissingConfigurationError(API_ID_ENV) from None
        api_hash = env.get(API_HASH_ENV)
        if api_hash is None:
            raise MissingConfigurationError(API_HASH_ENV)
        return cls(api_id=api_id, api_hash=api_hash)


class AuditConfig(BaseModel):
    path: str = "audit.jsonl"
    enabled: bool = True
    redact_arguments: bool = False


# ── Root config ──────────────────────────────────────────────────────


class ServerConfig(BaseModel):
    app: AppInfo = AppInfo()
    telegram: TelegramConfig
    audit: AuditConfig = AuditConfig()
