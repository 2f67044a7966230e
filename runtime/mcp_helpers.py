"""Shared initialisation logic for the MCP server and the CLI."""

from __future__ import annotations

from contracts.audit import AuditLogger
from runtime.config_loader import load_config
from runtime.server import TelegramMCPServer


def init_server(
    config_path: str | None = None,
    audit_logger: AuditLogger | None = None,
) -> TelegramMCPServer:
    """Load config and create the server with its TDLib client and audit logger.

    Uses ``TELEGRAM_MCP_CONFIG`` if *config_path* is not provided.
    """
    config = load_config(config_path)
    return TelegramMCPServer.from_config(config, audit_logger=audit_logger)
