"""Telegram MCP server facade — owns the registry, the client and the audit trail."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from mcp.types import TextContent

from contracts.audit import AuditEntry, AuditEvent, AuditLogger
from contracts.config import AuditConfig, ServerConfig
from contracts.messaging import AuthorizationState, MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value, ValueKind
from runtime.tools.catalog import all_tools
from runtime.tools.registry import ToolRegistry

SERVER_VERSION = "1.0.0"


class TelegramMCPServer:
    """Exposes the built-in tool catalog (plus custom tools) over one client.

    The catalog is registered before the constructor returns, so
    :meth:`get_tools` and :meth:`execute_tool` are safe to call right away.
    """

    def __init__(
        self,
        client: MessagingClient,
        audit_logger: AuditLogger | None = None,
        app_name: str = "telegram",
        redact_arguments: bool = False,
    ) -> None:
        self.name = app_name
        self.version = SERVER_VERSION
        self.client = client
        self.is_running = False
        self._audit = audit_logger
        self._redact_arguments = redact_arguments
        self._registry = ToolRegistry()
        self._registry.register_all(all_tools(client))
        client.on_auth_state_changed = self._on_auth_state_changed

    @classmethod
    def from_config(
        cls,
        config: ServerConfig,
        audit_logger: AuditLogger | None = None,
    ) -> TelegramMCPServer:
        """Build a server over a TDLib client from *config*."""
        from runtime.telegram.client import TdlibTelegramClient

        if audit_logger is None:
            audit_logger = create_audit_logger(config.audit)
        return cls(
            TdlibTelegramClient(config.telegram),
            audit_logger=audit_logger,
            app_name=config.app.name,
            redact_arguments=config.audit.redact_arguments,
        )

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    # ── lifecycle ───────────────────────────────────────────────────

    async def start(self) -> None:
        if self.is_running:
            return
        await self.client.initialize()
        self.is_running = True
        self._log(AuditEvent.SERVER_START, {"version": self.version, "tools": len(self._registry)})

    async def stop(self) -> None:
        if not self.is_running:
            return
        await self.client.close()
        self.is_running = False
        self._log(AuditEvent.SERVER_STOP, {})

    # ── tools ───────────────────────────────────────────────────────

    def get_tools(self) -> list[ToolDescriptor]:
        return self._registry.descriptors()

    def get_tool_names(self) -> list[str]:
        return self._registry.list_tools()

    def register_custom_tool(self, definition: ToolDefinition) -> None:
        self._registry.register(definition)

    async def execute_tool(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> list[TextContent]:
        """Dispatch one tool call, recording call / result / error in the audit log."""
        arguments = dict(arguments or {})
        request_id = str(uuid.uuid4())
        self._log(
            AuditEvent.TOOL_CALL,
            {"tool": name, "arguments": self._audit_arguments(arguments)},
            request_id,
        )
        try:
            content = await self._registry.execute(name, arguments)
        except Exception as exc:
            self._log(
                AuditEvent.TOOL_ERROR,
                {"tool": name, "error_type": type(exc).__name__, "error": _loggable_text(str(exc))},
                request_id,
            )
            raise
        self._log(
            AuditEvent.TOOL_RESULT,
            {"tool": name, "bytes": sum(len(c.text) for c in content)},
            request_id,
        )
        return content

    # ── internal ────────────────────────────────────────────────────

    def _audit_arguments(self, arguments: dict[str, Any]) -> Any:
        if self._redact_arguments:
            return sorted(_loggable_text(key) for key in arguments)
        return _loggable(Value.from_native(arguments))

    def _on_auth_state_changed(self, state: AuthorizationState) -> None:
        self._log(AuditEvent.AUTH_STATE, {"state": state.value})

    def _log(
        self,
        event: AuditEvent,
        detail: dict[str, Any],
        request_id: str | None = None,
    ) -> None:
        if self._audit is None:
            return
        self._audit.log(AuditEntry(
            request_id=request_id or str(uuid.uuid4()),
            event=event,
            server=self.name,
            detail=detail,
        ))


def create_audit_logger(config: AuditConfig) -> AuditLogger | None:
    if not config.enabled:
        return None
    from runtime.audit.logger import JsonlAuditLogger

    return JsonlAuditLogger(config.path)


def _loggable(value: Value) -> Any:
    """Native form of *value* that the JSONL audit log can always encode."""
    if value.kind is ValueKind.DATA:
        return f"<data {len(value.payload)} bytes>"
    if value.kind is ValueKind.STRING:
        return _loggable_text(value.payload)
    if value.kind is ValueKind.ARRAY:
        return [_loggable(item) for item in value.payload]
    if value.kind is ValueKind.OBJECT:
        return {_loggable_text(k): _loggable(v) for k, v in value.payload.items()}
    return value.to_native()


def _loggable_text(text: str) -> str:
    # Lone surrogates are not valid UTF-8.
    return text.encode("utf-8", "replace").decode("utf-8")
