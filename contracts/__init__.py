"""Shared contracts — source of truth for all telegram-mcp interfaces."""

from contracts.audit import AuditEntry, AuditEvent, AuditLogger
from contracts.config import AppInfo, AuditConfig, ServerConfig, TelegramConfig
from contracts.errors import (
    AuthorizationFailedError,
    BackendError,
    ChatNotFoundError,
    ClientNotInitializedError,
    EncodingError,
    InvalidArgumentError,
    InvalidArgumentTypeError,
    MessageNotFoundError,
    MissingConfigurationError,
    MissingRequiredArgumentError,
    NotAuthorizedError,
    TelegramMCPError,
    ToolExecutionFailedError,
    ToolNotFoundError,
    UnknownError,
    UserNotFoundError,
)
from contracts.messaging import AuthorizationState, MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor, ToolHandler
from contracts.value import Value, ValueKind

__all__ = [
    # audit
    "AuditEntry",
    "AuditEvent",
    "AuditLogger",
    # config
    "AppInfo",
    "AuditConfig",
    "ServerConfig",
    "TelegramConfig",
    # errors
    "AuthorizationFailedError",
    "BackendError",
    "ChatNotFoundError",
    "ClientNotInitializedError",
    "EncodingError",
    "InvalidArgumentError",
    "InvalidArgumentTypeError",
    "MessageNotFoundError",
    "MissingConfigurationError",
    "MissingRequiredArgumentError",
    "NotAuthorizedError",
    "TelegramMCPError",
    "ToolExecutionFailedError",
    "ToolNotFoundError",
    "UnknownError",
    "UserNotFoundError",
    # messaging
    "AuthorizationState",
    "MessagingClient",
    # tool sdk
    "ToolDefinition",
    "ToolDescriptor",
    "ToolHandler",
    # value
    "Value",
    "ValueKind",
]
