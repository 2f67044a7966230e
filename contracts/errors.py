"""Error taxonomy for the Telegram MCP server.

A closed set of exceptions; every failure a tool call can report to the
caller is one of these, or an error raised by the messaging collaborator
and passed through untouched.
"""

from __future__ import annotations


class TelegramMCPError(Exception):
    """Base class for every error raised by this package."""


# ── Configuration / authorization ────────────────────────────────────


class MissingConfigurationError(TelegramMCPError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Missing configuration: {detail}")


class NotAuthorizedError(TelegramMCPError):
    def __init__(self) -> None:
        super().__init__("Telegram client is not authorized")


class ClientNotInitializedError(TelegramMCPError):
    def __init__(self) -> None:
        super().__init__("Telegram client is not initialized")


class AuthorizationFailedError(TelegramMCPError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Authorization failed: {reason}")


# ── Argument validation ──────────────────────────────────────────────


class MissingRequiredArgumentError(TelegramMCPError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required argument: {name}")


class InvalidArgumentError(TelegramMCPError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid argument '{name}': {reason}")


class InvalidArgumentTypeError(TelegramMCPError):
    def __init__(self, name: str, expected: str, got: str) -> None:
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(f"Invalid type for '{name}': expected {expected}, got {got}")


# ── Dispatch ─────────────────────────────────────────────────────────


class ToolNotFoundError(TelegramMCPError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionFailedError(TelegramMCPError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Tool execution failed: {reason}")


# ── Backend ──────────────────────────────────────────────────────────


class BackendError(TelegramMCPError):
    """An ``error`` object returned by TDLib."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"TDLib error [{code}]: {message}")


class ChatNotFoundError(TelegramMCPError):
    def __init__(self, chat_id: int) -> None:
        self.chat_id = chat_id
        super().__init__(f"Chat not found: {chat_id}")


class UserNotFoundError(TelegramMCPError):
    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class MessageNotFoundError(TelegramMCPError):
    def __init__(self, message_id: int) -> None:
        self.message_id = message_id
        super().__init__(f"Message not found: {message_id}")


# ── Generic ──────────────────────────────────────────────────────────


class EncodingError(TelegramMCPError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Encoding error: {detail}")


class UnknownError(TelegramMCPError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Unknown error: {message}")
