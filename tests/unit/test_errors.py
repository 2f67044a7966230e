"""Unit tests for the error taxonomy."""

from __future__ import annotations

import pytest

from contracts import errors


class TestMessages:
    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (errors.MissingConfigurationError("API Hash is required"),
             "Missing configuration: API Hash is required"),
            (errors.NotAuthorizedError(), "Telegram client is not authorized"),
            (errors.ClientNotInitializedError(), "Telegram client is not initialized"),
            (errors.AuthorizationFailedError("bad code"), "Authorization failed: bad code"),
            (errors.MissingRequiredArgumentError("chat_id"), "Missing required argument: chat_id"),
            (errors.InvalidArgumentError("limit", "must be positive"),
             "Invalid argument 'limit': must be positive"),
            (errors.InvalidArgumentTypeError("chat_id", "integer (int64)", "string"),
             "Invalid type for 'chat_id': expected integer (int64), got string"),
            (errors.ToolNotFoundError("x"), "Tool not found: x"),
            (errors.ToolExecutionFailedError("boom"), "Tool execution failed: boom"),
            (errors.BackendError(400, "CHAT_NOT_FOUND"), "TDLib error [400]: CHAT_NOT_FOUND"),
            (errors.ChatNotFoundError(1), "Chat not found: 1"),
            (errors.UserNotFoundError(2), "User not found: 2"),
            (errors.MessageNotFoundError(3), "Message not found: 3"),
            (errors.EncodingError("nan"), "Encoding error: nan"),
            (errors.UnknownError("?"), "Unknown error: ?"),
        ],
    )
    def test_message(self, error: errors.TelegramMCPError, message: str) -> None:
        assert str(error) == message
        assert isinstance(error, errors.TelegramMCPError)

    def test_attributes(self) -> None:
        err = errors.BackendError(429, "Too Many Requests: retry after 5")
        assert err.code == 429
        assert err.message == "Too Many Requests: retry after 5"
