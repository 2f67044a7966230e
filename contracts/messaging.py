"""Messaging client contracts.

Defines the abstract interface the tools forward to.  Every domain
operation returns a JSON string that is handed back to the caller as-is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum


class AuthorizationState(str, Enum):
    WAITING_PARAMS = "waiting_params"
    WAITING_PHONE = "waiting_phone"
    WAITING_CODE = "waiting_code"
    WAITING_PASSWORD = "waiting_password"
    READY = "ready"
    CLOSED = "closed"
    UNKNOWN = "unknown"


AuthStateCallback = Callable[[AuthorizationState], None]


class MessagingClient(ABC):
    """Abstract base class for the Telegram account backend."""

    authorization_state: AuthorizationState = AuthorizationState.UNKNOWN
    on_auth_state_changed: AuthStateCallback | None = None

    # ── lifecycle ───────────────────────────────────────────────────

    @abstractmethod
    async def initialize(self) -> None:
        """Start the client and begin the authorization flow."""
        ...

    @abstractmethod
    async def close(self) -> None:
        ...

    # ── authentication ──────────────────────────────────────────────

    @abstractmethod
    async def set_phone_number(self, phone_number: str) -> None:
        ...

    @abstractmethod
    async def set_authentication_code(self, code: str) -> None:
        ...

    @abstractmethod
    async def set_password(self, password: str) -> None:
        ...

    # ── chats ───────────────────────────────────────────────────────

    @abstractmethod
    async def get_chats(self, limit: int = 50) -> str:
        ...

    @abstractmethod
    async def get_chat(self, chat_id: int) -> str:
        ...

    @abstractmethod
    async def create_group(self, title: str, user_ids: list[int]) -> str:
        ...

    @abstractmethod
    async def create_channel(self, title: str, description: str, is_channel: bool) -> str:
        ...

    @abstractmethod
    async def leave_chat(self, chat_id: int) -> str:
        ...

    @abstractmethod
    async def edit_chat_title(self, chat_id: int, title: str) -> str:
        ...

    # ── messages ────────────────────────────────────────────────────

    @abstractmethod
    async def get_chat_history(
        self, chat_id: int, from_message_id: int = 0, limit: int = 50
    ) -> str:
        ...

    @abstractmethod
    async def get_message(self, chat_id: int, message_id: int) -> str:
        ...

    @abstractmethod
    async def send_message(self, chat_id: int, text: str) -> str:
        ...

    @abstractmethod
    async def reply_to_message(self, chat_id: int, message_id: int, text: str) -> str:
        ...

    @abstractmethod
    async def edit_message(self, chat_id: int, message_id: int, text: str) -> str:
        ...

    @abstractmethod
    async def forward_messages(
        self, chat_id: int, from_chat_id: int, message_ids: list[int]
    ) -> str:
        ...

    @abstractmethod
    async def delete_messages(self, chat_id: int, message_ids: list[int]) -> str:
        ...

    # ── contacts ────────────────────────────────────────────────────

    @abstractmethod
    async def get_contacts(self) -> str:
        ...

    @abstractmethod
    async def search_contacts(self, query: str, limit: int = 20) -> str:
        ...

    @abstractmethod
    async def add_contact(self, phone_number: str, first_name: str, last_name: str) -> str:
        ...

    @abstractmethod
    async def delete_contact(self, user_id: int) -> str:
        ...

    # ── users ───────────────────────────────────────────────────────

    @abstractmethod
    async def get_me(self) -> str:
        ...

    @abstractmethod
    async def get_user(self, user_id: int) -> str:
        ...

    @abstractmethod
    async def block_user(self, user_id: int) -> str:
        ...

    @abstractmethod
    async def unblock_user(self, user_id: int) -> str:
        ...

    # ── group administration ────────────────────────────────────────

    @abstractmethod
    async def get_chat_members(self, chat_id: int, limit: int = 200) -> str:
        ...

    @abstractmethod
    async def add_chat_members(self, chat_id: int, user_ids: list[int]) -> str:
        ...

    @abstractmethod
    async def promote_admin(self, chat_id: int, user_id: int) -> str:
        ...

    @abstractmethod
    async def demote_admin(self, chat_id: int, user_id: int) -> str:
        ...

    @abstractmethod
    async def ban_user(self, chat_id: int, user_id: int) -> str:
        ...

    @abstractmethod
    async def unban_user(self, chat_id: int, user_id: int) -> str:
        ...

    # ── search ──────────────────────────────────────────────────────

    @abstractmethod
    async def search_messages(self, chat_id: int, query: str, limit: int = 20) -> str:
        ...

    @abstractmethod
    async def search_public_chats(self, query: str) -> str:
        ...
