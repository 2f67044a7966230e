"""TDLib-backed messaging client.

Requests go out through ``td_send`` tagged with a unique ``@extra``; a
background thread drains ``td_receive`` and hands each response back to the
event loop that called :meth:`TdlibTelegramClient.initialize`.  Updates
without an ``@extra`` drive the authorization state machine.
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
import uuid
from collections.abc import Iterable
from typing import Any

from contracts.config import TelegramConfig
from contracts.errors import (
    AuthorizationFailedError,
    BackendError,
    ChatNotFoundError,
    ClientNotInitializedError,
    MessageNotFoundError,
    NotAuthorizedError,
    UnknownError,
    UserNotFoundError,
)
from contracts.messaging import AuthorizationState, MessagingClient
from runtime.serializer import to_json
from runtime.telegram.records import (
    chat_details,
    chat_summary,
    chat_type_name,
    member_to_dict,
    message_to_dict,
    user_to_dict,
)
from runtime.telegram.tdjson import TdJson

_AUTH_STATES = {
    "authorizationStateWaitTdlibParameters": AuthorizationState.WAITING_PARAMS,
    "authorizationStateWaitPhoneNumber": AuthorizationState.WAITING_PHONE,
    "authorizationStateWaitCode": AuthorizationState.WAITING_CODE,
    "authorizationStateWaitPassword": AuthorizationState.WAITING_PASSWORD,
    "authorizationStateReady": AuthorizationState.READY,
    "authorizationStateClosed": AuthorizationState.CLOSED,
}

_PENDING_STATES = (AuthorizationState.UNKNOWN, AuthorizationState.WAITING_PARAMS)

# Standard rights granted by promote_admin.
_ADMIN_RIGHTS: dict[str, Any] = {
    "@type": "chatAdministratorRights",
    "can_manage_chat": True,
    "can_change_info": True,
    "can_post_messages": False,
    "can_edit_messages": False,
    "can_delete_messages": True,
    "can_invite_users": True,
    "can_restrict_members": True,
    "can_pin_messages": True,
    "can_manage_topics": False,
    "can_promote_members": False,
    "can_manage_video_chats": True,
    "can_post_stories": False,
    "can_edit_stories": False,
    "can_delete_stories": False,
    "is_anonymous": False,
}


def _user_sender(user_id: int) -> dict[str, Any]:
    return {"@type": "messageSenderUser", "user_id": user_id}


def _text_content(text: str) -> dict[str, Any]:
    return {
        "@type": "inputMessageText",
        "text": {"@type": "formattedText", "text": text, "entities": []},
        "clear_draft": True,
    }


def _is_not_found(exc: BackendError) -> bool:
    return exc.code == 404 or "not found" in exc.message.lower()


class TdlibTelegramClient(MessagingClient):
    """:class:`MessagingClient` over TDLib's JSON interface."""

    def __init__(
        self,
        config: TelegramConfig,
        transport: TdJson | None = None,
        receive_timeout: float = 1.0,
    ) -> None:
        self.config = config
        self.authorization_state = AuthorizationState.UNKNOWN
        self.on_auth_state_changed = None
        self._transport = transport
        self._receive_timeout = receive_timeout
        self._client_id: int | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._pending: dict[str, asyncio.Future[dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None
        self._state_changed: asyncio.Event | None = None
        self._parameters_task: asyncio.Task[None] | None = None
        self._receive_error: UnknownError | None = None

    @property
    def is_initialized(self) -> bool:
        return self._client_id is not None

    # ── lifecycle ───────────────────────────────────────────────────

    async def initialize(self) -> None:
        if self._client_id is not None:
            return
        self.config.check()
        if self._transport is None:
            self._transport = TdJson(self.config.tdjson_path)
        self._transport.execute(
            {"@type": "setLogVerbosityLevel", "new_verbosity_level": self.config.log_verbosity}
        )

        self._loop = asyncio.get_running_loop()
        self._state_changed = asyncio.Event()
        self._stopping.clear()
        self._receive_error = None
        self._client_id = self._transport.create_client_id()
        self._thread = threading.Thread(
            target=self._receive_loop, name="tdlib-receive", daemon=True
        )
        self._thread.start()
        # TDLib starts emitting updates once the client has seen a request.
        self._transport.send(self._client_id, {"@type": "getOption", "name": "version"})

    async def close(self) -> None:
        if self._client_id is None:
            return
        with contextlib.suppress(BackendError, UnknownError, asyncio.TimeoutError):
            await asyncio.wait_for(self._request({"@type": "close"}), timeout=5.0)

        self._stopping.set()
        if self._thread is not None:
            await asyncio.get_running_loop().run_in_executor(None, self._thread.join)
            self._thread = None

        self._fail_pending(ClientNotInitializedError())
        self._client_id = None
        self._set_state(AuthorizationState.CLOSED)

    async def wait_for_authorization_state(
        self,
        exclude: Iterable[AuthorizationState] = _PENDING_STATES,
        timeout: float | None = None,
    ) -> AuthorizationState:
        """Wait until the authorization state is not one of *exclude*."""
        if self._client_id is None or self._state_changed is None:
            raise ClientNotInitializedError()
        excluded = set(exclude)

        async def _wait() -> AuthorizationState:
            while self.authorization_state in excluded:
                self._raise_parameters_failure()
                await self._state_changed.wait()
            return self.authorization_state

        return await asyncio.wait_for(_wait(), timeout)

    # ── authentication ──────────────────────────────────────────────

    async def set_phone_number(self, phone_number: str) -> None:
        await self._authenticate(
            {"@type": "setAuthenticationPhoneNumber", "phone_number": phone_number, "settings": None}
        )

    async def set_authentication_code(self, code: str) -> None:
        await self._authenticate({"@type": "checkAuthenticationCode", "code": code})

    async def set_password(self, password: str) -> None:
        await self._authenticate({"@type": "checkAuthenticationPassword", "password": password})

    # ── chats ───────────────────────────────────────────────────────

    async def get_chats(self, limit: int = 50) -> str:
        self._ensure_ready()
        result = await self._request(
            {"@type": "getChats", "chat_list": {"@type": "chatListMain"}, "limit": limit}
        )
        chats = [chat_summary(await self._get_chat(chat_id)) for chat_id in result.get("chat_ids", [])]
        return to_json({"chats": chats, "total_count": len(chats)})

    async def get_chat(self, chat_id: int) -> str:
        self._ensure_ready()
        return to_json(chat_details(await self._get_chat(chat_id)))

    async def create_group(self, title: str, user_ids: list[int]) -> str:
        self._ensure_ready()
        result = await self._request({
            "@type": "createNewBasicGroupChat",
            "user_ids": user_ids,
            "title": title,
            "message_auto_delete_time": 0,
        })
        chat_id = result.get("chat_id", result.get("id"))
        return to_json({"chat_id": chat_id, "success": True})

    async def create_channel(self, title: str, description: str, is_channel: bool) -> str:
        self._ensure_ready()
        chat = await self._request({
            "@type": "createNewSupergroupChat",
            "title": title,
            "is_forum": False,
            "is_channel": is_channel,
            "description": description,
            "location": None,
            "message_auto_delete_time": 0,
            "for_import": False,
        })
        return to_json({"chat_id": chat.get("id"), "title": chat.get("title", title)})

    async def leave_chat(self, chat_id: int) -> str:
        self._ensure_ready()
        await self._request({"@type": "leaveChat", "chat_id": chat_id})
        return to_json({"success": True, "chat_id": chat_id})

    async def edit_chat_title(self, chat_id: int, title: str) -> str:
        self._ensure_ready()
        await self._request({"@type": "setChatTitle", "chat_id": chat_id, "title": title})
        return to_json({"success": True, "chat_id": chat_id, "title": title})

    # ── messages ────────────────────────────────────────────────────

    async def get_chat_history(self, chat_id: int, from_message_id: int = 0, limit: int = 50) -> str:
        self._ensure_ready()
        result = await self._request({
            "@type": "getChatHistory",
            "chat_id": chat_id,
            "from_message_id": from_message_id,
            "offset": 0,
            "limit": limit,
            "only_local": False,
        })
        messages = [message_to_dict(m) for m in result.get("messages") or [] if m]
        return to_json({"messages": messages, "total_count": result.get("total_count", len(messages))})

    async def get_message(self, chat_id: int, message_id: int) -> str:
        self._ensure_ready()
        try:
            message = await self._request(
                {"@type": "getMessage", "chat_id": chat_id, "message_id": message_id}
            )
        except BackendError as exc:
            if _is_not_found(exc):
                raise MessageNotFoundError(message_id) from exc
            raise
        return to_json(message_to_dict(message))

    async def send_message(self, chat_id: int, text: str) -> str:
        self._ensure_ready()
        message = await self._request({
            "@type": "sendMessage",
            "chat_id": chat_id,
            "input_message_content": _text_content(text),
        })
        return to_json(message_to_dict(message))

    async def reply_to_message(self, chat_id: int, message_id: int, text: str) -> str:
        self._ensure_ready()
        message = await self._request({
            "@type": "sendMessage",
            "chat_id": chat_id,
            "reply_to": {"@type": "inputMessageReplyToMessage", "message_id": message_id},
            "input_message_content": _text_content(text),
        })
        return to_json(message_to_dict(message))

    async def edit_message(self, chat_id: int, message_id: int, text: str) -> str:
        self._ensure_ready()
        message = await self._request({
            "@type": "editMessageText",
            "chat_id": chat_id,
            "message_id": message_id,
            "input_message_content": _text_content(text),
        })
        return to_json(message_to_dict(message))

    async def forward_messages(self, chat_id: int, from_chat_id: int, message_ids: list[int]) -> str:
        self._ensure_ready()
        result = await self._request({
            "@type": "forwardMessages",
            "chat_id": chat_id,
            "from_chat_id": from_chat_id,
            "message_ids": message_ids,
            "send_copy": False,
            "remove_caption": False,
        })
        messages = [message_to_dict(m) for m in result.get("messages") or [] if m]
        return to_json({"messages": messages, "count": len(messages)})

    async def delete_messages(self, chat_id: int, message_ids: list[int]) -> str:
        self._ensure_ready()
        await self._request({
            "@type": "deleteMessages",
            "chat_id": chat_id,
            "message_ids": message_ids,
            "revoke": True,
        })
        return to_json({"success": True, "deleted_count": len(message_ids)})

    # ── contacts ────────────────────────────────────────────────────

    async def get_contacts(self) -> str:
        self._ensure_ready()
        result = await self._request({"@type": "getContacts"})
        contacts = [user_to_dict(await self._get_user(uid)) for uid in result.get("user_ids", [])]
        return to_json({"contacts": contacts, "total_count": len(contacts)})

    async def search_contacts(self, query: str, limit: int = 20) -> str:
        self._ensure_ready()
        result = await self._request({"@type": "searchContacts", "query": query, "limit": limit})
        contacts = [user_to_dict(await self._get_user(uid)) for uid in result.get("user_ids", [])]
        return to_json({"contacts": contacts, "total_count": len(contacts)})

    async def add_contact(self, phone_number: str, first_name: str, last_name: str = "") -> str:
        self._ensure_ready()
        await self._request({
            "@type": "addContact",
            "contact": {
                "@type": "importedContact",
                "phone_number": phone_number,
                "first_name": first_name,
                "last_name": last_name,
            },
            "share_phone_number": False,
        })
        return to_json({
            "success": True,
            "phone": phone_number,
            "name": f"{first_name} {last_name}",
        })

    async def delete_contact(self, user_id: int) -> str:
        self._ensure_ready()
        await self._request({"@type": "removeContacts", "user_ids": [user_id]})
        return to_json({"success": True, "user_id": user_id})

    # ── users ───────────────────────────────────────────────────────

    async def get_me(self) -> str:
        self._ensure_ready()
        return to_json(user_to_dict(await self._request({"@type": "getMe"})))

    async def get_user(self, user_id: int) -> str:
        self._ensure_ready()
        return to_json(user_to_dict(await self._get_user(user_id)))

    async def block_user(self, user_id: int) -> str:
        self._ensure_ready()
        await self._request({
            "@type": "setMessageSenderBlockList",
            "sender_id": _user_sender(user_id),
            "block_list": {"@type": "blockListMain"},
        })
        return to_json({"success": True, "user_id": user_id, "blocked": True})

    async def unblock_user(self, user_id: int) -> str:
        self._ensure_ready()
        await self._request({
            "@type": "setMessageSenderBlockList",
            "sender_id": _user_sender(user_id),
            "block_list": None,
        })
        return to_json({"success": True, "user_id": user_id, "blocked": False})

    # ── group administration ────────────────────────────────────────

    async def get_chat_members(self, chat_id: int, limit: int = 200) -> str:
        self._ensure_ready()
        chat = await self._get_chat(chat_id)
        chat_type = chat.get("type") or {}
        kind = chat_type_name(chat_type)

        if kind == "basic_group":
            info = await self._request({
                "@type": "getBasicGroupFullInfo",
                "basic_group_id": chat_type.get("basic_group_id"),
            })
            members = [member_to_dict(m) for m in info.get("members", [])]
            return to_json({"members": members, "total_count": len(members)})

        if kind in ("supergroup", "channel"):
            result = await self._request({
                "@type": "getSupergroupMembers",
                "supergroup_id": chat_type.get("supergroup_id"),
                "filter": None,
                "offset": 0,
                "limit": limit,
            })
            members = [member_to_dict(m) for m in result.get("members", [])]
            return to_json({"members": members, "total_count": result.get("total_count", len(members))})

        return to_json({"members": [], "total_count": 0})

    async def add_chat_members(self, chat_id: int, user_ids: list[int]) -> str:
        self._ensure_ready()
        await self._request({"@type": "addChatMembers", "chat_id": chat_id, "user_ids": user_ids})
        return to_json({"success": True, "chat_id": chat_id, "added_count": len(user_ids)})

    async def promote_admin(self, chat_id: int, user_id: int) -> str:
        await self._set_member_status(chat_id, user_id, {
            "@type": "chatMemberStatusAdministrator",
            "custom_title": "",
            "can_be_edited": True,
            "rights": _ADMIN_RIGHTS,
        })
        return to_json({"success": True, "chat_id": chat_id, "user_id": user_id, "role": "administrator"})

    async def demote_admin(self, chat_id: int, user_id: int) -> str:
        await self._set_member_status(
            chat_id, user_id, {"@type": "chatMemberStatusMember", "member_until_date": 0}
        )
        return to_json({"success": True, "chat_id": chat_id, "user_id": user_id, "role": "member"})

    async def ban_user(self, chat_id: int, user_id: int) -> str:
        await self._set_member_status(
            chat_id, user_id, {"@type": "chatMemberStatusBanned", "banned_until_date": 0}
        )
        return to_json({"success": True, "chat_id": chat_id, "user_id": user_id, "banned": True})

    async def unban_user(self, chat_id: int, user_id: int) -> str:
        await self._set_member_status(chat_id, user_id, {"@type": "chatMemberStatusLeft"})
        return to_json({"success": True, "chat_id": chat_id, "user_id": user_id, "banned": False})

    # ── search ──────────────────────────────────────────────────────

    async def search_messages(self, chat_id: int, query: str, limit: int = 20) -> str:
        self._ensure_ready()
        result = await self._request({
            "@type": "searchChatMessages",
            "chat_id": chat_id,
            "query": query,
            "sender_id": None,
            "from_message_id": 0,
            "offset": 0,
            "limit": limit,
            "filter": None,
        })
        messages = [message_to_dict(m) for m in result.get("messages", []) if m]
        return to_json({"messages": messages, "total_count": result.get("total_count", len(messages))})

    async def search_public_chats(self, query: str) -> str:
        self._ensure_ready()
        result = await self._request({"@type": "searchPublicChats", "query": query})
        chats = []
        for chat_id in result.get("chat_ids", []):
            chat = await self._get_chat(chat_id)
            chats.append({
                "id": chat.get("id"),
                "title": chat.get("title", ""),
                "type": chat_type_name(chat.get("type")),
            })
        return to_json({"chats": chats, "total_count": len(chats)})

    # ── internal ────────────────────────────────────────────────────

    def _ensure_ready(self) -> None:
        if self._client_id is None:
            raise ClientNotInitializedError()
        if self.authorization_state != AuthorizationState.READY:
            raise NotAuthorizedError()

    async def _request(self, request: dict[str, Any]) -> dict[str, Any]:
        """Send one request and await the matching response."""
        if self._client_id is None or self._loop is None or self._transport is None:
            raise ClientNotInitializedError()
        if self._receive_error is not None:
            raise self._receive_error
        extra = uuid.uuid4().hex
        future: asyncio.Future[dict[str, Any]] = self._loop.create_future()
        with self._lock:
            self._pending[extra] = future
        try:
            self._transport.send(self._client_id, {**request, "@extra": extra})
            return await future
        finally:
            with self._lock:
                self._pending.pop(extra, None)

    async def _authenticate(self, request: dict[str, Any]) -> None:
        if self._client_id is None:
            raise ClientNotInitializedError()
        try:
            await self._request(request)
        except BackendError as exc:
            raise AuthorizationFailedError(exc.message) from exc

    async def _get_chat(self, chat_id: int) -> dict[str, Any]:
        try:
            return await self._request({"@type": "getChat", "chat_id": chat_id})
        except BackendError as exc:
            if _is_not_found(exc):
                raise ChatNotFoundError(chat_id) from exc
            raise

    async def _get_user(self, user_id: int) -> dict[str, Any]:
        try:
            return await self._request({"@type": "getUser", "user_id": user_id})
        except BackendError as exc:
            if _is_not_found(exc):
                raise UserNotFoundError(user_id) from exc
            raise

    async def _set_member_status(self, chat_id: int, user_id: int, status: dict[str, Any]) -> None:
        self._ensure_ready()
        await self._request({
            "@type": "setChatMemberStatus",
            "chat_id": chat_id,
            "member_id": _user_sender(user_id),
            "status": status,
        })

    async def _send_parameters(self) -> None:
        cfg = self.config
        await self._request({
            "@type": "setTdlibParameters",
            "use_test_dc": False,
            "database_directory": cfg.database_directory,
            "files_directory": cfg.files_directory,
            "database_encryption_key": "",
            "use_file_database": cfg.use_file_database,
            "use_chat_info_database": cfg.use_chat_info_database,
            "use_message_database": cfg.use_message_database,
            "use_secret_chats": False,
            "api_id": cfg.api_id,
            "api_hash": cfg.api_hash,
            "system_language_code": cfg.system_language_code,
            "device_model": cfg.device_model,
            "system_version": "",
            "application_version": cfg.application_version,
        })

    def _raise_parameters_failure(self) -> None:
        task = self._parameters_task
        if task is not None and task.done() and not task.cancelled():
            exc = task.exception()
            if isinstance(exc, BackendError):
                raise AuthorizationFailedError(exc.message) from exc
            if exc is not None:
                raise exc

    def _set_state(self, state: AuthorizationState) -> None:
        self.authorization_state = state
        if self._state_changed is not None:
            self._state_changed.set()
            self._state_changed = asyncio.Event()

    # ── event loop side ─────────────────────────────────────────────

    def _on_update(self, update: dict[str, Any]) -> None:
        if update.get("@type") != "updateAuthorizationState":
            return
        kind = (update.get("authorization_state") or {}).get("@type")
        state = _AUTH_STATES.get(kind)
        if state is None:
            return
        self._set_state(state)
        if state == AuthorizationState.WAITING_PARAMS:
            self._parameters_task = asyncio.ensure_future(self._send_parameters())
            self._parameters_task.add_done_callback(self._on_parameters_sent)
            return
        if self.on_auth_state_changed is not None:
            self.on_auth_state_changed(state)

    def _on_parameters_sent(self, task: asyncio.Task[None]) -> None:
        if task.cancelled() or task.exception() is None:
            return
        # Wake waiters so they can observe the failure.
        if self._state_changed is not None:
            self._state_changed.set()
            self._state_changed = asyncio.Event()

    def _on_response(self, extra: str, response: dict[str, Any]) -> None:
        with self._lock:
            future = self._pending.pop(extra, None)
        if future is None or future.done():
            return
        if response.get("@type") == "error":
            future.set_exception(
                BackendError(int(response.get("code", 0)), str(response.get("message", "")))
            )
        else:
            future.set_result(response)

    def _fail_pending(self, error: Exception) -> None:
        with self._lock:
            pending = list(self._pending.values())
            self._pending.clear()
        for future in pending:
            if not future.done():
                future.set_exception(error)

    # ── receive thread ──────────────────────────────────────────────

    def _receive_loop(self) -> None:
        transport = self._transport
        loop = self._loop
        assert transport is not None and loop is not None
        try:
            while not self._stopping.is_set():
                event = transport.receive(self._receive_timeout)
                if event is None:
                    continue
                client_id = event.get("@client_id")
                if client_id is not None and client_id != self._client_id:
                    continue
                extra = event.get("@extra")
                try:
                    if extra is not None:
                        loop.call_soon_threadsafe(self._on_response, extra, event)
                    else:
                        loop.call_soon_threadsafe(self._on_update, event)
                except RuntimeError:
                    # Event loop closed underneath us.
                    return
        except Exception as exc:  # noqa: BLE001
            # Requests in flight would otherwise wait forever.
            error = UnknownError(f"TDLib receive failed: {exc}")
            self._receive_error = error
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(self._fail_pending, error)
