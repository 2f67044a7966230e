"""Unit tests for the built-in Telegram tool catalog."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from contracts.errors import InvalidArgumentTypeError, MissingRequiredArgumentError
from contracts.messaging import MessagingClient
from runtime.tools.catalog import TOOL_COUNTS, TOOL_NAMES, all_tools
from runtime.tools.registry import ToolRegistry


# ── helpers ─────────────────────────────────────────────────────────


def _client() -> AsyncMock:
    client = AsyncMock(spec=MessagingClient)
    for name in dir(MessagingClient):
        if name.startswith("_"):
            continue
        attr = getattr(client, name, None)
        if isinstance(attr, AsyncMock):
            attr.return_value = '{"ok":true}'
    return client


def _registry(client: AsyncMock) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(all_tools(client))
    return registry


_SAMPLE_BY_TYPE: dict[str, Any] = {
    "string": "sample",
    "integer": 12345,
    "boolean": True,
}


def _minimal_arguments(schema: dict[str, Any]) -> dict[str, Any]:
    args: dict[str, Any] = {}
    for key in schema["required"]:
        prop = schema["properties"][key]
        if prop["type"] == "array":
            args[key] = [1, 2]
        else:
            args[key] = _SAMPLE_BY_TYPE[prop["type"]]
    return args


# ── catalog shape ───────────────────────────────────────────────────


class TestCatalogShape:
    def test_twenty_nine_tools(self) -> None:
        tools = all_tools(_client())
        assert len(tools) == 29
        assert TOOL_COUNTS["total"] == 29
        assert sum(v for k, v in TOOL_COUNTS.items() if k != "total") == 29

    def test_order_and_names(self) -> None:
        assert [t.name for t in all_tools(_client())] == TOOL_NAMES

    def test_names_unique_and_prefixed(self) -> None:
        assert len(set(TOOL_NAMES)) == len(TOOL_NAMES)
        assert all(name.startswith("telegram_") for name in TOOL_NAMES)

    def test_schemas_are_object_schemas(self) -> None:
        for tool in all_tools(_client()):
            schema = tool.descriptor.input_schema
            assert schema["type"] == "object"
            assert set(schema["required"]) <= set(schema["properties"])
            assert tool.descriptor.description

    def test_id_arrays_declare_integer_items(self) -> None:
        for tool in all_tools(_client()):
            for key, prop in tool.descriptor.input_schema["properties"].items():
                if prop["type"] == "array":
                    assert prop["items"] == {"type": "integer"}, (tool.name, key)


# ── dispatch through the catalog ────────────────────────────────────


class TestCatalogDispatch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    async def test_minimal_arguments_accepted(self, tool_name: str) -> None:
        client = _client()
        registry = _registry(client)
        schema = registry.get(tool_name).descriptor.input_schema
        content = await registry.execute(tool_name, _minimal_arguments(schema))
        assert content[0].text == '{"ok":true}'

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", TOOL_NAMES)
    async def test_missing_required_argument(self, tool_name: str) -> None:
        registry = _registry(_client())
        schema = registry.get(tool_name).descriptor.input_schema
        if not schema["required"]:
            pytest.skip("tool takes no required arguments")
        args = _minimal_arguments(schema)
        dropped = schema["required"][-1]
        del args[dropped]
        with pytest.raises(MissingRequiredArgumentError) as exc_info:
            await registry.execute(tool_name, args)
        assert exc_info.value.name == dropped

    @pytest.mark.asyncio
    async def test_get_chats_defaults_and_clamp(self) -> None:
        client = _client()
        registry = _registry(client)

        await registry.execute("telegram_get_chats", {})
        client.get_chats.assert_awaited_with(limit=50)

        await registry.execute("telegram_get_chats", {"limit": 500})
        client.get_chats.assert_awaited_with(limit=100)

        await registry.execute("telegram_get_chats", {"limit": 10})
        client.get_chats.assert_awaited_with(limit=10)

    @pytest.mark.asyncio
    async def test_chat_history_defaults_and_clamp(self) -> None:
        client = _client()
        registry = _registry(client)

        await registry.execute("telegram_get_chat_history", {"chat_id": 7})
        client.get_chat_history.assert_awaited_with(7, from_message_id=0, limit=50)

        await registry.execute(
            "telegram_get_chat_history", {"chat_id": "7", "from_message_id": 99, "limit": 1000}
        )
        client.get_chat_history.assert_awaited_with(7, from_message_id=99, limit=100)

    @pytest.mark.asyncio
    async def test_search_and_member_defaults(self) -> None:
        client = _client()
        registry = _registry(client)

        await registry.execute("telegram_search_contacts", {"query": "bob"})
        client.search_contacts.assert_awaited_with("bob", limit=20)

        await registry.execute("telegram_search_messages", {"chat_id": 1, "query": "hi"})
        client.search_messages.assert_awaited_with(1, "hi", limit=20)

        await registry.execute("telegram_get_chat_members", {"chat_id": 1})
        client.get_chat_members.assert_awaited_with(1, limit=200)

    @pytest.mark.asyncio
    async def test_create_channel_defaults(self) -> None:
        client = _client()
        registry = _registry(client)

        await registry.execute("telegram_create_channel", {"title": "News"})
        client.create_channel.assert_awaited_with("News", "", True)

        await registry.execute(
            "telegram_create_channel", {"title": "Chat", "description": "d", "is_channel": False}
        )
        client.create_channel.assert_awaited_with("Chat", "d", False)

    @pytest.mark.asyncio
    async def test_add_contact_default_last_name(self) -> None:
        client = _client()
        await _registry(client).execute(
            "telegram_add_contact", {"phone_number": "+100", "first_name": "Ann"}
        )
        client.add_contact.assert_awaited_with("+100", "Ann", "")

    @pytest.mark.asyncio
    async def test_string_ids_coerced(self) -> None:
        client = _client()
        await _registry(client).execute(
            "telegram_send_message", {"chat_id": "-1001234567890", "text": "hi"}
        )
        client.send_message.assert_awaited_with(-1001234567890, "hi")

    @pytest.mark.asyncio
    async def test_forward_drops_bad_ids(self) -> None:
        client = _client()
        await _registry(client).execute(
            "telegram_forward_messages",
            {"chat_id": 1, "from_chat_id": 2, "message_ids": [10, "11", "bad"]},
        )
        client.forward_messages.assert_awaited_with(1, 2, [10, 11])

    @pytest.mark.asyncio
    async def test_wrong_type_never_reaches_client(self) -> None:
        client = _client()
        with pytest.raises(InvalidArgumentTypeError):
            await _registry(client).execute("telegram_get_chat", {"chat_id": "abc"})
        client.get_chat.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_errors_pass_through(self) -> None:
        client = _client()
        client.get_me.side_effect = ConnectionError("offline")
        with pytest.raises(ConnectionError, match="offline"):
            await _registry(client).execute("telegram_get_me", {})

    @pytest.mark.asyncio
    async def test_promote_admin_forwards_ids(self) -> None:
        client = _client()
        await _registry(client).execute("telegram_promote_admin", {"chat_id": 1, "user_id": 2})
        client.promote_admin.assert_awaited_once_with(1, 2)
