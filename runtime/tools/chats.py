"""Chat tools — list, inspect, create, leave and rename chats."""

from __future__ import annotations

from collections.abc import Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import (
    array_property,
    boolean_property,
    integer_property,
    object_schema,
    string_property,
)

DEFAULT_CHAT_LIMIT = 50
MAX_CHAT_LIMIT = 100


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        get_chats_tool(client),
        get_chat_tool(client),
        create_group_tool(client),
        create_channel_tool(client),
        leave_chat_tool(client),
        edit_chat_title_tool(client),
    ]


def get_chats_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        limit = args.optional_int("limit")
        if limit is None:
            limit = DEFAULT_CHAT_LIMIT
        return await client.get_chats(limit=min(limit, MAX_CHAT_LIMIT))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_chats",
            description="Get the list of chats. Returns chat ID, title, type, and unread count.",
            input_schema=object_schema(
                {
                    "limit": integer_property(
                        "Maximum number of chats to return (default 50, max 100)"
                    ),
                },
            ),
        ),
        handler=handler,
    )


def get_chat_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.get_chat(args.required_int64("chat_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_chat",
            description="Get detailed information about a specific chat by its ID.",
            input_schema=object_schema(
                {"chat_id": integer_property("The unique identifier of the chat")},
                required=["chat_id"],
            ),
        ),
        handler=handler,
    )


def create_group_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        title = args.required_string("title")
        user_ids = args.required_int64_array("user_ids")
        return await client.create_group(title, user_ids)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_create_group",
            description="Create a new basic group chat with specified users.",
            input_schema=object_schema(
                {
                    "title": string_property("The title of the new group"),
                    "user_ids": array_property(
                        "Array of user IDs to add to the group", item_type="integer"
                    ),
                },
                required=["title", "user_ids"],
            ),
        ),
        handler=handler,
    )


def create_channel_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        title = args.required_string("title")
        description = args.optional_string("description") or ""
        is_channel = args.optional_bool("is_channel")
        if is_channel is None:
            is_channel = True
        return await client.create_channel(title, description, is_channel)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_create_channel",
            description="Create a new channel or supergroup.",
            input_schema=object_schema(
                {
                    "title": string_property("The title of the channel"),
                    "description": string_property("Description of the channel"),
                    "is_channel": boolean_property(
                        "True for channel, false for supergroup (default true)"
                    ),
                },
                required=["title"],
            ),
        ),
        handler=handler,
    )


def leave_chat_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.leave_chat(args.required_int64("chat_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_leave_chat",
            description="Leave a group or channel.",
            input_schema=object_schema(
                {"chat_id": integer_property("The unique identifier of the chat to leave")},
                required=["chat_id"],
            ),
        ),
        handler=handler,
    )


def edit_chat_title_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        title = args.required_string("title")
        return await client.edit_chat_title(chat_id, title)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_edit_chat_title",
            description="Edit the title of a chat.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The unique identifier of the chat"),
                    "title": string_property("The new title for the chat"),
                },
                required=["chat_id", "title"],
            ),
        ),
        handler=handler,
    )
