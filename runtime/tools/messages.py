"""Message tools — history, lookup, send, reply, edit, forward and delete."""

from __future__ import annotations

from collections.abc import Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import (
    array_property,
    integer_property,
    object_schema,
    string_property,
)

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 100


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        get_chat_history_tool(client),
        get_message_tool(client),
        send_message_tool(client),
        reply_to_message_tool(client),
        edit_message_tool(client),
        forward_messages_tool(client),
        delete_messages_tool(client),
    ]


def get_chat_history_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        from_message_id = args.optional_int64("from_message_id") or 0
        limit = args.optional_int("limit")
        if limit is None:
            limit = DEFAULT_HISTORY_LIMIT
        return await client.get_chat_history(
            chat_id, from_message_id=from_message_id, limit=min(limit, MAX_HISTORY_LIMIT)
        )

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_chat_history",
            description=(
                "Get message history from a chat. "
                "Returns messages in reverse chronological order."
            ),
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat to get messages from"),
                    "from_message_id": integer_property(
                        "Message ID to start from (0 for most recent)"
                    ),
                    "limit": integer_property(
                        "Maximum number of messages to return (default 50, max 100)"
                    ),
                },
                required=["chat_id"],
            ),
        ),
        handler=handler,
    )


def get_message_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        message_id = args.required_int64("message_id")
        return await client.get_message(chat_id, message_id)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_message",
            description="Get a single message by its ID from a chat.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat containing the message"),
                    "message_id": integer_property("The ID of the message to retrieve"),
                },
                required=["chat_id", "message_id"],
            ),
        ),
        handler=handler,
    )


def send_message_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        text = args.required_string("text")
        return await client.send_message(chat_id, text)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_send_message",
            description="Send a text message to a chat.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat to send the message to"),
                    "text": string_property("The text content of the message"),
                },
                required=["chat_id", "text"],
            ),
        ),
        handler=handler,
    )


def reply_to_message_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        message_id = args.required_int64("message_id")
        text = args.required_string("text")
        return await client.reply_to_message(chat_id, message_id, text)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_reply_to_message",
            description="Reply to a specific message in a chat.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat containing the message"),
                    "message_id": integer_property("The ID of the message to reply to"),
                    "text": string_property("The reply text"),
                },
                required=["chat_id", "message_id", "text"],
            ),
        ),
        handler=handler,
    )


def edit_message_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        message_id = args.required_int64("message_id")
        text = args.required_string("text")
        return await client.edit_message(chat_id, message_id, text)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_edit_message",
            description="Edit an existing text message.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat containing the message"),
                    "message_id": integer_property("The ID of the message to edit"),
                    "text": string_property("The new text content"),
                },
                required=["chat_id", "message_id", "text"],
            ),
        ),
        handler=handler,
    )


def forward_messages_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        from_chat_id = args.required_int64("from_chat_id")
        message_ids = args.required_int64_array("message_ids")
        return await client.forward_messages(chat_id, from_chat_id, message_ids)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_forward_messages",
            description="Forward messages from one chat to another.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The target chat to forward messages to"),
                    "from_chat_id": integer_property(
                        "The source chat containing the messages"
                    ),
                    "message_ids": array_property(
                        "Array of message IDs to forward", item_type="integer"
                    ),
                },
                required=["chat_id", "from_chat_id", "message_ids"],
            ),
        ),
        handler=handler,
    )


def delete_messages_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        message_ids = args.required_int64_array("message_ids")
        return await client.delete_messages(chat_id, message_ids)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_delete_messages",
            description=(
                "Delete messages from a chat. "
                "Deletes for all participants when possible."
            ),
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat containing the messages"),
                    "message_ids": array_property(
                        "Array of message IDs to delete", item_type="integer"
                    ),
                },
                required=["chat_id", "message_ids"],
            ),
        ),
        handler=handler,
    )
