"""Search tools."""

from __future__ import annotations

from collections.abc import Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import integer_property, object_schema, string_property

DEFAULT_SEARCH_LIMIT = 20


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        search_messages_tool(client),
        search_public_chats_tool(client),
    ]


def search_messages_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        query = args.required_string("query")
        limit = args.optional_int("limit")
        if limit is None:
            limit = DEFAULT_SEARCH_LIMIT
        return await client.search_messages(chat_id, query, limit=limit)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_search_messages",
            description="Search for messages in a specific chat by text query.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The chat to search in"),
                    "query": string_property("The search query text"),
                    "limit": integer_property(
                        "Maximum number of results to return (default 20)"
                    ),
                },
                required=["chat_id", "query"],
            ),
        ),
        handler=handler,
    )


def search_public_chats_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.search_public_chats(args.required_string("query"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_search_public_chats",
            description=(
                "Search for public chats (channels and supergroups) by username or title."
            ),
            input_schema=object_schema(
                {"query": string_property("The search query (username or title)")},
                required=["query"],
            ),
        ),
        handler=handler,
    )
