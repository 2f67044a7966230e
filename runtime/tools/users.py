"""User tools."""

from __future__ import annotations

from collections.abc import Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import integer_property, object_schema


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        get_me_tool(client),
        get_user_tool(client),
        block_user_tool(client),
        unblock_user_tool(client),
    ]


def _user_schema(description: str) -> dict:
    return object_schema(
        {"user_id": integer_property(description)},
        required=["user_id"],
    )


def get_me_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        return await client.get_me()

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_me",
            description="Get information about the currently authenticated user.",
            input_schema=object_schema({}),
        ),
        handler=handler,
    )


def get_user_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.get_user(args.required_int64("user_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_user",
            description="Get information about a user by their ID.",
            input_schema=_user_schema("The unique identifier of the user"),
        ),
        handler=handler,
    )


def block_user_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.block_user(args.required_int64("user_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_block_user",
            description="Block a user. Blocked users cannot send you messages.",
            input_schema=_user_schema("The ID of the user to block"),
        ),
        handler=handler,
    )


def unblock_user_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        return await client.unblock_user(args.required_int64("user_id"))

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_unblock_user",
            description="Unblock a previously blocked user.",
            input_schema=_user_schema("The ID of the user to unblock"),
        ),
        handler=handler,
    )
