"""Group administration tools — members, admin rights and bans."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value
from runtime.tools.arguments import ArgumentExtractor
from runtime.tools.schema import array_property, integer_property, object_schema

DEFAULT_MEMBER_LIMIT = 200


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    return [
        get_chat_members_tool(client),
        add_chat_members_tool(client),
        promote_admin_tool(client),
        demote_admin_tool(client),
        ban_user_tool(client),
        unban_user_tool(client),
    ]


def get_chat_members_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        limit = args.optional_int("limit")
        if limit is None:
            limit = DEFAULT_MEMBER_LIMIT
        return await client.get_chat_members(chat_id, limit=limit)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_get_chat_members",
            description="Get the list of members in a group or channel.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The unique identifier of the chat"),
                    "limit": integer_property(
                        "Maximum number of members to return (default 200)"
                    ),
                },
                required=["chat_id"],
            ),
        ),
        handler=handler,
    )


def add_chat_members_tool(client: MessagingClient) -> ToolDefinition:
    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        user_ids = args.required_int64_array("user_ids")
        return await client.add_chat_members(chat_id, user_ids)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name="telegram_add_chat_members",
            description="Add users to a group or channel.",
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The unique identifier of the chat"),
                    "user_ids": array_property(
                        "Array of user IDs to add", item_type="integer"
                    ),
                },
                required=["chat_id", "user_ids"],
            ),
        ),
        handler=handler,
    )


def _member_status_tool(
    name: str,
    description: str,
    user_description: str,
    operation: Callable[[int, int], Awaitable[str]],
) -> ToolDefinition:
    """Tools that take (chat_id, user_id) and change one member's status."""

    async def handler(arguments: Mapping[str, Value]) -> str:
        args = ArgumentExtractor(arguments)
        chat_id = args.required_int64("chat_id")
        user_id = args.required_int64("user_id")
        return await operation(chat_id, user_id)

    return ToolDefinition(
        descriptor=ToolDescriptor(
            name=name,
            description=description,
            input_schema=object_schema(
                {
                    "chat_id": integer_property("The unique identifier of the chat"),
                    "user_id": integer_property(user_description),
                },
                required=["chat_id", "user_id"],
            ),
        ),
        handler=handler,
    )


def promote_admin_tool(client: MessagingClient) -> ToolDefinition:
    return _member_status_tool(
        "telegram_promote_admin",
        "Promote a user to administrator in a group or channel. Grants standard admin rights.",
        "The ID of the user to promote",
        client.promote_admin,
    )


def demote_admin_tool(client: MessagingClient) -> ToolDefinition:
    return _member_status_tool(
        "telegram_demote_admin",
        "Demote an administrator back to a regular member.",
        "The ID of the admin to demote",
        client.demote_admin,
    )


def ban_user_tool(client: MessagingClient) -> ToolDefinition:
    return _member_status_tool(
        "telegram_ban_user",
        "Ban a user from a group or channel. The user will be removed and cannot rejoin.",
        "The ID of the user to ban",
        client.ban_user,
    )


def unban_user_tool(client: MessagingClient) -> ToolDefinition:
    return _member_status_tool(
        "telegram_unban_user",
        "Unban a previously banned user from a group or channel.",
        "The ID of the user to unban",
        client.unban_user,
    )
