"""The built-in Telegram tool catalog — 29 tools in six groups."""

from __future__ import annotations

from contracts.messaging import MessagingClient
from contracts.tool_sdk import ToolDefinition
from runtime.tools import chats, contacts, groups, messages, search, users

TOOL_COUNTS: dict[str, int] = {
    "chat": 6,
    "message": 7,
    "contact": 4,
    "user": 4,
    "group": 6,
    "search": 2,
    "total": 29,
}

TOOL_NAMES: list[str] = [
    # chat
    "telegram_get_chats",
    "telegram_get_chat",
    "telegram_create_group",
    "telegram_create_channel",
    "telegram_leave_chat",
    "telegram_edit_chat_title",
    # message
    "telegram_get_chat_history",
    "telegram_get_message",
    "telegram_send_message",
    "telegram_reply_to_message",
    "telegram_edit_message",
    "telegram_forward_messages",
    "telegram_delete_messages",
    # contact
    "telegram_get_contacts",
    "telegram_search_contacts",
    "telegram_add_contact",
    "telegram_delete_contact",
    # user
    "telegram_get_me",
    "telegram_get_user",
    "telegram_block_user",
    "telegram_unblock_user",
    # group
    "telegram_get_chat_members",
    "telegram_add_chat_members",
    "telegram_promote_admin",
    "telegram_demote_admin",
    "telegram_ban_user",
    "telegram_unban_user",
    # search
    "telegram_search_messages",
    "telegram_search_public_chats",
]


def all_tools(client: MessagingClient) -> list[ToolDefinition]:
    """Build every built-in tool bound to *client*."""
    tools: list[ToolDefinition] = []
    tools.extend(chats.all_tools(client))
    tools.extend(messages.all_tools(client))
    tools.extend(contacts.all_tools(client))
    tools.extend(users.all_tools(client))
    tools.extend(groups.all_tools(client))
    tools.extend(search.all_tools(client))
    return tools
