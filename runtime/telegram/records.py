"""Map TDLib objects to the plain records returned by the tools."""

from __future__ import annotations

from typing import Any

_CONTENT_TYPES = {
    "messageText": "text",
    "messagePhoto": "photo",
    "messageVideo": "video",
    "messageDocument": "document",
    "messageSticker": "sticker",
    "messageVoiceNote": "voice_note",
    "messageVideoNote": "video_note",
    "messageAnimation": "animation",
}

# Content kinds that carry a caption.
_CAPTIONED = {"messagePhoto", "messageVideo", "messageDocument", "messageAnimation"}

_MEMBER_ROLES = {
    "chatMemberStatusCreator": "creator",
    "chatMemberStatusAdministrator": "administrator",
    "chatMemberStatusMember": "member",
    "chatMemberStatusRestricted": "restricted",
    "chatMemberStatusBanned": "banned",
    "chatMemberStatusLeft": "left",
}


def _text(formatted: dict[str, Any] | None) -> str:
    return (formatted or {}).get("text", "")


def chat_type_name(chat_type: dict[str, Any] | None) -> str:
    chat_type = chat_type or {}
    kind = chat_type.get("@type")
    if kind == "chatTypePrivate":
        return "private"
    if kind == "chatTypeBasicGroup":
        return "basic_group"
    if kind == "chatTypeSupergroup":
        return "channel" if chat_type.get("is_channel") else "supergroup"
    if kind == "chatTypeSecret":
        return "secret"
    return "unknown"


def chat_summary(chat: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": chat.get("id"),
        "title": chat.get("title", ""),
        "type": chat_type_name(chat.get("type")),
        "unread_count": chat.get("unread_count", 0),
    }


def chat_details(chat: dict[str, Any]) -> dict[str, Any]:
    record = chat_summary(chat)
    record["last_read_inbox_message_id"] = chat.get("last_read_inbox_message_id", 0)
    record["last_read_outbox_message_id"] = chat.get("last_read_outbox_message_id", 0)
    return record


def _sender_fields(sender: dict[str, Any] | None, user_key: str, chat_key: str) -> dict[str, Any]:
    sender = sender or {}
    kind = sender.get("@type")
    if kind == "messageSenderUser":
        return {user_key: sender.get("user_id")}
    if kind == "messageSenderChat":
        return {chat_key: sender.get("chat_id")}
    return {}


def message_to_dict(message: dict[str, Any]) -> dict[str, Any]:
    """Flatten a TDLib ``message`` into id/chat/sender/date/content fields."""
    record: dict[str, Any] = {
        "id": message.get("id"),
        "chat_id": message.get("chat_id"),
        "date": message.get("date", 0),
        "is_outgoing": message.get("is_outgoing", False),
    }
    record.update(
        _sender_fields(message.get("sender_id"), "sender_user_id", "sender_chat_id")
    )

    content = message.get("content") or {}
    kind = content.get("@type", "")
    record["content_type"] = _CONTENT_TYPES.get(kind, "other")

    if kind == "messageText":
        record["text"] = _text(content.get("text"))
    elif kind == "messageSticker":
        record["emoji"] = (content.get("sticker") or {}).get("emoji", "")
    if kind == "messageDocument":
        record["file_name"] = (content.get("document") or {}).get("file_name", "")
    if kind in _CAPTIONED:
        record["caption"] = _text(content.get("caption"))
    return record


def user_to_dict(user: dict[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": user.get("id"),
        "first_name": user.get("first_name", ""),
        "last_name": user.get("last_name", ""),
        "is_premium": user.get("is_premium", False),
        "is_bot": (user.get("type") or {}).get("@type") == "userTypeBot",
    }
    active = (user.get("usernames") or {}).get("active_usernames") or []
    if active:
        record["username"] = active[0]
    phone = user.get("phone_number")
    if phone:
        record["phone_number"] = phone
    return record


def member_to_dict(member: dict[str, Any]) -> dict[str, Any]:
    record = _sender_fields(member.get("member_id"), "user_id", "chat_id")
    status = (member.get("status") or {}).get("@type", "")
    record["role"] = _MEMBER_ROLES.get(status, "unknown")
    record["joined_date"] = member.get("joined_chat_date", 0)
    return record
