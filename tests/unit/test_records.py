"""Unit tests for TDLib object mapping."""

from __future__ import annotations

from runtime.telegram.records import (
    chat_details,
    chat_summary,
    chat_type_name,
    member_to_dict,
    message_to_dict,
    user_to_dict,
)


class TestChatRecords:
    def test_chat_type_names(self) -> None:
        assert chat_type_name({"@type": "chatTypePrivate"}) == "private"
        assert chat_type_name({"@type": "chatTypeBasicGroup"}) == "basic_group"
        assert chat_type_name({"@type": "chatTypeSupergroup", "is_channel": False}) == "supergroup"
        assert chat_type_name({"@type": "chatTypeSupergroup", "is_channel": True}) == "channel"
        assert chat_type_name({"@type": "chatTypeSecret"}) == "secret"

    def test_summary_and_details(self) -> None:
        chat = {
            "id": -5,
            "title": "Team",
            "type": {"@type": "chatTypeBasicGroup", "basic_group_id": 5},
            "unread_count": 3,
            "last_read_inbox_message_id": 11,
            "last_read_outbox_message_id": 12,
        }
        assert chat_summary(chat) == {"id": -5, "title": "Team", "type": "basic_group", "unread_count": 3}
        details = chat_details(chat)
        assert details["last_read_inbox_message_id"] == 11
        assert details["last_read_outbox_message_id"] == 12


class TestMessageRecords:
    def test_text_message(self) -> None:
        record = message_to_dict({
            "id": 1,
            "chat_id": 2,
            "date": 3,
            "is_outgoing": False,
            "sender_id": {"@type": "messageSenderUser", "user_id": 4},
            "content": {"@type": "messageText", "text": {"text": "hello"}},
        })
        assert record == {
            "id": 1,
            "chat_id": 2,
            "date": 3,
            "is_outgoing": False,
            "sender_user_id": 4,
            "content_type": "text",
            "text": "hello",
        }

    def test_chat_sender(self) -> None:
        record = message_to_dict({
            "id": 1,
            "chat_id": 2,
            "sender_id": {"@type": "messageSenderChat", "chat_id": -9},
            "content": {"@type": "messageVoiceNote"},
        })
        assert record["sender_chat_id"] == -9
        assert "sender_user_id" not in record
        assert record["content_type"] == "voice_note"

    def test_document_has_file_name_and_caption(self) -> None:
        record = message_to_dict({
            "id": 1,
            "chat_id": 2,
            "content": {
                "@type": "messageDocument",
                "document": {"file_name": "report.pdf"},
                "caption": {"text": "Q3"},
            },
        })
        assert record["content_type"] == "document"
        assert record["file_name"] == "report.pdf"
        assert record["caption"] == "Q3"

    def test_photo_caption_may_be_empty(self) -> None:
        record = message_to_dict({"id": 1, "chat_id": 2, "content": {"@type": "messagePhoto"}})
        assert record["content_type"] == "photo"
        assert record["caption"] == ""

    def test_sticker_emoji(self) -> None:
        record = message_to_dict({
            "id": 1,
            "chat_id": 2,
            "content": {"@type": "messageSticker", "sticker": {"emoji": "👍"}},
        })
        assert record["emoji"] == "👍"

    def test_unknown_content_is_other(self) -> None:
        record = message_to_dict({"id": 1, "chat_id": 2, "content": {"@type": "messagePoll"}})
        assert record["content_type"] == "other"


class TestUserAndMemberRecords:
    def test_user(self) -> None:
        record = user_to_dict({
            "id": 10,
            "first_name": "Ann",
            "last_name": "Lee",
            "is_premium": True,
            "usernames": {"active_usernames": ["ann", "ann_old"]},
            "phone_number": "15550001",
            "type": {"@type": "userTypeRegular"},
        })
        assert record == {
            "id": 10,
            "first_name": "Ann",
            "last_name": "Lee",
            "is_premium": True,
            "is_bot": False,
            "username": "ann",
            "phone_number": "15550001",
        }

    def test_bot_without_phone_or_username(self) -> None:
        record = user_to_dict({
            "id": 11,
            "first_name": "Bot",
            "last_name": "",
            "phone_number": "",
            "type": {"@type": "userTypeBot"},
        })
        assert record["is_bot"] is True
        assert "phone_number" not in record
        assert "username" not in record

    def test_member_roles(self) -> None:
        for status, role in [
            ("chatMemberStatusCreator", "creator"),
            ("chatMemberStatusAdministrator", "administrator"),
            ("chatMemberStatusMember", "member"),
            ("chatMemberStatusRestricted", "restricted"),
            ("chatMemberStatusBanned", "banned"),
            ("chatMemberStatusLeft", "left"),
        ]:
            record = member_to_dict({
                "member_id": {"@type": "messageSenderUser", "user_id": 1},
                "status": {"@type": status},
                "joined_chat_date": 5,
            })
            assert record == {"user_id": 1, "role": role, "joined_date": 5}

    def test_chat_member(self) -> None:
        record = member_to_dict({
            "member_id": {"@type": "messageSenderChat", "chat_id": -7},
            "status": {"@type": "chatMemberStatusMember"},
        })
        assert record == {"chat_id": -7, "role": "member", "joined_date": 0}
