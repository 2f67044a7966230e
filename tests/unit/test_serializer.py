"""Unit tests for the result serializer."""

from __future__ import annotations

import json

import pytest

from contracts.errors import EncodingError
from runtime.serializer import encode_json, to_json


class TestToJson:
    def test_sorted_compact(self) -> None:
        assert to_json({"b": 1, "a": 2}) == '{"a":2,"b":1}'

    def test_nested_records(self) -> None:
        result = {"chats": [{"title": "x", "id": 1}], "total_count": 1}
        assert to_json(result) == '{"chats":[{"id":1,"title":"x"}],"total_count":1}'

    def test_deterministic(self) -> None:
        a = {"z": [1, 2], "y": {"q": True, "p": None}}
        b = {"y": {"p": None, "q": True}, "z": [1, 2]}
        assert to_json(a) == to_json(b)

    def test_unicode_not_escaped(self) -> None:
        assert to_json({"title": "Привет"}) == '{"title":"Привет"}'

    def test_large_ids_exact(self) -> None:
        text = to_json({"chat_id": -1001234567890123})
        assert json.loads(text)["chat_id"] == -1001234567890123

    def test_bytes_fall_back_to_empty_object(self) -> None:
        assert to_json({"blob": b"\x00\x01"}) == "{}"

    def test_nan_falls_back_to_empty_object(self) -> None:
        assert to_json({"x": float("nan")}) == "{}"

    def test_lone_surrogate_falls_back_to_empty_object(self) -> None:
        assert to_json({"title": "\ud800"}) == "{}"


class TestEncodeJson:
    def test_raises_encoding_error(self) -> None:
        with pytest.raises(EncodingError):
            encode_json({"x": float("inf")})

    def test_unknown_objects_stringified(self) -> None:
        class Marker:
            def __str__(self) -> str:
                return "marker"

        assert encode_json({"m": Marker()}) == '{"m":"marker"}'

    def test_lone_surrogate_raises(self) -> None:
        with pytest.raises(EncodingError):
            encode_json({"chats": [{"title": "ok \udfff"}]})

    def test_output_is_valid_utf8(self) -> None:
        text = encode_json({"title": "emoji \U0001f600"})
        assert text.encode("utf-8").decode("utf-8") == text
