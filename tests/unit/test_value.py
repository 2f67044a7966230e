"""Unit tests for the Value model."""

from __future__ import annotations

import pytest

from contracts.value import INT64_MAX, INT64_MIN, Value, ValueKind


class TestFromNative:
    def test_scalars(self) -> None:
        assert Value.from_native(None).kind is ValueKind.NULL
        assert Value.from_native(3).kind is ValueKind.INT
        assert Value.from_native(2.5).kind is ValueKind.DOUBLE
        assert Value.from_native("x").kind is ValueKind.STRING
        assert Value.from_native(b"\x00").kind is ValueKind.DATA

    def test_bool_is_not_int(self) -> None:
        value = Value.from_native(True)
        assert value.kind is ValueKind.BOOL
        assert value.as_int() is None
        assert value.as_bool() is True

    def test_nested_round_trip(self) -> None:
        native = {"a": [1, "two", {"b": None}], "c": False}
        assert Value.from_native(native).to_native() == native

    def test_value_passes_through(self) -> None:
        value = Value.of_int(1)
        assert Value.from_native(value) is value

    def test_unknown_object_becomes_string(self) -> None:
        class Thing:
            def __str__(self) -> str:
                return "thing"

        assert Value.from_native(Thing()) == Value.of_string("thing")

    def test_mapping_keys_are_strings(self) -> None:
        value = Value.from_native({1: "a"})
        assert value.as_object() == {"1": Value.of_string("a")}


class TestProjections:
    def test_as_int64_accepts_decimal_string(self) -> None:
        assert Value.of_string("123").as_int64() == 123
        assert Value.of_string("-1001234567890").as_int64() == -1001234567890
        assert Value.of_string("+7").as_int64() == 7

    @pytest.mark.parametrize("text", ["", "12a", "1.5", " 12", "0x10"])
    def test_as_int64_rejects_non_decimal(self, text: str) -> None:
        assert Value.of_string(text).as_int64() is None

    def test_as_int64_range(self) -> None:
        assert Value.of_int(INT64_MAX).as_int64() == INT64_MAX
        assert Value.of_int(INT64_MIN).as_int64() == INT64_MIN
        assert Value.of_int(INT64_MAX + 1).as_int64() is None
        assert Value.of_string(str(INT64_MIN - 1)).as_int64() is None

    def test_as_int64_rejects_double(self) -> None:
        assert Value.of_double(5.0).as_int64() is None

    def test_as_int32_range(self) -> None:
        assert Value.of_int(100).as_int32() == 100
        assert Value.of_int(2**31).as_int32() is None
        assert Value.of_string("100").as_int32() is None

    def test_as_double_widens_int(self) -> None:
        assert Value.of_int(2).as_double() == 2.0
        assert Value.of_string("2").as_double() is None

    def test_mismatched_projections_return_none(self) -> None:
        value = Value.of_string("x")
        assert value.as_bool() is None
        assert value.as_array() is None
        assert value.as_object() is None
        assert Value.of_int(1).as_string() is None

    def test_type_name(self) -> None:
        assert Value.null().type_name == "null"
        assert Value.of_array([]).type_name == "array"
        assert Value.of_object({}).type_name == "object"
