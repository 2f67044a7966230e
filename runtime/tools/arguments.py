"""Argument extraction — typed access to a tool call's argument map.

``required_*`` methods raise on absence or shape mismatch; ``optional_*``
methods return ``None`` instead.  Two coercions are lenient:
int64 values may arrive as decimal strings, and int64 arrays drop elements
that do not coerce rather than failing the call.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contracts.errors import InvalidArgumentTypeError, MissingRequiredArgumentError
from contracts.value import Value


class ArgumentExtractor:
    """Validates and coerces one call's arguments."""

    def __init__(self, arguments: Mapping[str, Any] | None = None) -> None:
        self._arguments: dict[str, Value] = {
            key: Value.from_native(value) for key, value in (arguments or {}).items()
        }

    def _require(self, key: str) -> Value:
        try:
            return self._arguments[key]
        except KeyError:
            raise MissingRequiredArgumentError(key) from None

    def _optional(self, key: str) -> Value:
        return self._arguments.get(key, Value.null())

    # ── strings ─────────────────────────────────────────────────────

    def required_string(self, key: str) -> str:
        value = self._require(key)
        result = value.as_string()
        if result is None:
            raise InvalidArgumentTypeError(key, expected="string", got=value.type_name)
        return result

    def optional_string(self, key: str) -> str | None:
        return self._optional(key).as_string()

    # ── integers ────────────────────────────────────────────────────

    def required_int64(self, key: str) -> int:
        """Telegram identifiers; decimal strings are accepted."""
        value = self._require(key)
        result = value.as_int64()
        if result is None:
            raise InvalidArgumentTypeError(key, expected="integer (int64)", got=value.type_name)
        return result

    def optional_int64(self, key: str) -> int | None:
        return self._optional(key).as_int64()

    def optional_int(self, key: str) -> int | None:
        return self._optional(key).as_int32()

    # ── misc ────────────────────────────────────────────────────────

    def optional_bool(self, key: str) -> bool | None:
        return self._optional(key).as_bool()

    def required_int64_array(self, key: str) -> list[int]:
        value = self._require(key)
        items = value.as_array()
        if items is None:
            raise InvalidArgumentTypeError(key, expected="array", got=value.type_name)
        coerced = (item.as_int64() for item in items)
        return [number for number in coerced if number is not None]

    def optional_array(self, key: str) -> list[Value] | None:
        return self._optional(key).as_array()

    def has(self, key: str) -> bool:
        return key in self._arguments and not self._arguments[key].is_null
