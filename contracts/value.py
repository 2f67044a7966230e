"""Value model — the closed variant type used for tool arguments and results.

Every tool argument arrives as a ``Value`` and every result record passes
through one before it is encoded.  Projections (``as_*``) never raise; they
return ``None`` when the variant does not match.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class ValueKind(str, Enum):
    NULL = "null"
    BOOL = "boolean"
    INT = "integer"
    DOUBLE = "number"
    STRING = "string"
    DATA = "data"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class Value:
    """A single JSON-like value tagged with its kind."""

    kind: ValueKind
    payload: Any = None

    # ── constructors ────────────────────────────────────────────────

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL)

    @classmethod
    def of_bool(cls, value: bool) -> Value:
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def of_int(cls, value: int) -> Value:
        return cls(ValueKind.INT, int(value))

    @classmethod
    def of_double(cls, value: float) -> Value:
        return cls(ValueKind.DOUBLE, float(value))

    @classmethod
    def of_string(cls, value: str) -> Value:
        return cls(ValueKind.STRING, value)

    @classmethod
    def of_data(cls, value: bytes) -> Value:
        return cls(ValueKind.DATA, bytes(value))

    @classmethod
    def of_array(cls, items: list[Value] | tuple[Value, ...]) -> Value:
        return cls(ValueKind.ARRAY, tuple(items))

    @classmethod
    def of_object(cls, mapping: Mapping[str, Value]) -> Value:
        return cls(ValueKind.OBJECT, dict(mapping))

    # ── native conversion ───────────────────────────────────────────

    @classmethod
    def from_native(cls, obj: Any) -> Value:
        """Convert a native Python object into a Value.

        Unrecognised types become a string value holding ``str(obj)``.
        """
        if obj is None:
            return cls.null()
        if isinstance(obj, Value):
            return obj
        # bool before int: bool is an int subclass
        if isinstance(obj, bool):
            return cls.of_bool(obj)
        if isinstance(obj, int):
            return cls.of_int(obj)
        if isinstance(obj, float):
            return cls.of_double(obj)
        if isinstance(obj, str):
            return cls.of_string(obj)
        if isinstance(obj, (bytes, bytearray)):
            return cls.of_data(bytes(obj))
        if isinstance(obj, (list, tuple)):
            return cls.of_array([cls.from_native(item) for item in obj])
        if isinstance(obj, Mapping):
            return cls.of_object({str(k): cls.from_native(v) for k, v in obj.items()})
        return cls.of_string(str(obj))

    def to_native(self) -> Any:
        if self.kind is ValueKind.ARRAY:
            return [item.to_native() for item in self.payload]
        if self.kind is ValueKind.OBJECT:
            return {k: v.to_native() for k, v in self.payload.items()}
        return self.payload

    # ── projections ─────────────────────────────────────────────────

    @property
    def type_name(self) -> str:
        """Label used in argument type errors."""
        return self.kind.value

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_string(self) -> str | None:
        return self.payload if self.kind is ValueKind.STRING else None

    def as_int(self) -> int | None:
        return self.payload if self.kind is ValueKind.INT else None

    def as_int64(self) -> int | None:
        """Integer value, also parsed from a base-10 string."""
        if self.kind is ValueKind.INT:
            number = self.payload
        elif self.kind is ValueKind.STRING and _DECIMAL_RE.fullmatch(self.payload):
            number = int(self.payload)
        else:
            return None
        if INT64_MIN <= number <= INT64_MAX:
            return number
        return None

    def as_int32(self) -> int | None:
        if self.kind is ValueKind.INT and INT32_MIN <= self.payload <= INT32_MAX:
            return self.payload
        return None

    def as_double(self) -> float | None:
        if self.kind is ValueKind.DOUBLE:
            return self.payload
        if self.kind is ValueKind.INT:
            return float(self.payload)
        return None

    def as_bool(self) -> bool | None:
        return self.payload if self.kind is ValueKind.BOOL else None

    def as_array(self) -> list[Value] | None:
        return list(self.payload) if self.kind is ValueKind.ARRAY else None

    def as_object(self) -> dict[str, Value] | None:
        return dict(self.payload) if self.kind is ValueKind.OBJECT else None
