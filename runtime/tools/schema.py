"""JSON Schema builders shared by every tool definition."""

from __future__ import annotations

from typing import Any


def object_schema(
    properties: dict[str, dict[str, Any]],
    required: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(required or []),
    }


def string_property(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def integer_property(description: str) -> dict[str, Any]:
    return {"type": "integer", "description": description}


def boolean_property(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def object_property(description: str) -> dict[str, Any]:
    return {"type": "object", "description": description}


def array_property(description: str, item_type: str = "object") -> dict[str, Any]:
    return {
        "type": "array",
        "description": description,
        "items": {"type": item_type},
    }
