"""Tool SDK contracts.

Every Telegram tool is a ``ToolDefinition``: an immutable descriptor carrying
the JSON Schema the agent sees, paired with an async handler that validates
the arguments and forwards them to the messaging client.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import jsonschema
from pydantic import BaseModel, ConfigDict, field_validator

from contracts.value import Value

ToolHandler = Callable[[Mapping[str, Value]], Awaitable[str]]


# ── Data models ──────────────────────────────────────────────────────


class ToolDescriptor(BaseModel):
    """Name, description and input contract of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any]   # JSON Schema

    @field_validator("name", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("input_schema")
    @classmethod
    def _object_schema(cls, schema: dict[str, Any]) -> dict[str, Any]:
        if schema.get("type") != "object":
            raise ValueError("input_schema must be an object schema")
        if not isinstance(schema.get("properties"), dict):
            raise ValueError("input_schema.properties must be a mapping")
        if not isinstance(schema.get("required"), list):
            raise ValueError("input_schema.required must be a list")
        missing = [k for k in schema["required"] if k not in schema["properties"]]
        if missing:
            raise ValueError(f"required keys without a property: {missing}")
        jsonschema.Draft202012Validator.check_schema(schema)
        return schema


@dataclass(frozen=True)
class ToolDefinition:
    """A descriptor plus the handler that runs it."""

    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name
