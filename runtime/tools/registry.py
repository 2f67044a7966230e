"""Tool registry — register, look up, and dispatch Telegram tools."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from mcp.types import TextContent

from contracts.errors import ToolNotFoundError
from contracts.tool_sdk import ToolDefinition, ToolDescriptor
from contracts.value import Value


class ToolRegistry:
    """Thread-safe in-memory registry of tool definitions.

    The lock guards only the name map; handlers always run outside it.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._lock = threading.Lock()

    def register(self, definition: ToolDefinition) -> None:
        """Register a tool.  Overwrites if the name already exists."""
        with self._lock:
            self._tools[definition.name] = definition

    def register_all(self, definitions: Iterable[ToolDefinition]) -> None:
        definitions = list(definitions)
        with self._lock:
            for definition in definitions:
                self._tools[definition.name] = definition

    def get(self, name: str) -> ToolDefinition:
        """Return a registered tool by name, or raise ``ToolNotFoundError``."""
        with self._lock:
            definition = self._tools.get(name)
        if definition is None:
            raise ToolNotFoundError(name)
        return definition

    def descriptors(self) -> list[ToolDescriptor]:
        """Snapshot of registered descriptors in registration order."""
        with self._lock:
            return [d.descriptor for d in self._tools.values()]

    def list_tools(self) -> list[str]:
        """Return sorted list of registered tool names."""
        with self._lock:
            return sorted(self._tools)

    def get_openai_definitions(self) -> list[dict]:
        """Export all tools in OpenAI function-calling format."""
        defs: list[dict] = []
        for descriptor in sorted(self.descriptors(), key=lambda d: d.name):
            defs.append(
                {
                    "type": "function",
                    "function": {
                        "name": descriptor.name,
                        "description": descriptor.description,
                        "parameters": descriptor.input_schema,
                    },
                }
            )
        return defs

    async def execute(self, name: str, arguments: Mapping[str, Any]) -> list[TextContent]:
        """Run the named tool once and wrap its JSON result as text content."""
        definition = self.get(name)
        values = {key: Value.from_native(value) for key, value in arguments.items()}
        result = await definition.handler(values)
        return [TextContent(type="text", text=result)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools
