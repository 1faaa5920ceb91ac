from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolCall:
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"function": {"name": self.name, "arguments": dict(self.arguments)}}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> ToolCall:
        """Build from the `{"function": {"name": ..., "arguments": {...}}}` wire shape."""
        function = data.get("function", data)
        if not isinstance(function, Mapping):
            raise TypeError("tool call function must be a mapping")
        name = function.get("name")
        if not isinstance(name, str):
            raise TypeError("tool call name must be a string")
        arguments = function.get("arguments") or {}
        if not isinstance(arguments, Mapping):
            raise TypeError("tool call arguments must be a mapping")
        return ToolCall(name=name, arguments=dict(arguments))


@dataclass
class Tool:
    name: str
    description: str
    parameters: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters or {"type": "object", "properties": {}},
            },
        }
