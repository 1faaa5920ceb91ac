from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import Any, Union

from ollama_async.models.message import (
    Message,
    message_to_dict,
    normalize_messages,
    validate_messages,
)
from ollama_async.models.tool_call import Tool

Format = Union[str, dict[str, Any], None]
KeepAlive = Union[str, int, float, None]


def _drop_unset(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class ChatRequest:
    model: str
    messages: Sequence[Message | Mapping[str, Any]] = field(default_factory=list)
    tools: list[Tool] | None = None
    format: Format = None
    options: dict[str, Any] | None = None
    stream: bool = True
    keep_alive: KeepAlive = None

    def __post_init__(self) -> None:
        self.messages = normalize_messages(self.messages)
        validate_messages(self.messages)

    def to_dict(self) -> dict[str, Any]:
        return _drop_unset(
            {
                "model": self.model,
                "messages": [message_to_dict(message) for message in self.messages],  # type: ignore[arg-type]
                "tools": [tool.to_dict() for tool in self.tools] if self.tools else None,
                "format": self.format,
                "options": self.options,
                "stream": self.stream,
                "keep_alive": self.keep_alive,
            }
        )


@dataclass
class GenerateRequest:
    model: str
    prompt: str = ""
    suffix: str | None = None
    images: list[str] | None = None
    format: Format = None
    options: dict[str, Any] | None = None
    system: str | None = None
    template: str | None = None
    context: list[int] | None = None
    stream: bool = True
    raw: bool | None = None
    keep_alive: KeepAlive = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_unset({f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class ShowRequest:
    model: str
    verbose: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_unset({"model": self.model, "verbose": self.verbose})


@dataclass
class EmbeddingsRequest:
    model: str
    prompt: str
    options: dict[str, Any] | None = None
    keep_alive: KeepAlive = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_unset({f.name: getattr(self, f.name) for f in fields(self)})
