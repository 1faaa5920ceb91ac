from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

from ollama_async.models.tool_call import ToolCall

Role = Literal["system", "user", "assistant", "tool"]
_ALLOWED_ROLES: tuple[Role, ...] = ("system", "user", "assistant", "tool")


@dataclass
class Message:
    role: Role
    content: str = ""
    images: Optional[list[str]] = None
    tool_calls: Optional[list[ToolCall]] = None


def normalize_messages(messages: Sequence[Union["Message", Mapping[str, Any]]]) -> list["Message"]:
    normalized: list[Message] = []
    for message in messages:
        if isinstance(message, Message):
            normalized.append(message)
            continue
        if not isinstance(message, Mapping):
            raise TypeError("Message entries must be Message or mapping")
        role = message.get("role")
        if role not in _ALLOWED_ROLES:
            raise ValueError("Invalid role provided in message")
        content = message.get("content")
        if content is None:
            content = ""
        elif not isinstance(content, str):
            raise TypeError("Content must be str")
        images = message.get("images")
        if images is not None:
            images = list(images)
        normalized.append(
            Message(
                role=role,
                content=content,
                images=images,
                tool_calls=_coerce_tool_calls(message.get("tool_calls")),
            )
        )
    return normalized


def validate_messages(messages: Sequence["Message"]) -> None:
    for message in messages:
        if message.role not in _ALLOWED_ROLES:
            raise ValueError("Invalid role on Message instance")
        if not isinstance(message.content, str):
            raise TypeError("Message content must be str")
        if message.images is not None:
            if not all(isinstance(image, str) for image in message.images):
                raise TypeError("images entries must be base64 strings")
        if message.tool_calls is not None and not isinstance(message.tool_calls, list):
            raise TypeError("tool_calls must be a list when provided")
        if message.tool_calls:
            if not all(isinstance(tc, ToolCall) for tc in message.tool_calls):
                raise TypeError("tool_calls entries must be ToolCall instances")


def _coerce_tool_calls(value: Any) -> Optional[list[ToolCall]]:
    if value is None:
        return None
    if isinstance(value, ToolCall):
        return [value]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        calls: list[ToolCall] = []
        for entry in value:
            if isinstance(entry, ToolCall):
                calls.append(entry)
                continue
            if not isinstance(entry, Mapping):
                raise TypeError("tool_calls entries must be mappings or ToolCall")
            calls.append(ToolCall.from_dict(entry))
        return calls or None
    raise TypeError("tool_calls must be a sequence, ToolCall, or None")


def message_to_dict(message: Message) -> dict[str, Any]:
    payload: dict[str, Any] = {"role": message.role, "content": message.content}
    if message.images:
        payload["images"] = list(message.images)
    if message.tool_calls:
        payload["tool_calls"] = [tc.to_dict() for tc in message.tool_calls]
    return payload


def message_from_dict(data: Any) -> Message:
    """Read a message from a response record, ignoring fields we do not model.

    Unlike `normalize_messages` this does not reject unknown roles: the server
    decides what it sends back.
    """
    if not isinstance(data, Mapping):
        raise TypeError("message must be a JSON object")
    role = data.get("role", "assistant")
    content = data.get("content") or ""
    if not isinstance(role, str) or not isinstance(content, str):
        raise TypeError("message role and content must be strings")
    images = data.get("images")
    return Message(
        role=role,  # type: ignore[arg-type]
        content=content,
        images=list(images) if images else None,
        tool_calls=_coerce_tool_calls(data.get("tool_calls")),
    )
