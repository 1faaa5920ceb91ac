from __future__ import annotations

import pytest

from ollama_async.models.message import (
    Message,
    message_from_dict,
    message_to_dict,
    normalize_messages,
    validate_messages,
)
from ollama_async.models.tool_call import ToolCall


def test_normalize_converts_plain_dict_message() -> None:
    messages = [{"role": "user", "content": "hello", "images": ["aGVsbG8="]}]

    normalized = normalize_messages(messages)

    assert len(normalized) == 1
    msg = normalized[0]
    assert msg.role == "user"
    assert msg.content == "hello"
    assert msg.images == ["aGVsbG8="]


def test_message_to_dict_includes_tool_calls() -> None:
    tool_call = ToolCall(name="lookup", arguments={"city": "Paris"})
    message = Message(role="assistant", content="working", tool_calls=[tool_call])

    payload = message_to_dict(message)

    assert payload == {
        "role": "assistant",
        "content": "working",
        "tool_calls": [{"function": {"name": "lookup", "arguments": {"city": "Paris"}}}],
    }


def test_normalize_allows_none_content() -> None:
    normalized = normalize_messages(
        [
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [{"function": {"name": "noop", "arguments": {}}}],
            }
        ]
    )

    assert normalized[0].content == ""
    assert normalized[0].tool_calls and normalized[0].tool_calls[0].name == "noop"


def test_normalize_rejects_invalid_role() -> None:
    with pytest.raises(ValueError):
        normalize_messages([{"role": "model", "content": "hi"}])


def test_normalize_rejects_non_string_content() -> None:
    with pytest.raises(TypeError):
        normalize_messages([{"role": "user", "content": [{"text": "hi"}]}])


def test_validate_rejects_foreign_tool_calls() -> None:
    message = Message(role="assistant", tool_calls=[{"function": {"name": "x"}}])  # type: ignore[list-item]
    with pytest.raises(TypeError):
        validate_messages([message])


def test_message_from_dict_tolerates_extra_fields() -> None:
    message = message_from_dict(
        {
            "role": "assistant",
            "content": "",
            "thinking": "hmm",
            "tool_calls": [{"function": {"name": "get_weather", "arguments": {"city": "Oslo"}}}],
        }
    )

    assert message.tool_calls == [ToolCall(name="get_weather", arguments={"city": "Oslo"})]


def test_message_from_dict_requires_object() -> None:
    with pytest.raises(TypeError):
        message_from_dict("assistant")
