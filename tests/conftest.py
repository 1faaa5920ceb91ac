import json
from collections.abc import Iterable
from typing import Any, Optional
from unittest.mock import AsyncMock

import aiosonic  # type: ignore[import-untyped]
import pytest


class FakeChunks:
    """Async generator factory standing in for `HttpResponse.read_chunks`."""

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None):
        self.chunks = list(chunks)
        self.error = error
        self.started = False
        self.closed = False
        self.yielded = 0

    async def __call__(self):
        self.started = True
        try:
            for chunk in self.chunks:
                self.yielded += 1
                yield chunk
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


def ndjson(*records: dict[str, Any]) -> bytes:
    return b"".join(json.dumps(record).encode() + b"\n" for record in records)


def chat_record(content: str, done: bool = False, **extra: Any) -> dict[str, Any]:
    return {
        "model": "llama3.2",
        "created_at": "2024-07-01T12:00:00Z",
        "message": {"role": "assistant", "content": content},
        "done": done,
        **extra,
    }


def make_response(
    chunks: Iterable[bytes] = (),
    status_code: int = 200,
    content: bytes = b"",
    error: Optional[Exception] = None,
) -> AsyncMock:
    chunks = list(chunks)
    response = AsyncMock(spec=aiosonic.HttpResponse)
    response.status_code = status_code
    response.chunked = bool(chunks)
    response.read_chunks = FakeChunks(chunks, error)
    response.content.return_value = content
    return response


@pytest.fixture
def mock_aiosonic_client() -> AsyncMock:
    """Mock HTTP client answering every POST with an empty streamed body"""
    client = AsyncMock(spec=aiosonic.HTTPClient)
    client.post.return_value = make_response()
    client.get.return_value = make_response()
    return client


@pytest.fixture
def chat_chunks() -> list[bytes]:
    """Three chat records split at awkward chunk boundaries"""
    body = ndjson(
        chat_record("The sky"),
        chat_record(" is blue"),
        chat_record("", done=True, done_reason="stop", eval_count=12),
    )
    return [body[:10], body[10:75], body[75:]]


@pytest.fixture(name="make_response")
def make_response_fixture():
    return make_response


@pytest.fixture(name="ndjson")
def ndjson_fixture():
    return ndjson


@pytest.fixture(name="chat_record")
def chat_record_fixture():
    return chat_record
