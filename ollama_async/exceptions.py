"""Errors raised by the client.

Nothing here is retried or logged by the library; every failure reaches the caller.
"""

from __future__ import annotations

import asyncio

from aiosonic.exceptions import (  # type: ignore[import-untyped]
    BaseTimeout,
    ConnectionDisconnected,
    ConnectionPoolAcquireTimeout,
    ConnectTimeout,
    HttpParsingError,
    ReadTimeout,
    RequestTimeout,
)

TRANSPORT_EXCEPTIONS: tuple[type[Exception], ...] = (
    asyncio.TimeoutError,
    OSError,
    BaseTimeout,
    ConnectTimeout,
    ReadTimeout,
    RequestTimeout,
    ConnectionPoolAcquireTimeout,
    ConnectionDisconnected,
    HttpParsingError,
)


class OllamaError(Exception):
    default_detail: str = "Ollama client error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class UsageError(OllamaError):
    default_detail = "Invalid use of the client"


class StreamingNotAllowed(UsageError):
    default_detail = "Request asks for streaming; use the *_stream method instead"


class StreamingRequired(UsageError):
    default_detail = "Request has stream disabled; use the one-shot method instead"


class TransportFailed(OllamaError):
    default_detail = "HTTP transport failed"


class RequestFailed(OllamaError):
    default_detail = "HTTP request failed"

    def __init__(self, status: int, detail: str | None = None) -> None:
        super().__init__(detail or f"HTTP {status}")
        self.status = status


class DecodeError(OllamaError):
    default_detail = "Could not decode response record"


class MalformedResponse(DecodeError):
    default_detail = "Response record is not valid JSON for the expected shape"


class TruncatedStream(DecodeError):
    default_detail = "Response body ended before a record delimiter"


class BufferTooSmall(DecodeError):
    default_detail = "Response record exceeds the configured maximum size"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Record of at least {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit
