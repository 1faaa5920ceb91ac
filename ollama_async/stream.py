from __future__ import annotations

import enum
import logging
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Any, Generic, Optional, TypeVar

from .utils.decoder import RecordDecoder
from .utils.http import PendingRequest, ensure_success

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class StreamState(enum.Enum):
    FRESH = "fresh"
    ACTIVE = "active"
    DONE = "done"
    RELEASED = "released"


class Streamable(Generic[RecordT]):
    """Pull-based iterator over the records of a streamed response.

    Nothing is sent or read until the first `next()`. The record returned by
    `next()` is only held by the iterator until the following `next()` or
    `release()`; keep your own reference if you need it longer.

    After a record with `done` set, the next call releases the connection and
    returns None. Errors leave the iterator as it was: call `release()` (or use
    `async with`) to free the connection.
    """

    def __init__(
        self,
        pending: PendingRequest,
        record_type: type[RecordT],
        max_size: int,
    ):
        self._pending: Optional[PendingRequest] = pending
        self._record_type = record_type
        self._max_size = max_size
        self._decoder: Optional[RecordDecoder[RecordT]] = None
        self._current: Optional[RecordT] = None
        self._done = False
        self._released = False
        self._running = False

    @property
    def state(self) -> StreamState:
        if self._released:
            return StreamState.RELEASED
        if self._done:
            return StreamState.DONE
        if self._decoder is not None:
            return StreamState.ACTIVE
        return StreamState.FRESH

    @property
    def current(self) -> Optional[RecordT]:
        return self._current

    async def next(self) -> Optional[RecordT]:
        if self._running:
            raise RuntimeError("next() is already running on this stream")
        self._running = True
        try:
            return await self._step()
        finally:
            self._running = False

    async def _step(self) -> Optional[RecordT]:
        if self._released:
            return None
        if self._done:
            await self._free()
            return None
        decoder = self._decoder
        if decoder is None:
            decoder = await self._receive_head()
        self._current = None
        record = await decoder.decode()
        self._current = record
        self._done = bool(getattr(record, "done", False))
        if self._done:
            LOGGER.debug("stream reported completion")
        return record

    async def _receive_head(self) -> RecordDecoder[RecordT]:
        pending = self._pending
        if pending is None:
            raise RuntimeError("stream has no pending request")
        response = await pending.send()
        ensure_success(response)
        self._decoder = RecordDecoder(pending.chunks(), self._record_type, self._max_size)
        return self._decoder

    async def release(self) -> None:
        """Free the connection and buffers. Safe to call any number of times."""
        if self._released:
            return
        self._done = True
        await self._free()

    async def _free(self) -> None:
        self._released = True
        self._current = None
        decoder, self._decoder = self._decoder, None
        if decoder is not None:
            decoder.close()
        pending, self._pending = self._pending, None
        if pending is not None:
            await pending.close()
        LOGGER.debug("stream released")

    def __aiter__(self) -> Streamable[RecordT]:
        return self

    async def __anext__(self) -> RecordT:
        record = await self.next()
        if record is None:
            raise StopAsyncIteration
        return record

    async def __aenter__(self) -> Streamable[RecordT]:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.release()

    async def stream_content(self) -> AsyncIterator[str]:
        """Convenience method to iterate over the text fragments of the stream"""
        async for record in self:
            text: Any = getattr(record, "text", None)
            if text:
                yield text
