import json
import logging
from collections.abc import AsyncIterator
from typing import Any, Generic, Optional, TypeVar, Union

from ..exceptions import (
    TRANSPORT_EXCEPTIONS,
    BufferTooSmall,
    MalformedResponse,
    TransportFailed,
    TruncatedStream,
)

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
DELIMITER = b"\n"


def decode_record(line: bytes, record_type: Any) -> Any:
    """Parse one delimited line as JSON and build `record_type` from it."""
    try:
        data = json.loads(line)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedResponse(f"Invalid JSON record: {exc}") from exc
    try:
        return record_type.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(
            f"Record does not match {record_type.__name__}: {exc}"
        ) from exc


class RecordDecoder(Generic[RecordT]):
    """Split a chunked body into newline-delimited JSON records.

    Chunk boundaries carry no meaning: a record may span several chunks and a
    chunk may hold several records. At most `max_size` bytes of a pending
    record are buffered.
    """

    def __init__(
        self,
        chunks: AsyncIterator[Union[bytes, str]],
        record_type: type[RecordT],
        max_size: int,
        eof_is_delimiter: bool = False,
    ):
        self._chunks = chunks
        self._record_type = record_type
        self._max_size = max_size
        self._eof_is_delimiter = eof_is_delimiter
        self._buffer: Optional[bytearray] = bytearray()
        self._exhausted = False

    @property
    def buffered(self) -> int:
        return len(self._buffer) if self._buffer is not None else 0

    async def decode(self) -> RecordT:
        line = await self.read_line()
        while not line.strip():
            line = await self.read_line()
        return decode_record(line, self._record_type)  # type: ignore[no-any-return]

    async def read_line(self) -> bytes:
        if self._buffer is None:
            raise RuntimeError("decoder is closed")
        buffer = self._buffer
        scanned = 0
        while True:
            index = buffer.find(DELIMITER, scanned)
            if index != -1:
                if index > self._max_size:
                    raise BufferTooSmall(index, self._max_size)
                line = bytes(buffer[:index])
                del buffer[: index + 1]
                return line
            if len(buffer) > self._max_size:
                raise BufferTooSmall(len(buffer), self._max_size)
            scanned = len(buffer)
            chunk = await self._next_chunk()
            if chunk is None:
                if self._eof_is_delimiter and buffer:
                    line = bytes(buffer)
                    buffer.clear()
                    return line
                raise TruncatedStream(
                    f"Body ended with {len(buffer)} bytes and no record delimiter"
                )
            buffer.extend(chunk)

    async def _next_chunk(self) -> Optional[bytes]:
        while not self._exhausted:
            try:
                chunk = await self._chunks.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
                LOGGER.debug("response body exhausted")
                break
            except TRANSPORT_EXCEPTIONS as exc:
                raise TransportFailed(f"Reading response body failed: {exc}") from exc
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            if chunk:
                return chunk
        return None

    def close(self) -> None:
        self._buffer = None
