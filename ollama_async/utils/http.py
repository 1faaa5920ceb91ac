from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, Literal, Optional, TypeVar

import aiosonic  # type: ignore[import-untyped]

from ..exceptions import TRANSPORT_EXCEPTIONS, RequestFailed, TransportFailed
from .decoder import RecordDecoder

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
JSON_HEADERS = {"Content-Type": "application/json"}


class PendingRequest:
    """A request that has been built but whose response has not been awaited.

    `send()` performs the HTTP exchange at most once; `close()` gives the
    connection back by closing the body iterator and the response.
    """

    def __init__(
        self,
        client: aiosonic.HTTPClient,
        method: Literal["GET", "POST"],
        url: str,
        json_data: Optional[dict[str, Any]] = None,
    ):
        self.client = client
        self.method = method
        self.url = url
        self.json_data = json_data
        self.response: Optional[aiosonic.HttpResponse] = None
        self.closed = False
        self._chunks: Optional[AsyncIterator[bytes]] = None

    @property
    def sent(self) -> bool:
        return self.response is not None

    async def send(self) -> aiosonic.HttpResponse:
        if self.closed:
            raise RuntimeError("request is closed")
        if self.response is not None:
            return self.response
        LOGGER.debug("%s %s", self.method, self.url)
        try:
            if self.method == "GET":
                response = await self.client.get(self.url)
            elif self.method == "POST":
                response = await self.client.post(
                    self.url, json=self.json_data or {}, headers=JSON_HEADERS
                )
            else:
                raise ValueError(f"Unsupported HTTP method: {self.method}")
        except TRANSPORT_EXCEPTIONS as exc:
            raise TransportFailed(f"{self.method} {self.url} failed: {exc}") from exc
        self.response = response
        return response

    def chunks(self) -> AsyncIterator[bytes]:
        if self.response is None:
            raise RuntimeError("response head has not been received")
        if self._chunks is None:
            self._chunks = self.response.read_chunks()
        return self._chunks

    async def content(self) -> bytes:
        if self.response is None:
            raise RuntimeError("response head has not been received")
        try:
            body = await self.response.content()
        except TRANSPORT_EXCEPTIONS as exc:
            raise TransportFailed(f"Reading response body failed: {exc}") from exc
        return body if isinstance(body, bytes) else str(body).encode("utf-8")

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        chunks, self._chunks = self._chunks, None
        response, self.response = self.response, None
        aclose = getattr(chunks, "aclose", None)
        try:
            if aclose is not None:
                await aclose()
        finally:
            if response is not None:
                await response.aclose()
        LOGGER.debug("closed %s %s", self.method, self.url)


def ensure_success(response: aiosonic.HttpResponse) -> None:
    status = int(response.status_code)
    if not 200 <= status < 300:
        raise RequestFailed(status)


async def _single_chunk(pending: PendingRequest) -> AsyncIterator[bytes]:
    yield await pending.content()


async def read_single_record(
    pending: PendingRequest,
    record_type: type[RecordT],
    max_size: int,
) -> RecordT:
    """Send `pending`, decode exactly one record and release the request.

    The end of the body counts as a delimiter: one-shot responses are a single
    JSON document that need not end with a newline. Chunked bodies are read
    incrementally so `max_size` bounds what is buffered; bodies with a
    Content-Length are read whole.
    """
    try:
        response = await pending.send()
        ensure_success(response)
        if getattr(response, "chunked", False):
            chunks = pending.chunks()
        else:
            chunks = _single_chunk(pending)
        decoder = RecordDecoder(chunks, record_type, max_size, eof_is_delimiter=True)
        try:
            return await decoder.decode()
        finally:
            decoder.close()
    finally:
        await pending.close()
