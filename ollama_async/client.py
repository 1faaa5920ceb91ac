import logging
import weakref
from types import TracebackType
from typing import Any, Literal, Optional, TypeVar

import aiosonic  # type: ignore[import-untyped]

from .config import Config
from .exceptions import StreamingNotAllowed, StreamingRequired
from .models import (
    ChatRequest,
    ChatResponse,
    EmbeddingsRequest,
    EmbeddingsResponse,
    GenerateRequest,
    GenerateResponse,
    ListResponse,
    ShowRequest,
    ShowResponse,
)
from .stream import Streamable
from .utils.http import PendingRequest, read_single_record

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

CHAT_PATH = "/api/chat"
GENERATE_PATH = "/api/generate"
TAGS_PATH = "/api/tags"
SHOW_PATH = "/api/show"
EMBEDDINGS_PATH = "/api/embeddings"


class OllamaClient:
    """Client for the Ollama HTTP API.

    Not safe for concurrent use: issue one request at a time per client, and
    release every stream before closing the client (`close()` does it for you).
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.client = aiosonic.HTTPClient()
        self._streams: "weakref.WeakSet[Streamable[Any]]" = weakref.WeakSet()

    def _request(
        self,
        method: Literal["GET", "POST"],
        path: str,
        json_data: Optional[dict[str, Any]] = None,
    ) -> PendingRequest:
        return PendingRequest(self.client, method, f"{self.config.host}{path}", json_data)

    async def _one_shot(self, pending: PendingRequest, record_type: type[RecordT]) -> RecordT:
        return await read_single_record(pending, record_type, self.config.response_max_size)

    def _stream(
        self, pending: PendingRequest, record_type: type[RecordT]
    ) -> Streamable[RecordT]:
        stream = Streamable(pending, record_type, self.config.response_max_size)
        self._streams.add(stream)
        return stream

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Generate the next message in a chat as a single response.

        Requires `request.stream` to be False.
        """
        if request.stream:
            raise StreamingNotAllowed()
        return await self._one_shot(self._request("POST", CHAT_PATH, request.to_dict()), ChatResponse)

    def chat_stream(self, request: ChatRequest) -> Streamable[ChatResponse]:
        """Generate the next message in a chat, streamed one fragment per record.

        No I/O happens until the returned stream is first advanced.
        """
        if not request.stream:
            raise StreamingRequired()
        return self._stream(self._request("POST", CHAT_PATH, request.to_dict()), ChatResponse)

    async def generate(self, request: GenerateRequest) -> GenerateResponse:
        """Generate a completion for a prompt as a single response.

        Requires `request.stream` to be False.
        """
        if request.stream:
            raise StreamingNotAllowed()
        return await self._one_shot(
            self._request("POST", GENERATE_PATH, request.to_dict()), GenerateResponse
        )

    def generate_stream(self, request: GenerateRequest) -> Streamable[GenerateResponse]:
        if not request.stream:
            raise StreamingRequired()
        return self._stream(
            self._request("POST", GENERATE_PATH, request.to_dict()), GenerateResponse
        )

    async def list(self) -> ListResponse:
        """List models that are available locally."""
        return await self._one_shot(self._request("GET", TAGS_PATH), ListResponse)

    async def show(self, request: ShowRequest) -> ShowResponse:
        """Show details, modelfile, template, parameters, license and system prompt of a model."""
        return await self._one_shot(self._request("POST", SHOW_PATH, request.to_dict()), ShowResponse)

    async def embeddings(self, request: EmbeddingsRequest) -> EmbeddingsResponse:
        return await self._one_shot(
            self._request("POST", EMBEDDINGS_PATH, request.to_dict()), EmbeddingsResponse
        )

    async def close(self) -> None:
        for stream in list(self._streams):
            await stream.release()
        self._streams.clear()
        LOGGER.debug("shutting down HTTP client for %s", self.config.host)
        await self.client.aclose()

    async def __aenter__(self) -> "OllamaClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()
