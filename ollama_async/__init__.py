from .client import OllamaClient
from .config import Config
from .exceptions import (
    BufferTooSmall,
    MalformedResponse,
    OllamaError,
    RequestFailed,
    StreamingNotAllowed,
    StreamingRequired,
    TransportFailed,
    TruncatedStream,
)
from .models import ChatRequest, EmbeddingsRequest, GenerateRequest, Message, ShowRequest
from .stream import Streamable, StreamState

__all__ = [
    "BufferTooSmall",
    "ChatRequest",
    "Config",
    "EmbeddingsRequest",
    "GenerateRequest",
    "MalformedResponse",
    "Message",
    "OllamaClient",
    "OllamaError",
    "RequestFailed",
    "ShowRequest",
    "StreamState",
    "Streamable",
    "StreamingNotAllowed",
    "StreamingRequired",
    "TransportFailed",
    "TruncatedStream",
]
