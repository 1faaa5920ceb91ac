from ollama_async.models.message import Message
from ollama_async.models.request import (
    ChatRequest,
    EmbeddingsRequest,
    GenerateRequest,
    ShowRequest,
)
from ollama_async.models.response import (
    ChatResponse,
    EmbeddingsResponse,
    GenerateResponse,
    ListResponse,
    ModelDetails,
    ModelInfo,
    ShowResponse,
    Statistics,
)
from ollama_async.models.tool_call import Tool, ToolCall

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "EmbeddingsRequest",
    "EmbeddingsResponse",
    "GenerateRequest",
    "GenerateResponse",
    "ListResponse",
    "Message",
    "ModelDetails",
    "ModelInfo",
    "ShowRequest",
    "ShowResponse",
    "Statistics",
    "Tool",
    "ToolCall",
]
