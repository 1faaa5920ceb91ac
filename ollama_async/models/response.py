"""Typed records decoded from response bodies.

Every `from_dict` ignores fields the record does not declare and raises
`TypeError`/`ValueError` when a declared field is missing or has the wrong type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ollama_async.models.message import Message, message_from_dict


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError("record must be a JSON object")
    return data


def _required(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in data:
        raise ValueError(f"missing required field {key!r}")
    return _typed(data, key, kind)


def _optional(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if data.get(key) is None:
        return None
    return _typed(data, key, kind)


def _typed(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if kind is not bool and isinstance(value, bool):
        raise TypeError(f"field {key!r} has wrong type")
    if not isinstance(value, kind):
        raise TypeError(f"field {key!r} has wrong type")
    return value


@dataclass
class Statistics:
    """Timing and token counts the server attaches to the final record (nanoseconds)."""

    total_duration: Optional[int] = None
    load_duration: Optional[int] = None
    prompt_eval_count: Optional[int] = None
    prompt_eval_duration: Optional[int] = None
    eval_count: Optional[int] = None
    eval_duration: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Statistics:
        return cls(
            total_duration=_optional(data, "total_duration", int),
            load_duration=_optional(data, "load_duration", int),
            prompt_eval_count=_optional(data, "prompt_eval_count", int),
            prompt_eval_duration=_optional(data, "prompt_eval_duration", int),
            eval_count=_optional(data, "eval_count", int),
            eval_duration=_optional(data, "eval_duration", int),
        )


@dataclass
class ChatResponse:
    model: str
    done: bool
    message: Message
    created_at: Optional[str] = None
    done_reason: Optional[str] = None
    statistics: Statistics = field(default_factory=Statistics)

    @property
    def text(self) -> str:
        return self.message.content

    @classmethod
    def from_dict(cls, data: Any) -> ChatResponse:
        data = _object(data)
        return cls(
            model=_required(data, "model", str),
            done=_required(data, "done", bool),
            message=message_from_dict(data.get("message") or {}),
            created_at=_optional(data, "created_at", str),
            done_reason=_optional(data, "done_reason", str),
            statistics=Statistics.from_dict(data),
        )


@dataclass
class GenerateResponse:
    model: str
    done: bool
    response: str = ""
    created_at: Optional[str] = None
    done_reason: Optional[str] = None
    context: Optional[list[int]] = None
    statistics: Statistics = field(default_factory=Statistics)

    @property
    def text(self) -> str:
        return self.response

    @classmethod
    def from_dict(cls, data: Any) -> GenerateResponse:
        data = _object(data)
        return cls(
            model=_required(data, "model", str),
            done=_required(data, "done", bool),
            response=_optional(data, "response", str) or "",
            created_at=_optional(data, "created_at", str),
            done_reason=_optional(data, "done_reason", str),
            context=_optional(data, "context", list),
            statistics=Statistics.from_dict(data),
        )


@dataclass
class ModelDetails:
    parent_model: Optional[str] = None
    format: Optional[str] = None
    family: Optional[str] = None
    families: Optional[list[str]] = None
    parameter_size: Optional[str] = None
    quantization_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> ModelDetails:
        data = _object(data)
        return cls(
            parent_model=_optional(data, "parent_model", str),
            format=_optional(data, "format", str),
            family=_optional(data, "family", str),
            families=_optional(data, "families", list),
            parameter_size=_optional(data, "parameter_size", str),
            quantization_level=_optional(data, "quantization_level", str),
        )


@dataclass
class ModelInfo:
    name: str
    model: Optional[str] = None
    modified_at: Optional[str] = None
    size: Optional[int] = None
    digest: Optional[str] = None
    details: ModelDetails = field(default_factory=ModelDetails)

    @classmethod
    def from_dict(cls, data: Any) -> ModelInfo:
        data = _object(data)
        return cls(
            name=_required(data, "name", str),
            model=_optional(data, "model", str),
            modified_at=_optional(data, "modified_at", str),
            size=_optional(data, "size", int),
            digest=_optional(data, "digest", str),
            details=ModelDetails.from_dict(data.get("details") or {}),
        )


@dataclass
class ListResponse:
    models: list[ModelInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> ListResponse:
        data = _object(data)
        entries = _optional(data, "models", list) or []
        return cls(models=[ModelInfo.from_dict(entry) for entry in entries])


@dataclass
class ShowResponse:
    modelfile: Optional[str] = None
    parameters: Optional[str] = None
    template: Optional[str] = None
    system: Optional[str] = None
    license: Optional[str] = None
    modified_at: Optional[str] = None
    details: ModelDetails = field(default_factory=ModelDetails)
    model_info: Optional[dict[str, Any]] = None
    capabilities: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> ShowResponse:
        data = _object(data)
        return cls(
            modelfile=_optional(data, "modelfile", str),
            parameters=_optional(data, "parameters", str),
            template=_optional(data, "template", str),
            system=_optional(data, "system", str),
            license=_optional(data, "license", str),
            modified_at=_optional(data, "modified_at", str),
            details=ModelDetails.from_dict(data.get("details") or {}),
            model_info=_optional(data, "model_info", dict),
            capabilities=_optional(data, "capabilities", list),
        )


@dataclass
class EmbeddingsResponse:
    embedding: list[float]

    @classmethod
    def from_dict(cls, data: Any) -> EmbeddingsResponse:
        data = _object(data)
        embedding = _required(data, "embedding", list)
        for value in embedding:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError("embedding entries must be numbers")
        return cls(embedding=[float(value) for value in embedding])
