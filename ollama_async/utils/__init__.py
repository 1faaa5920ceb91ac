"""Utility modules for ollama_async."""

from .decoder import RecordDecoder, decode_record
from .http import PendingRequest, ensure_success, read_single_record

__all__ = [
    "PendingRequest",
    "RecordDecoder",
    "decode_record",
    "ensure_success",
    "read_single_record",
]
