import os
from dataclasses import dataclass

DEFAULT_HOST = "http://127.0.0.1:11434"
DEFAULT_RESPONSE_MAX_SIZE = 1024 * 1024


@dataclass(frozen=True)
class Config:
    """Connection settings held by a client for its whole lifetime.

    - `host`: base URL the API paths are appended to, unvalidated
    - `response_max_size`: largest single record, in bytes, the client will buffer
    """

    host: str = DEFAULT_HOST
    response_max_size: int = DEFAULT_RESPONSE_MAX_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.response_max_size, int) or self.response_max_size <= 0:
            raise ValueError("response_max_size must be a positive integer")

    @classmethod
    def from_env(cls, prefix: str = "OLLAMA_") -> "Config":
        host = os.environ.get(f"{prefix}HOST") or DEFAULT_HOST
        max_size = os.environ.get(f"{prefix}RESPONSE_MAX_SIZE")
        return cls(
            host=host,
            response_max_size=int(max_size) if max_size else DEFAULT_RESPONSE_MAX_SIZE,
        )
