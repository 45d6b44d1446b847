# Services package
from .openai_client import build_payload, get_openai_key, get_openai_model, request_completion

__all__ = [
    "request_completion",
    "build_payload",
    "get_openai_key",
    "get_openai_model",
]
