"""Centralized OpenAI chat-completions client.

The idea agent MUST use `request_completion()` from this module.
This ensures:
  - Model, URL and timeout are read from env; the token budget is the caller's.
  - Exactly one HTTP attempt per call (no retry, no streaming).
  - Non-2xx answers surface as UpstreamAPIError carrying only the status.
  - Consistent logging.

The reply text is returned untouched; JSON recovery lives in the idea agent.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import UpstreamAPIError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants, all read from environment with safe defaults
# ---------------------------------------------------------------------------
_DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
_DEFAULT_MODEL = "gpt-5-mini-2025-08-07"


def _env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_openai_key() -> str:
    """Read OPENAI_API_KEY from the environment. Raises EnvironmentError if missing."""
    key = os.getenv("OPENAI_API_KEY", "").strip()
    if not key:
        logger.error("[OPENAI] API key missing (OPENAI_API_KEY)")
        raise EnvironmentError("OPENAI_API_KEY environment variable not set")
    return key


def get_openai_model() -> str:
    """Read OPENAI_MODEL from the environment (default: gpt-5-mini-2025-08-07)."""
    return os.getenv("OPENAI_MODEL", _DEFAULT_MODEL).strip() or _DEFAULT_MODEL


def get_openai_url() -> str:
    return os.getenv("OPENAI_API_URL", _DEFAULT_API_URL).strip() or _DEFAULT_API_URL


def _get_timeout() -> Optional[float]:
    # Unset means no client-side timeout; the transport decides.
    return _env_float("OPENAI_REQUEST_TIMEOUT", None)


def build_payload(
    *,
    model: str,
    messages: List[Dict[str, str]],
    max_completion_tokens: int,
) -> Dict[str, Any]:
    """Build a chat completions payload: model, messages, max_completion_tokens."""
    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_completion_tokens": max_completion_tokens,
    }

    logger.debug("[OPENAI] Model: %s", model)
    logger.debug("[OPENAI] Tokens requested: %d", max_completion_tokens)

    return payload


def extract_content(data: Dict[str, Any]) -> str:
    """Pull ``choices[0].message.content`` out of a completion body.

    A null content is treated as empty text.
    """
    return data["choices"][0]["message"]["content"] or ""


async def request_completion(
    *,
    messages: List[Dict[str, str]],
    max_completion_tokens: int,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Call the chat completions endpoint once and return the raw reply text.

    Parameters
    ----------
    messages : list[dict]
        The messages array (system + user).
    max_completion_tokens : int
        Token limit for the response, chosen by the caller.
    api_key : str, optional
        Override API key (default: from env).
    model : str, optional
        Override model name (default: from env).
    transport : httpx.AsyncBaseTransport, optional
        Custom transport, used by tests.

    Raises
    ------
    UpstreamAPIError
        If the endpoint answers with a non-2xx status.
    EnvironmentError
        If no API key is configured.
    """
    if api_key is None:
        api_key = get_openai_key()
    if model is None:
        model = get_openai_model()

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    payload = build_payload(
        model=model,
        messages=messages,
        max_completion_tokens=max_completion_tokens,
    )

    t0 = time.time()
    logger.info("[OPENAI] Calling %s", model)
    async with httpx.AsyncClient(timeout=_get_timeout(), transport=transport) as client:
        response = await client.post(get_openai_url(), headers=headers, json=payload)
    duration = time.time() - t0
    logger.info("[OPENAI] HTTP %d (%.1fs)", response.status_code, duration)

    if not response.is_success:
        logger.error(
            "[OPENAI] API error: %d %s", response.status_code, response.text[:400]
        )
        raise UpstreamAPIError(response.status_code)

    data = response.json()

    usage = data.get("usage")
    if usage:
        logger.info(
            "[OPENAI] Tokens used: prompt=%s, completion=%s, total=%s",
            usage.get("prompt_tokens", "?"),
            usage.get("completion_tokens", "?"),
            usage.get("total_tokens", "?"),
        )

    return extract_content(data)
