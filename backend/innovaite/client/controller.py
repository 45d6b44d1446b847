"""Client Form Controller: drives one idea generation from form input.

Holds the per-session UI state (``ideas``, ``is_loading``), performs exactly
one POST to the gateway per ``generate()`` call and reports the outcome
through a notifier. Concurrent calls are allowed; each call takes a
sequence number and only the most recent call may write state or notify.
Older responses are discarded when they arrive.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol

import httpx

from ..constants import (
    CLIENT_GENERIC_FAILURE,
    CLIENT_INVALID_FORMAT,
    CLIENT_REQUEST_FAILED,
    DEFAULT_IDEA_COUNT,
)

logger = logging.getLogger(__name__)

_DEFAULT_API_URL = "http://127.0.0.1:8000"


class ViewState(str, Enum):
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Single-line notifications written through logging."""

    def success(self, message: str) -> None:
        logger.info("[CLIENT] %s", message)

    def error(self, message: str) -> None:
        logger.error("[CLIENT] %s", message)


class GenerationFailed(RuntimeError):
    """The gateway call did not yield a usable ideas list."""


class IdeaGeneratorController:
    """State holder and single entry point (`generate`) for the idea form."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        publishable_key: Optional[str] = None,
        notifier: Optional[Notifier] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or os.getenv("INNOVAITE_API_URL", _DEFAULT_API_URL)).rstrip("/")
        if publishable_key is None:
            publishable_key = os.getenv("INNOVAITE_PUBLISHABLE_KEY", "")
        self.publishable_key = publishable_key
        self.notifier: Notifier = notifier or LoggingNotifier()
        self._http_client = http_client

        self.ideas: List[Dict[str, Any]] = []
        self.is_loading = False
        self._sequence = 0

    @property
    def view_state(self) -> ViewState:
        if self.ideas:
            return ViewState.RESULTS
        if self.is_loading:
            return ViewState.LOADING
        return ViewState.EMPTY

    def _is_current(self, ticket: int) -> bool:
        return ticket == self._sequence

    async def generate(self, form_data: Mapping[str, Any]) -> bool:
        """Run one generation. Returns True when this call's ideas were applied."""
        self._sequence += 1
        ticket = self._sequence

        self.is_loading = True
        self.ideas = []

        try:
            ideas = await self._request_ideas(form_data)

            if not self._is_current(ticket):
                logger.info("[CLIENT] Discarding superseded response #%d", ticket)
                return False

            self.ideas = ideas
            self.notifier.success(f"{len(ideas)} amazing ideas generated!")
            return True

        except Exception as exc:
            if not self._is_current(ticket):
                logger.info("[CLIENT] Discarding superseded failure #%d: %s", ticket, exc)
                return False

            logger.error("[CLIENT] Error generating ideas: %s", exc)
            self.notifier.error(str(exc) or CLIENT_GENERIC_FAILURE)
            return False

        finally:
            if self._is_current(ticket):
                self.is_loading = False

    async def _request_ideas(self, form_data: Mapping[str, Any]) -> List[Dict[str, Any]]:
        payload = {**form_data, "multi_idea_count": DEFAULT_IDEA_COUNT}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.publishable_key}",
        }
        url = f"{self.base_url}/generate-idea"

        if self._http_client is not None:
            response = await self._http_client.post(url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.post(url, json=payload, headers=headers)

        if not response.is_success:
            raise GenerationFailed(_error_message(response) or CLIENT_REQUEST_FAILED)

        data = response.json()
        ideas = data.get("ideas") if isinstance(data, dict) else None
        if not isinstance(ideas, list):
            raise GenerationFailed(CLIENT_INVALID_FORMAT)
        return ideas


def _error_message(response: httpx.Response) -> Optional[str]:
    """Server-supplied ``error`` field, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
