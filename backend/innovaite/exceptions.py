"""Gateway error taxonomy.

Each error carries the HTTP status it maps to and the single-line message
returned to the caller as ``{"error": message}``.
"""

from __future__ import annotations

from .constants import (
    MISSING_FIELDS_MESSAGE,
    NO_JSON_MESSAGE,
    PARSE_FAILED_MESSAGE,
    PROVIDER_NAME,
)


class GatewayError(Exception):
    """Base class for errors the gateway reports with a fixed status code."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingFieldsError(GatewayError):
    """A required request field is absent or falsy. Caller-correctable."""

    status_code = 400

    def __init__(self, missing: list[str] | None = None):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.missing = missing or []


class UpstreamAPIError(GatewayError):
    """The completion endpoint answered with a non-2xx status."""

    def __init__(self, provider_status: int):
        super().__init__(f"{PROVIDER_NAME} API error: {provider_status}")
        self.provider_status = provider_status


class MalformedOutputError(GatewayError):
    """The model reply could not be recovered as JSON."""

    @classmethod
    def no_json(cls) -> "MalformedOutputError":
        return cls(NO_JSON_MESSAGE)

    @classmethod
    def parse_failed(cls) -> "MalformedOutputError":
        return cls(PARSE_FAILED_MESSAGE)
