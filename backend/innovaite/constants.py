"""Centralized constants shared by the gateway, the client controller and the CLI.

This module is the SINGLE SOURCE OF TRUTH for form enumerations, the
required-field list, placeholder text and every user-facing message.
Reused by:
  - Idea Generation Gateway (routes/ideas.py)
  - Idea agent (agents/idea_agent)
  - Client Form Controller (client/controller.py)
"""

from __future__ import annotations

# ── Form Enumerations ───────────────────────────────────────────────────
# Offered by the form / CLI. The gateway only checks presence, never values.

DIFFICULTIES: list[str] = ["beginner", "intermediate", "advanced"]

PROJECT_MODES: list[str] = ["hackathon", "startup", "learning"]

TASK_AREAS: list[str] = ["frontend", "backend", "AI/ML", "DevOps", "UI/UX"]

# ── Request Contract ────────────────────────────────────────────────────
# Order matters: it is the order used in the 400 message.
REQUIRED_FIELDS: list[str] = [
    "domain",
    "audience",
    "difficulty",
    "time_available_days",
    "mode",
]

DEFAULT_IDEA_COUNT: int = 3

SKILLS_PLACEHOLDER: str = "Not specified"
CONSTRAINTS_PLACEHOLDER: str = "None specified"

# ── CORS ────────────────────────────────────────────────────────────────
# Attached to every gateway response, success or error.
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# ── Gateway Error Messages ──────────────────────────────────────────────
MISSING_FIELDS_MESSAGE: str = "Missing required fields: " + ", ".join(REQUIRED_FIELDS)
PARSE_FAILED_MESSAGE: str = "Failed to parse AI response. Please try again."
NO_JSON_MESSAGE: str = "AI did not return valid JSON. Please try again."
UNKNOWN_ERROR_MESSAGE: str = "Unknown error occurred"
PROVIDER_NAME: str = "OpenAI"

# ── Client Messages ─────────────────────────────────────────────────────
CLIENT_REQUEST_FAILED: str = "Failed to generate ideas"
CLIENT_INVALID_FORMAT: str = "Invalid response format"
CLIENT_GENERIC_FAILURE: str = "Failed to generate ideas. Please try again."
