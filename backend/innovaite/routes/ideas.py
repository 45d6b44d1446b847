"""Idea routes: the Idea Generation Gateway.

Endpoints:
  POST /generate-idea  Generate project ideas from form parameters

Stateless: every request is validated, turned into one prompt, sent to the
model once, and the recovered JSON is relayed back. Every failure becomes
``{"error": "<message>"}``; CORS headers are attached by the app middleware.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..agents.idea_agent.generator import generate_ideas
from ..constants import DEFAULT_IDEA_COUNT, REQUIRED_FIELDS, UNKNOWN_ERROR_MESSAGE
from ..exceptions import GatewayError, MissingFieldsError
from ..schemas.idea_schema import ErrorResponse, GenerationRequest, GenerationResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Ideas"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        500: {"model": ErrorResponse, "description": "Model call, parse or internal failure"},
    },
)


# ── Helpers ──────────────────────────────────────────────────────────────

def parse_generation_body(body: Any) -> GenerationRequest:
    """Check required fields by truthiness, then build the request model.

    Raises
    ------
    MissingFieldsError
        If any required field is absent or falsy.
    ValueError
        If the body is not a JSON object.
    """
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")

    missing = [field for field in REQUIRED_FIELDS if not body.get(field)]
    if missing:
        logger.info("[IDEAS] Rejected request, missing: %s", missing)
        raise MissingFieldsError(missing)

    data = dict(body)
    if data.get("multi_idea_count") is None:
        data["multi_idea_count"] = DEFAULT_IDEA_COUNT
    return GenerationRequest.model_validate(data)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ── Routes ───────────────────────────────────────────────────────────────

@router.post(
    "/generate-idea",
    response_model=GenerationResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate Project Ideas",
    response_description="Parsed model output, expected shape {ideas: [...]}",
)
async def generate_idea(request: Request) -> JSONResponse:
    """Generate project ideas for the submitted form parameters.

    The parsed object is returned verbatim; individual ideas are not
    validated.
    """
    try:
        body = await request.json()
        generation_request = parse_generation_body(body)
        result = await generate_ideas(generation_request)
    except GatewayError as exc:
        return _error_response(exc.message, exc.status_code)
    except Exception as exc:
        logger.exception("[IDEAS] Error in generate-idea handler")
        return _error_response(str(exc) or UNKNOWN_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(content=result)
