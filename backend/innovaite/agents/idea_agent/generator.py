"""Idea Generator Agent: one OpenAI round-trip per request.

Uses the centralized OpenAI client (`request_completion`) for single-stage
generation, then recovers the reply as JSON. Individual ideas are audited
against the Idea schema for logging only; the parsed object is returned
verbatim.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ...schemas.idea_schema import GenerationRequest, Idea
from ...services.openai_client import request_completion
from .parser import recover_json
from .prompts import build_messages

logger = logging.getLogger(__name__)

_IDEA_MAX_TOKENS = 4000
_RAW_PREVIEW_CHARS = 200


def audit_ideas(ideas: List[Any]) -> int:
    """Log every idea that does not match the Idea schema.

    Returns the number of non-conforming ideas. Never raises.
    """
    non_conforming = 0
    for index, idea in enumerate(ideas):
        try:
            Idea.model_validate(idea)
        except ValidationError as exc:
            non_conforming += 1
            logger.warning(
                "[IDEAS] Idea #%d does not match schema (%d issues): %s",
                index + 1,
                exc.error_count(),
                "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in exc.errors()[:5]
                ),
            )
    return non_conforming


async def generate_ideas(request: GenerationRequest) -> Dict[str, Any]:
    """Generate project ideas for a validated request.

    Returns
    -------
    dict
        The recovered JSON object, expected shape ``{"ideas": [...]}``.

    Raises
    ------
    UpstreamAPIError
        If the completion endpoint answers with a non-2xx status.
    MalformedOutputError
        If the reply cannot be recovered as JSON.
    """
    logger.info(
        "[IDEAS] Generating ideas with params: domain=%s audience=%s difficulty=%s "
        "time_available_days=%s mode=%s",
        request.domain,
        request.audience,
        request.difficulty,
        request.time_available_days,
        request.mode,
    )

    content = await request_completion(
        messages=build_messages(request),
        max_completion_tokens=_IDEA_MAX_TOKENS,
    )
    logger.info("[IDEAS] Raw OpenAI response: %s", content[:_RAW_PREVIEW_CHARS])

    parsed = recover_json(content)

    ideas = parsed.get("ideas")
    if isinstance(ideas, list):
        logger.info("[IDEAS] Successfully generated %d ideas", len(ideas))
        audit_ideas(ideas)
    else:
        logger.warning("[IDEAS] Recovered object has no ideas array: keys=%s", list(parsed))

    return parsed
