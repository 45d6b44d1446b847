"""JSON recovery for free-text model replies.

The model is asked for a single JSON object but may wrap it in code fences
or surround it with prose. Recovery is an ordered chain of pure
``text -> dict`` strategies; the first one that succeeds wins:

  1. strip_code_fences:   drop ``` / ```json fences, parse, require an ``ideas`` list
  2. extract_brace_block: parse the greedy ``{ ... }`` span of the ORIGINAL text

When every strategy fails the last failure decides the message: no
brace-delimited block at all, or a block that still would not parse.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Sequence

from ...exceptions import MalformedOutputError

logger = logging.getLogger(__name__)

_FENCE_JSON_RE = re.compile(r"```json\n?")
_FENCE_RE = re.compile(r"```\n?")
_BRACE_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


class RecoveryFailed(ValueError):
    """A single strategy could not recover an object from the text."""

    def __init__(self, reason: str, *, candidate_found: bool = True):
        super().__init__(reason)
        self.candidate_found = candidate_found


Strategy = Callable[[str], Dict[str, Any]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _loads(text: str) -> Any:
    """``json.loads`` without the NaN / Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


def strip_fences(text: str) -> str:
    """Remove every code-fence delimiter and surrounding whitespace."""
    text = _FENCE_JSON_RE.sub("", text)
    text = _FENCE_RE.sub("", text)
    return text.strip()


def strip_code_fences(text: str) -> Dict[str, Any]:
    try:
        parsed = _loads(strip_fences(text))
    except ValueError as exc:
        raise RecoveryFailed(f"fenced content is not JSON: {exc}") from exc

    if not isinstance(parsed, dict) or not isinstance(parsed.get("ideas"), list):
        raise RecoveryFailed("Invalid response structure: missing ideas array")
    return parsed


def extract_brace_block(text: str) -> Dict[str, Any]:
    match = _BRACE_BLOCK_RE.search(text)
    if match is None:
        raise RecoveryFailed("no brace-delimited block", candidate_found=False)

    try:
        return _loads(match.group(0))
    except ValueError as exc:
        raise RecoveryFailed(f"brace block is not JSON: {exc}") from exc


DEFAULT_STRATEGIES: List[Strategy] = [strip_code_fences, extract_brace_block]


def recover_json(text: str, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> Dict[str, Any]:
    """Run the recovery chain over the raw model text.

    Raises
    ------
    MalformedOutputError
        If no strategy succeeds.
    """
    last_failure: RecoveryFailed | None = None

    for strategy in strategies:
        try:
            return strategy(text)
        except RecoveryFailed as exc:
            logger.warning("[IDEAS] %s failed: %s", strategy.__name__, exc)
            last_failure = exc

    logger.error("[IDEAS] Content that failed to parse: %s", text)
    if last_failure is not None and not last_failure.candidate_found:
        raise MalformedOutputError.no_json()
    raise MalformedOutputError.parse_failed()
