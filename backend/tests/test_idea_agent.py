"""Idea agent tests: recovery chain, prompts, schema audit, OpenAI client."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json

import httpx
import pytest

from innovaite.agents.idea_agent.generator import audit_ideas
from innovaite.agents.idea_agent.parser import (
    RecoveryFailed,
    extract_brace_block,
    recover_json,
    strip_code_fences,
    strip_fences,
)
from innovaite.agents.idea_agent.prompts import SYSTEM_PROMPT, build_messages, build_user_prompt
from innovaite.constants import NO_JSON_MESSAGE, PARSE_FAILED_MESSAGE
from innovaite.exceptions import MalformedOutputError, UpstreamAPIError
from innovaite.schemas.idea_schema import GenerationRequest
from innovaite.services import openai_client
from innovaite.services.openai_client import request_completion


def _request(**overrides):
    data = {
        "domain": "fitness",
        "audience": "students",
        "difficulty": "beginner",
        "time_available_days": 3,
        "mode": "hackathon",
    }
    data.update(overrides)
    return GenerationRequest(**data)


# ===================================================================== #
#  Unit tests: recovery chain                                             #
# ===================================================================== #

class TestStripFences:
    def test_json_fence(self):
        assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        assert strip_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_every_fence_is_removed(self):
        assert strip_fences('```json{"a": 1}``` ```') == '{"a": 1}'

    def test_whitespace_trimmed(self):
        assert strip_fences('  \n{"a": 1}\n\n') == '{"a": 1}'


class TestStrategies:
    def test_fence_strategy_requires_ideas_list(self):
        with pytest.raises(RecoveryFailed, match="ideas"):
            strip_code_fences('{"ideas": "three"}')

    def test_fence_strategy_rejects_prose(self):
        with pytest.raises(RecoveryFailed):
            strip_code_fences('Sure! {"ideas": []}')

    def test_fence_strategy_rejects_top_level_list(self):
        with pytest.raises(RecoveryFailed):
            strip_code_fences("[1, 2, 3]")

    def test_brace_strategy_is_greedy(self):
        text = 'a {"x": {"y": 1}} b'
        assert extract_brace_block(text) == {"x": {"y": 1}}

    def test_brace_strategy_without_candidate(self):
        with pytest.raises(RecoveryFailed) as info:
            extract_brace_block("no json here")
        assert info.value.candidate_found is False

    @pytest.mark.parametrize("text", [
        '{"ideas": [NaN]}',
        '{"ideas": [{"technical": Infinity}]}',
        '{"ideas": [-Infinity]}',
    ])
    def test_non_standard_constants_rejected(self, text):
        with pytest.raises(RecoveryFailed):
            strip_code_fences(text)
        with pytest.raises(RecoveryFailed) as info:
            extract_brace_block(text)
        assert info.value.candidate_found is True

    def test_brace_strategy_with_bad_candidate(self):
        with pytest.raises(RecoveryFailed) as info:
            extract_brace_block("{nope}")
        assert info.value.candidate_found is True


class TestRecoverJson:
    def test_first_strategy_wins(self):
        assert recover_json('```json\n{"ideas": [1]}\n```') == {"ideas": [1]}

    def test_brace_extraction_uses_original_text(self):
        # The fence-stripped text fails, extraction still sees the original.
        text = 'Here:\n```json\n{"ideas": [{"title": "T"}]}\n```\nEnjoy'
        assert recover_json(text) == {"ideas": [{"title": "T"}]}

    def test_brace_extraction_skips_ideas_check(self):
        assert recover_json('{"error": "could not produce json"}') == {
            "error": "could not produce json"
        }

    def test_no_json_message(self):
        with pytest.raises(MalformedOutputError) as info:
            recover_json("plain prose only")
        assert info.value.message == NO_JSON_MESSAGE
        assert info.value.status_code == 500

    def test_parse_failed_message(self):
        with pytest.raises(MalformedOutputError) as info:
            recover_json("prefix {broken: json,} suffix")
        assert info.value.message == PARSE_FAILED_MESSAGE

    def test_nan_reply_is_parse_failure(self):
        with pytest.raises(MalformedOutputError) as info:
            recover_json('```json\n{"ideas": [{"feasibility": {"technical": NaN}}]}\n```')
        assert info.value.message == PARSE_FAILED_MESSAGE

    def test_custom_strategy_chain(self):
        def always_empty(text):
            return {"ideas": []}

        assert recover_json("anything", strategies=[always_empty]) == {"ideas": []}


# ===================================================================== #
#  Unit tests: prompts                                                    #
# ===================================================================== #

class TestPrompts:
    def test_system_prompt_has_seven_rules(self):
        for number in range(1, 8):
            assert f"\n{number}. " in SYSTEM_PROMPT
        assert "\n8. " not in SYSTEM_PROMPT

    @pytest.mark.parametrize("key", [
        "title", "tagline", "problem", "solution", "features", "tech_stack",
        "architecture", "roadmap", "feasibility", "persona", "monetization",
        "task_breakdown", "estimated_hours", "market_fit",
    ])
    def test_system_prompt_lists_schema_keys(self, key):
        assert f'"{key}"' in SYSTEM_PROMPT

    def test_system_prompt_escape_hatch(self):
        assert '{"error": "could not produce json"}' in SYSTEM_PROMPT
        assert "time_days * 8" in SYSTEM_PROMPT

    def test_user_prompt_placeholders(self):
        prompt = build_user_prompt(_request())
        assert "Skills: Not specified" in prompt
        assert "Constraints: None specified" in prompt

    def test_user_prompt_count(self):
        assert build_user_prompt(_request(multi_idea_count=4)).startswith("Generate 4 unique")

    def test_messages_order(self):
        messages = build_messages(_request())
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1]["role"] == "user"


# ===================================================================== #
#  Unit tests: schema audit                                               #
# ===================================================================== #

class TestAudit:
    def test_counts_non_conforming_ideas(self):
        good = {
            "title": "T", "tagline": "t", "problem": "p", "solution": "s",
            "features": ["f"], "tech_stack": ["x"], "architecture": "[a]-->[b]",
            "roadmap": [{"phase": "Day 1", "tasks": ["t"]}],
            "feasibility": {"technical": 5, "time_days": 2, "market_fit": 6},
            "persona": "p", "monetization": "m",
            "task_breakdown": [{"area": "AI/ML", "tasks": ["t"], "estimated_hours": 16}],
        }
        out_of_range = dict(good, feasibility={"technical": 11, "time_days": 2, "market_fit": 6})
        assert audit_ideas([good, out_of_range, {"title": "only"}, "text"]) == 3

    def test_empty_list(self):
        assert audit_ideas([]) == 0


# ===================================================================== #
#  Unit tests: OpenAI client                                              #
# ===================================================================== #

def _run_completion(handler, **kwargs):
    kwargs.setdefault("max_completion_tokens", 4000)
    return asyncio.run(
        request_completion(
            messages=[{"role": "user", "content": "hi"}],
            api_key="sk-test",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
    )


class TestOpenAIClient:
    def test_payload_and_headers(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        assert _run_completion(handler, max_completion_tokens=4000) == "ok"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {
            "model": "gpt-5-mini-2025-08-07",
            "messages": [{"role": "user", "content": "hi"}],
            "max_completion_tokens": 4000,
        }

    def test_non_2xx_raises_with_status(self):
        def handler(request):
            return httpx.Response(503, text="provider exploded: secret details")

        with pytest.raises(UpstreamAPIError) as info:
            _run_completion(handler)
        assert info.value.message == "OpenAI API error: 503"
        assert "secret" not in info.value.message

    def test_caller_sets_token_budget(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        _run_completion(handler, max_completion_tokens=123)
        assert seen["body"]["max_completion_tokens"] == 123

    def test_single_attempt(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(UpstreamAPIError):
            _run_completion(handler)
        assert len(calls) == 1

    def test_null_content_is_empty_text(self):
        def handler(request):
            return httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

        assert _run_completion(handler) == ""

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(EnvironmentError):
            openai_client.get_openai_key()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
        monkeypatch.setenv("OPENAI_REQUEST_TIMEOUT", "")
        assert openai_client.get_openai_model() == "gpt-test"
        assert openai_client._get_timeout() is None
