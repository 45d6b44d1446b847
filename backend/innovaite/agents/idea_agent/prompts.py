"""Prompt templates for the Idea Generation agent.

System + User prompt separation. The system prompt fixes the exact Idea
JSON schema and the seven critical rules; the user prompt interpolates the
validated form fields and the requested idea count.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ...constants import CONSTRAINTS_PLACEHOLDER, SKILLS_PLACEHOLDER
from ...schemas.idea_schema import GenerationRequest

SYSTEM_PROMPT = """You are InnovAIte Assistant, an expert startup/hackathon idea generator and AI Co-Founder.

For each user request, return ONLY valid JSON (no explanatory text before or after). Your JSON must have this exact structure:

{
  "ideas": [
    {
      "title": "string - compelling project title",
      "tagline": "string - short catchy tagline under 15 words",
      "problem": "string - clear problem statement (2-3 sentences)",
      "solution": "string - proposed solution (2-3 sentences)",
      "features": ["array of 5-7 key feature descriptions"],
      "tech_stack": ["array of 6-10 technologies to use"],
      "architecture": "string - ASCII diagram showing system architecture with components and data flow",
      "roadmap": [
        {
          "phase": "Day 1" or "Week 1" etc,
          "tasks": ["array of 3-5 specific tasks for this phase"]
        }
      ],
      "feasibility": {
        "technical": number 1-10,
        "time_days": number of days needed,
        "market_fit": number 1-10
      },
      "persona": "string - detailed target user persona (2-3 sentences)",
      "monetization": "string - monetization strategy (2-3 sentences)",
      "task_breakdown": [
        {
          "area": "frontend" | "backend" | "AI/ML" | "DevOps" | "UI/UX",
          "tasks": ["array of 4-6 specific tasks"],
          "estimated_hours": number
        }
      ]
    }
  ]
}

CRITICAL RULES:
1. Return ONLY the JSON structure above - no other text
2. Ensure all ideas are unique and distinct from each other
3. Make ideas practical and buildable with the given constraints
4. Architecture should be a simple ASCII diagram (use |, -, +, [ ], etc.)
5. Total estimated hours across all task_breakdown areas should match time_days * 8
6. Be specific and actionable in all descriptions
7. If you cannot produce valid JSON, return {"error": "could not produce json"}"""


def _as_text(value: Any) -> str:
    """Render a form value the way it reads in a prompt (lists comma-joined)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _as_text(item) for item in value)
    return str(value)


def _or_placeholder(value: Any, placeholder: str) -> str:
    # Only empty scalars fall back; an empty list is still a value.
    if value is None or value is False or value == "" or value == 0:
        return placeholder
    return _as_text(value)


def build_user_prompt(request: GenerationRequest) -> str:
    """Build the user prompt for one generation request."""
    return f"""Generate {_as_text(request.multi_idea_count)} unique, buildable project ideas with these parameters:

Domain: {_as_text(request.domain)}
Target Audience: {_as_text(request.audience)}
Difficulty Level: {_as_text(request.difficulty)}
Time Available: {_as_text(request.time_available_days)} days
Project Mode: {_as_text(request.mode)}
Skills: {_or_placeholder(request.skills, SKILLS_PLACEHOLDER)}
Constraints: {_or_placeholder(request.constraints, CONSTRAINTS_PLACEHOLDER)}

Requirements:
- Each idea must be completely different from the others
- Ideas should be feasible within the time constraint
- Match the difficulty level appropriately
- Consider the target audience's needs
- Respect all constraints mentioned
- Provide complete details for each idea following the JSON structure"""


def build_messages(request: GenerationRequest) -> List[Dict[str, str]]:
    """The two-message prompt sent to the completion endpoint."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(request)},
    ]
