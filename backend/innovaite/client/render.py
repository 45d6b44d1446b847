"""Plain-text rendering of the controller's view state.

Ideas arrive unvalidated from the gateway, so every field is read with a
fallback and a missing field just drops its section.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .controller import IdeaGeneratorController, ViewState

EMPTY_STATE = (
    "Ready to innovate?\n"
    "Fill out the form above to generate your first set of AI-powered project ideas"
)
LOADING_STATE = "Generating ideas..."
RESULTS_HEADER = "Your Generated Ideas"

_RULE = "=" * 72


def _bullets(items: Any, indent: str = "  ") -> List[str]:
    if not isinstance(items, list):
        return []
    return [f"{indent}- {item}" for item in items]


def _score(value: Any) -> str:
    return f"{value}/10" if value is not None else "?"


def render_idea_card(idea: Dict[str, Any], index: int) -> str:
    """One card per idea, numbered from 1 in array order."""
    if not isinstance(idea, dict):
        return f"#{index + 1} {idea}"

    lines = [_RULE, f"#{index + 1} {idea.get('title', 'Untitled idea')}"]
    if idea.get("tagline"):
        lines.append(f"   {idea['tagline']}")
    lines.append(_RULE)

    for label, key in (("Problem", "problem"), ("Solution", "solution")):
        if idea.get(key):
            lines += ["", f"{label}:", f"  {idea[key]}"]

    features = _bullets(idea.get("features"))
    if features:
        lines += ["", "Key Features:"] + features

    tech_stack = idea.get("tech_stack")
    if isinstance(tech_stack, list) and tech_stack:
        lines += ["", "Tech Stack:", "  " + ", ".join(str(t) for t in tech_stack)]

    if idea.get("architecture"):
        lines += ["", "Architecture:"]
        lines += [f"  {row}" for row in str(idea["architecture"]).splitlines()]

    roadmap = idea.get("roadmap")
    if isinstance(roadmap, list) and roadmap:
        lines += ["", "Roadmap:"]
        for phase in roadmap:
            if not isinstance(phase, dict):
                continue
            lines.append(f"  {phase.get('phase', '?')}")
            lines += _bullets(phase.get("tasks"), indent="    ")

    feasibility = idea.get("feasibility")
    if isinstance(feasibility, dict):
        lines += [
            "",
            "Feasibility:",
            f"  Technical: {_score(feasibility.get('technical'))}"
            f"  |  Time: {feasibility.get('time_days', '?')} days"
            f"  |  Market Fit: {_score(feasibility.get('market_fit'))}",
        ]

    for label, key in (("Target Persona", "persona"), ("Monetization", "monetization")):
        if idea.get(key):
            lines += ["", f"{label}:", f"  {idea[key]}"]

    breakdown = idea.get("task_breakdown")
    if isinstance(breakdown, list) and breakdown:
        lines += ["", "Task Breakdown:"]
        total_hours = 0.0
        for area in breakdown:
            if not isinstance(area, dict):
                continue
            hours = area.get("estimated_hours")
            if isinstance(hours, (int, float)):
                total_hours += hours
            lines.append(f"  {area.get('area', '?')} ({hours if hours is not None else '?'}h)")
            lines += _bullets(area.get("tasks"), indent="    ")
        lines.append(f"  Total: {total_hours:g}h")

    return "\n".join(lines)


def render_view(controller: IdeaGeneratorController) -> str:
    """Render whatever the controller currently shows."""
    state = controller.view_state

    if state is ViewState.LOADING:
        return LOADING_STATE
    if state is ViewState.EMPTY:
        return EMPTY_STATE

    cards = [render_idea_card(idea, i) for i, idea in enumerate(controller.ideas)]
    header = [
        RESULTS_HEADER,
        f"Here are {len(controller.ideas)} unique project ideas tailored to your requirements",
        "",
    ]
    return "\n".join(header) + "\n\n".join(cards)
