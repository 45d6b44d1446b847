"""Pydantic schemas for the idea generation contract.

``GenerationRequest`` is built only after the gateway's own presence check,
so FastAPI never answers with a 422 for this endpoint. The ``Idea`` family
documents the shape the model is asked to produce; the gateway uses it to
audit replies but never rejects or rewrites them.
"""

from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field


TaskArea = Literal["frontend", "backend", "AI/ML", "DevOps", "UI/UX"]


class GenerationRequest(BaseModel):
    """Project parameters forwarded into the user prompt.

    The gateway's presence check is the only input validation, so every
    field accepts any JSON value and is interpolated as sent.
    """

    model_config = ConfigDict(extra="ignore")

    domain: Any
    audience: Any
    difficulty: Any = Field(..., description="beginner | intermediate | advanced")
    time_available_days: Any
    skills: Any = None
    mode: Any = Field(..., description="hackathon | startup | learning")
    constraints: Any = None
    multi_idea_count: Any = 3


# ── Idea ─────────────────────────────────────────────────────────────────

class RoadmapPhase(BaseModel):
    phase: str = Field(..., description='"Day 1", "Week 1", ...')
    tasks: List[str]


class Feasibility(BaseModel):
    technical: int = Field(..., ge=1, le=10)
    time_days: int
    market_fit: int = Field(..., ge=1, le=10)


class TaskBreakdown(BaseModel):
    area: TaskArea
    tasks: List[str]
    estimated_hours: float


class Idea(BaseModel):
    """One structured project proposal returned by the model."""

    title: str
    tagline: str
    problem: str
    solution: str
    features: List[str] = Field(..., description="5-7 key features")
    tech_stack: List[str] = Field(..., description="6-10 technologies")
    architecture: str = Field(..., description="ASCII diagram")
    roadmap: List[RoadmapPhase]
    feasibility: Feasibility
    persona: str
    monetization: str
    task_breakdown: List[TaskBreakdown]


class GenerationResponse(BaseModel):
    ideas: List[Idea] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
