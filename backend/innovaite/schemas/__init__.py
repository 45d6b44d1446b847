# Schemas package
from .idea_schema import (
    ErrorResponse,
    Feasibility,
    GenerationRequest,
    GenerationResponse,
    Idea,
    RoadmapPhase,
    TaskBreakdown,
)

__all__ = [
    "GenerationRequest",
    "GenerationResponse",
    "ErrorResponse",
    "Idea",
    "RoadmapPhase",
    "Feasibility",
    "TaskBreakdown",
]
