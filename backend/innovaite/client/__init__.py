# Client package
from .controller import IdeaGeneratorController, LoggingNotifier, Notifier, ViewState
from .render import render_idea_card, render_view

__all__ = [
    "IdeaGeneratorController",
    "LoggingNotifier",
    "Notifier",
    "ViewState",
    "render_idea_card",
    "render_view",
]
