"""InnovAIte: AI project idea generator: gateway service and client controller."""

__version__ = "0.1.0"
