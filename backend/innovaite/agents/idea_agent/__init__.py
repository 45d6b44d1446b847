from .generator import audit_ideas, generate_ideas
from .parser import recover_json
from .prompts import SYSTEM_PROMPT, build_messages, build_user_prompt

__all__ = [
    "generate_ideas",
    "audit_ideas",
    "recover_json",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_user_prompt",
]
