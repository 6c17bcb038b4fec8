"""LLM Service: remote response generation with safe fallback.

Components:
- base_llm.py: Provider abstraction (Groq/OpenAI-compatible, HuggingFace)
- prompts.py: Persona prompt, user-context block, risk directives
- remote_client.py: RemoteResponseClient with timeout, validation, fallback
"""

from .base_llm import (
    BaseLLM,
    ChatMessage,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    create_llm,
)
from .prompts import build_system_prompt
from .remote_client import RemoteResponseClient, fallback_result

__all__ = [
    "BaseLLM",
    "ChatMessage",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "create_llm",
    "build_system_prompt",
    "RemoteResponseClient",
    "fallback_result",
]
