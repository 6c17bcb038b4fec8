"""Base LLM interface and provider implementations.

Any text-generation provider that accepts a role-tagged message list and
returns text is substitutable. Groq is reached through its
OpenAI-compatible endpoint with the `openai` SDK.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class LLMProvider(Enum):
    """Supported LLM providers."""
    GROQ = "groq"
    OPENAI = "openai"
    HUGGINGFACE = "huggingface"


# Base URLs for OpenAI-compatible providers
DEFAULT_BASE_URLS: Dict[LLMProvider, Optional[str]] = {
    LLMProvider.GROQ: "https://api.groq.com/openai/v1",
    LLMProvider.OPENAI: None,
}

MAX_PROMPT_CHARS = 20000


@dataclass
class LLMConfig:
    """Configuration for LLM inference."""
    provider: LLMProvider
    model_name: str
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    max_tokens: int = 1000
    temperature: float = 0.7
    top_p: float = 0.9
    timeout_seconds: float = 15.0


@dataclass(frozen=True)
class ChatMessage:
    """One role-tagged entry of the message list sent to the provider."""
    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class LLMResponse:
    """Response from LLM inference."""
    text: str
    model: str
    provider: str
    tokens_used: Optional[int] = None
    latency_ms: Optional[float] = None
    metadata: Optional[Dict] = None


class BaseLLM(ABC):
    """Abstract base class for LLM implementations."""

    def __init__(self, config: LLMConfig):
        """Initialize LLM with configuration.

        Args:
            config: LLM configuration
        """
        self.config = config
        logger.info(
            "LLM_INITIALIZED",
            extra={
                "provider": config.provider.value,
                "model": config.model_name
            }
        )

    @abstractmethod
    async def generate(self, messages: List[ChatMessage], **kwargs) -> LLMResponse:
        """Generate a reply for a role-tagged message list.

        Args:
            messages: System prompt, history and the new user message
            **kwargs: Additional provider-specific parameters

        Returns:
            LLMResponse object

        Raises:
            ValueError: If the message list is invalid
            Exception: Any transport or provider error
        """

    def validate_messages(self, messages: List[ChatMessage]) -> bool:
        """Validate a message list before sending it.

        Args:
            messages: The message list to validate

        Returns:
            True if valid, False otherwise
        """
        if not messages or messages[-1].role != "user" or not messages[-1].content.strip():
            logger.warning("LLM_MESSAGES_INVALID", extra={"reason": "missing_user_message"})
            return False

        total_chars = sum(len(m.content) for m in messages)
        if total_chars > MAX_PROMPT_CHARS:
            logger.warning(
                "LLM_MESSAGES_INVALID",
                extra={"reason": "too_long", "length": total_chars}
            )
            return False

        return True


class OpenAICompatibleLLM(BaseLLM):
    """Chat-completions implementation (Groq, OpenAI, or any compatible host)."""

    def __init__(self, config: LLMConfig, client=None):
        """Initialize chat-completions LLM.

        Args:
            config: LLM configuration with API key
            client: Pre-built AsyncOpenAI-like client (tests inject a mock)
        """
        super().__init__(config)

        if client is not None:
            self.client = client
            return

        if not config.api_key:
            raise ValueError(f"{config.provider.value} API key required")

        import openai

        base_url = config.endpoint or DEFAULT_BASE_URLS.get(config.provider)
        self.client = openai.AsyncOpenAI(
            api_key=config.api_key,
            base_url=base_url,
            max_retries=0,
        )

    async def generate(self, messages: List[ChatMessage], **kwargs) -> LLMResponse:
        """Generate a reply using the chat-completions API.

        Args:
            messages: Role-tagged message list
            **kwargs: Additional parameters

        Returns:
            LLMResponse object
        """
        if not self.validate_messages(messages):
            raise ValueError("Invalid message list")

        start_time = time.perf_counter()

        try:
            response = await self.client.chat.completions.create(
                model=self.config.model_name,
                messages=[m.to_dict() for m in messages],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                top_p=self.config.top_p,
                stream=False,
                timeout=self.config.timeout_seconds,
            )

            latency_ms = (time.perf_counter() - start_time) * 1000

            generated_text = response.choices[0].message.content
            usage = getattr(response, "usage", None)
            tokens_used = getattr(usage, "total_tokens", None)

            logger.info(
                "LLM_GENERATION_SUCCEEDED",
                extra={
                    "provider": self.config.provider.value,
                    "model": self.config.model_name,
                    "latency_ms": latency_ms,
                    "tokens_used": tokens_used
                }
            )

            return LLMResponse(
                text=generated_text or "",
                model=self.config.model_name,
                provider=self.config.provider.value,
                tokens_used=tokens_used,
                latency_ms=latency_ms
            )

        except Exception as e:
            logger.error(
                "LLM_GENERATION_FAILED",
                extra={
                    "provider": self.config.provider.value,
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise


class HuggingFaceLLM(BaseLLM):
    """HuggingFace text-generation endpoint implementation."""

    def __init__(self, config: LLMConfig):
        """Initialize HuggingFace LLM.

        Args:
            config: LLM configuration with HuggingFace endpoint
        """
        super().__init__(config)

        if not config.endpoint:
            raise ValueError("HuggingFace endpoint required")

        self.endpoint = config.endpoint
        self.headers = {}

        if config.api_key:
            self.headers["Authorization"] = f"Bearer {config.api_key}"

    @staticmethod
    def format_prompt(messages: List[ChatMessage]) -> str:
        """Flatten a message list into a single text-generation prompt."""
        lines = []
        for message in messages:
            if message.role == "system":
                lines.append(message.content)
            else:
                speaker = "User" if message.role == "user" else "Assistant"
                lines.append(f"{speaker}: {message.content}")
        lines.append("Assistant:")
        return "\n\n".join(lines)

    async def generate(self, messages: List[ChatMessage], **kwargs) -> LLMResponse:
        """Generate a reply using the HuggingFace Inference API.

        Args:
            messages: Role-tagged message list
            **kwargs: Additional parameters

        Returns:
            LLMResponse object
        """
        import aiohttp

        if not self.validate_messages(messages):
            raise ValueError("Invalid message list")

        payload = {
            "inputs": self.format_prompt(messages),
            "parameters": {
                "max_new_tokens": self.config.max_tokens,
                "temperature": self.config.temperature,
                "top_p": self.config.top_p,
                "return_full_text": False
            }
        }

        start_time = time.perf_counter()

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.endpoint,
                    headers=self.headers,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds)
                ) as response:
                    response.raise_for_status()
                    result = await response.json()

            latency_ms = (time.perf_counter() - start_time) * 1000

            if isinstance(result, list) and len(result) > 0:
                generated_text = result[0].get("generated_text", "")
            elif isinstance(result, dict):
                generated_text = result.get("generated_text", "")
            else:
                raise ValueError(f"Unexpected HuggingFace payload: {type(result).__name__}")

            logger.info(
                "LLM_GENERATION_SUCCEEDED",
                extra={
                    "provider": self.config.provider.value,
                    "model": self.config.model_name,
                    "latency_ms": latency_ms
                }
            )

            return LLMResponse(
                text=generated_text,
                model=self.config.model_name,
                provider=self.config.provider.value,
                latency_ms=latency_ms,
                metadata={"endpoint": self.endpoint}
            )

        except Exception as e:
            logger.error(
                "LLM_GENERATION_FAILED",
                extra={
                    "provider": self.config.provider.value,
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise


def create_llm(config: LLMConfig) -> BaseLLM:
    """Factory function to create LLM instance.

    Args:
        config: LLM configuration

    Returns:
        BaseLLM instance

    Raises:
        ValueError: If provider not supported or credentials are missing
    """
    if config.provider in (LLMProvider.GROQ, LLMProvider.OPENAI):
        return OpenAICompatibleLLM(config)
    elif config.provider == LLMProvider.HUGGINGFACE:
        return HuggingFaceLLM(config)
    else:
        raise ValueError(f"Unsupported provider: {config.provider}")
