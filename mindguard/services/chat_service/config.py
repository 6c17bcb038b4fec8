"""Chat service configuration, read from the environment."""
import os
from dataclasses import dataclass
from typing import Optional

from ..llm_service.base_llm import LLMConfig, LLMProvider


def _env_bool(name: str, default: str = "true") -> bool:
    return os.environ.get(name, default).strip().lower() == "true"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class ChatServiceConfig:
    """Configuration for the chat service."""
    # Remote generator
    llm_provider: str = "groq"  # or "openai", "huggingface"
    model_name: str = "llama3-8b-8192"
    model_endpoint: Optional[str] = None
    api_key: Optional[str] = None
    enable_llm: bool = True
    timeout_seconds: float = 15.0

    # Sampling
    max_tokens: int = 1000
    temperature: float = 0.7
    top_p: float = 0.9

    # History
    history_window: int = 6
    history_cache_size: int = 20

    # Logging
    pii_salt: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ChatServiceConfig":
        """Create configuration from environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        provider = os.environ.get("LLM_PROVIDER", "groq").strip().lower()
        return cls(
            llm_provider=provider,
            model_name=os.environ.get("LLM_MODEL_NAME", "llama3-8b-8192"),
            model_endpoint=os.environ.get("LLM_ENDPOINT") or None,
            api_key=_api_key_for(provider),
            enable_llm=_env_bool("ENABLE_LLM"),
            timeout_seconds=_env_float("LLM_TIMEOUT_SECONDS", 15.0),
            history_window=_env_int("HISTORY_WINDOW", 6),
            history_cache_size=_env_int("HISTORY_CACHE_SIZE", 20),
            pii_salt=os.environ.get("PII_HASH_SALT") or None,
        )

    @property
    def remote_configured(self) -> bool:
        """True when a remote generator should be built."""
        if not self.enable_llm:
            return False
        if self.llm_provider == LLMProvider.HUGGINGFACE.value:
            return bool(self.model_endpoint)
        return bool(self.api_key)

    def to_llm_config(self) -> LLMConfig:
        """Build the provider config.

        Raises:
            ValueError: If the provider name is unknown
        """
        return LLMConfig(
            provider=LLMProvider(self.llm_provider),
            model_name=self.model_name,
            endpoint=self.model_endpoint,
            api_key=self.api_key,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            timeout_seconds=self.timeout_seconds,
        )


def _api_key_for(provider: str) -> Optional[str]:
    if provider == LLMProvider.GROQ.value:
        return os.environ.get("GROQ_API_KEY") or None
    if provider == LLMProvider.OPENAI.value:
        return os.environ.get("OPENAI_API_KEY") or None
    if provider == LLMProvider.HUGGINGFACE.value:
        return os.environ.get("HUGGINGFACE_TOKEN") or None
    return os.environ.get("GROQ_API_KEY") or os.environ.get("OPENAI_API_KEY") or None
