"""Tests for ChatServiceConfig and the ChatService facade."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mindguard.shared.models import RiskLevel
from mindguard.shared.utils import configure_pii_salt
from mindguard.shared.utils import pii
from mindguard.services.chat_service import ChatService, ChatServiceConfig
from mindguard.services.llm_service import LLMConfig, LLMProvider, LLMResponse


@pytest.fixture(autouse=True)
def setup_pii_salt():
    """Configure PII salt before each test."""
    configure_pii_salt("test_salt_that_is_at_least_32_characters_long")


@pytest.fixture
def local_config():
    return ChatServiceConfig(enable_llm=False)


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.config = LLMConfig(provider=LLMProvider.GROQ, model_name="llama3-8b-8192")
    llm.generate = AsyncMock(
        return_value=LLMResponse(
            text="I understand. Let's make a plan, one step at a time.",
            model="llama3-8b-8192",
            provider="groq",
        )
    )
    return llm


class TestChatServiceConfig:

    def test_from_env_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = ChatServiceConfig.from_env()

        assert config.llm_provider == "groq"
        assert config.model_name == "llama3-8b-8192"
        assert config.api_key is None
        assert config.enable_llm is True
        assert config.history_window == 6
        assert config.history_cache_size == 20
        assert config.remote_configured is False

    def test_from_env_groq(self):
        with patch.dict("os.environ", {
            "GROQ_API_KEY": "gsk-test",
            "LLM_TIMEOUT_SECONDS": "5",
            "HISTORY_WINDOW": "4",
        }, clear=True):
            config = ChatServiceConfig.from_env()

        assert config.api_key == "gsk-test"
        assert config.timeout_seconds == 5.0
        assert config.history_window == 4
        assert config.remote_configured is True

    def test_provider_specific_key(self):
        with patch.dict("os.environ", {
            "LLM_PROVIDER": "openai",
            "GROQ_API_KEY": "gsk-test",
            "OPENAI_API_KEY": "sk-test",
        }, clear=True):
            config = ChatServiceConfig.from_env()

        assert config.api_key == "sk-test"

    def test_huggingface_needs_endpoint(self):
        with patch.dict("os.environ", {"LLM_PROVIDER": "huggingface"}, clear=True):
            assert ChatServiceConfig.from_env().remote_configured is False

        with patch.dict("os.environ", {
            "LLM_PROVIDER": "huggingface",
            "LLM_ENDPOINT": "https://example.invalid/model",
        }, clear=True):
            assert ChatServiceConfig.from_env().remote_configured is True

    def test_disabled_llm(self):
        with patch.dict("os.environ", {"GROQ_API_KEY": "gsk-test", "ENABLE_LLM": "false"}, clear=True):
            assert ChatServiceConfig.from_env().remote_configured is False

    def test_invalid_number(self):
        with patch.dict("os.environ", {"HISTORY_WINDOW": "six"}, clear=True):
            with pytest.raises(ValueError):
                ChatServiceConfig.from_env()

    def test_to_llm_config(self):
        config = ChatServiceConfig(api_key="gsk-test")
        llm_config = config.to_llm_config()

        assert llm_config.provider == LLMProvider.GROQ
        assert llm_config.temperature == 0.7
        assert llm_config.max_tokens == 1000
        assert llm_config.top_p == 0.9

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            ChatServiceConfig(llm_provider="unknown").to_llm_config()


class TestChatService:

    def test_local_only_without_credentials(self, local_config):
        service = ChatService(config=local_config)
        assert service.remote_enabled is False

    def test_bad_provider_runs_local(self):
        service = ChatService(config=ChatServiceConfig(llm_provider="unknown", api_key="k"))
        assert service.remote_enabled is False

    def test_remote_built_from_config(self):
        with patch("openai.AsyncOpenAI"):
            service = ChatService(config=ChatServiceConfig(api_key="gsk-test"))
        assert service.remote_enabled is True

    @pytest.mark.asyncio
    async def test_sentiment_scored_when_missing(self, local_config):
        service = ChatService(config=local_config)

        result = await service.chat("awful awful", user_id="user-1")

        assert result.metadata.risk_level == RiskLevel.MEDIUM
        assert result.metadata.intervention == "emotional_support"

    @pytest.mark.asyncio
    async def test_precomputed_sentiment_is_used(self, local_config):
        service = ChatService(config=local_config)

        result = await service.chat("awful awful", user_id="user-1", sentiment=0.0)

        assert result.metadata.risk_level == RiskLevel.LOW

    @pytest.mark.asyncio
    async def test_accepts_request_mapping(self, local_config):
        service = ChatService(config=local_config)

        result = await service.chat(
            "hello there",
            user_id="user-1",
            user_context={"name": "Sam", "preferredPersonality": "practical"},
        )

        assert "Sam" in result.response
        assert result.metadata.personality == "practical"

    @pytest.mark.asyncio
    async def test_invalid_mapping_is_ignored(self, local_config):
        service = ChatService(config=local_config)

        result = await service.chat("hello there", user_context={"effectiveStrategies": 5})

        assert result.metadata.intervention == "general_support"

    @pytest.mark.asyncio
    async def test_remote_path(self, mock_llm):
        service = ChatService(config=ChatServiceConfig(), llm=mock_llm)

        result = await service.chat("I can't decide what to do", user_id="user-1")

        assert service.remote_enabled is True
        assert result.response == "I understand. Let's make a plan, one step at a time."
        assert result.metadata.personality == "practical"
        assert result.metadata.risk_level == RiskLevel.LOW

    @pytest.mark.asyncio
    async def test_history_is_kept_between_calls(self, mock_llm):
        service = ChatService(config=ChatServiceConfig(), llm=mock_llm)

        await service.chat("first", user_id="user-1")
        await service.chat("second", user_id="user-1")

        sent = mock_llm.generate.call_args[0][0]
        assert [m.content for m in sent[1:]] == [
            "first",
            "I understand. Let's make a plan, one step at a time.",
            "second",
        ]

    def test_configures_pii_salt(self, local_config, monkeypatch):
        monkeypatch.setattr(pii, "_PII_SALT", None)
        config = ChatServiceConfig(enable_llm=False, pii_salt="x" * 40)

        ChatService(config=config)

        assert pii.is_pii_salt_configured() is True

    def test_short_pii_salt_rejected(self, monkeypatch):
        monkeypatch.setattr(pii, "_PII_SALT", None)
        with pytest.raises(ValueError):
            ChatService(config=ChatServiceConfig(enable_llm=False, pii_salt="short"))
