"""Tests for provider implementations and the factory."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mindguard.services.llm_service import (
    ChatMessage,
    LLMConfig,
    LLMProvider,
    create_llm,
)
from mindguard.services.llm_service.base_llm import HuggingFaceLLM, OpenAICompatibleLLM


@pytest.fixture
def messages():
    return [
        ChatMessage("system", "You are MindGuard AI."),
        ChatMessage("user", "hi"),
        ChatMessage("assistant", "hello"),
        ChatMessage("user", "I feel anxious"),
    ]


@pytest.fixture
def groq_config():
    return LLMConfig(
        provider=LLMProvider.GROQ,
        model_name="llama3-8b-8192",
        api_key="test-key",
    )


def _completion(text, total_tokens=42):
    response = MagicMock()
    choice = MagicMock()
    choice.message.content = text
    response.choices = [choice]
    response.usage.total_tokens = total_tokens
    return response


class TestLLMConfig:

    def test_default_sampling_parameters(self, groq_config):
        assert groq_config.temperature == 0.7
        assert groq_config.max_tokens == 1000
        assert groq_config.top_p == 0.9


class TestOpenAICompatibleLLM:

    @pytest.mark.asyncio
    async def test_generate_sends_sampling_parameters(self, groq_config, messages):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_completion("I'm here."))
        llm = OpenAICompatibleLLM(groq_config, client=client)

        response = await llm.generate(messages)

        assert response.text == "I'm here."
        assert response.tokens_used == 42
        assert response.provider == "groq"

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama3-8b-8192"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000
        assert kwargs["top_p"] == 0.9
        assert kwargs["messages"][0] == {"role": "system", "content": "You are MindGuard AI."}
        assert kwargs["messages"][-1] == {"role": "user", "content": "I feel anxious"}

    @pytest.mark.asyncio
    async def test_provider_error_is_raised(self, groq_config, messages):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("429"))
        llm = OpenAICompatibleLLM(groq_config, client=client)

        with pytest.raises(RuntimeError):
            await llm.generate(messages)

    @pytest.mark.asyncio
    async def test_invalid_messages_rejected(self, groq_config):
        client = MagicMock()
        client.chat.completions.create = AsyncMock()
        llm = OpenAICompatibleLLM(groq_config, client=client)

        with pytest.raises(ValueError):
            await llm.generate([ChatMessage("system", "prompt")])
        client.chat.completions.create.assert_not_called()

    def test_missing_api_key(self):
        config = LLMConfig(provider=LLMProvider.GROQ, model_name="llama3-8b-8192")
        with pytest.raises(ValueError):
            OpenAICompatibleLLM(config)

    def test_groq_uses_groq_base_url(self, groq_config):
        with patch("openai.AsyncOpenAI") as mock_client:
            llm = create_llm(groq_config)

        assert isinstance(llm, OpenAICompatibleLLM)
        assert mock_client.call_args.kwargs["base_url"] == "https://api.groq.com/openai/v1"
        assert mock_client.call_args.kwargs["api_key"] == "test-key"

    def test_custom_endpoint_overrides_base_url(self):
        config = LLMConfig(
            provider=LLMProvider.OPENAI,
            model_name="gpt-4o-mini",
            api_key="test-key",
            endpoint="http://localhost:8000/v1",
        )
        with patch("openai.AsyncOpenAI") as mock_client:
            create_llm(config)

        assert mock_client.call_args.kwargs["base_url"] == "http://localhost:8000/v1"


class TestHuggingFaceLLM:

    @pytest.fixture
    def hf_config(self):
        return LLMConfig(
            provider=LLMProvider.HUGGINGFACE,
            model_name="mental-health-model",
            endpoint="https://example.invalid/models/mental-health-model",
            api_key="hf-token",
        )

    def test_requires_endpoint(self):
        config = LLMConfig(provider=LLMProvider.HUGGINGFACE, model_name="m")
        with pytest.raises(ValueError):
            create_llm(config)

    def test_auth_header(self, hf_config):
        llm = HuggingFaceLLM(hf_config)
        assert llm.headers == {"Authorization": "Bearer hf-token"}

    def test_format_prompt(self, messages):
        prompt = HuggingFaceLLM.format_prompt(messages)
        assert prompt == (
            "You are MindGuard AI.\n\n"
            "User: hi\n\n"
            "Assistant: hello\n\n"
            "User: I feel anxious\n\n"
            "Assistant:"
        )

    @pytest.mark.asyncio
    async def test_generate_parses_list_payload(self, hf_config, messages):
        http_response = MagicMock()
        http_response.raise_for_status = MagicMock()
        http_response.json = AsyncMock(return_value=[{"generated_text": "I'm here for you."}])

        post_context = MagicMock()
        post_context.__aenter__ = AsyncMock(return_value=http_response)
        post_context.__aexit__ = AsyncMock(return_value=False)

        session = MagicMock()
        session.post = MagicMock(return_value=post_context)
        session.__aenter__ = AsyncMock(return_value=session)
        session.__aexit__ = AsyncMock(return_value=False)

        with patch("aiohttp.ClientSession", return_value=session):
            response = await HuggingFaceLLM(hf_config).generate(messages)

        assert response.text == "I'm here for you."
        payload = session.post.call_args.kwargs["json"]
        assert payload["parameters"]["temperature"] == 0.7
        assert payload["parameters"]["top_p"] == 0.9
        assert payload["inputs"].endswith("Assistant:")
