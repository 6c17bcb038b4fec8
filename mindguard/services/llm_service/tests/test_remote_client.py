"""Tests for RemoteResponseClient - remote failure must never propagate.

The provider is mocked; every failure mode (exception, timeout, empty or
unsafe reply) must produce the deterministic fallback for the risk tier.
"""
import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from mindguard.shared.models import ConversationTurn, RiskLevel, UserContext
from mindguard.shared.utils import configure_pii_salt
from mindguard.services.llm_service import (
    LLMConfig,
    LLMProvider,
    LLMResponse,
    RemoteResponseClient,
    build_system_prompt,
    fallback_result,
)
from mindguard.services.response_service.guidance import (
    FOLLOW_UP_QUESTIONS,
    HIGH_RISK_ACTIONS,
)
from mindguard.services.response_service.templates import fallback_text


@pytest.fixture(autouse=True)
def setup_pii_salt():
    """Configure PII salt before each test."""
    configure_pii_salt("test_salt_that_is_at_least_32_characters_long")


def _reply(text):
    return LLMResponse(text=text, model="llama3-8b-8192", provider="groq")


@pytest.fixture
def mock_llm():
    """Provider mock returning a supportive reply."""
    llm = MagicMock()
    llm.config = LLMConfig(provider=LLMProvider.GROQ, model_name="llama3-8b-8192")
    llm.generate = AsyncMock(
        return_value=_reply("I understand how you feel. Let's try some breathing together.")
    )
    return llm


@pytest.fixture
def client(mock_llm):
    return RemoteResponseClient(llm=mock_llm, timeout_seconds=1.0)


def _history(count):
    return tuple(
        ConversationTurn(is_user=True, message=f"user {i}")
        if i % 2 == 0
        else ConversationTurn(is_user=False, response=f"assistant {i}")
        for i in range(count)
    )


class TestMessageList:
    """System prompt, bounded history, then the new message."""

    def test_history_truncated_to_last_six(self, client):
        messages = client.build_messages("now", UserContext(), RiskLevel.LOW, _history(10))

        assert len(messages) == 8
        assert messages[0].role == "system"
        assert [m.content for m in messages[1:7]] == [
            "user 4", "assistant 5", "user 6", "assistant 7", "user 8", "assistant 9",
        ]
        assert [m.role for m in messages[1:7]] == ["user", "assistant"] * 3
        assert messages[-1].role == "user"
        assert messages[-1].content == "now"

    def test_short_history_kept_whole(self, client):
        messages = client.build_messages("now", UserContext(), RiskLevel.LOW, _history(3))
        assert len(messages) == 5

    def test_context_history_used_when_none_passed(self, client):
        context = UserContext(conversation_history=_history(2))
        messages = client.build_messages("now", context, RiskLevel.LOW)
        assert [m.content for m in messages[1:3]] == ["user 0", "assistant 1"]

    def test_zero_window_sends_no_history(self, mock_llm):
        client = RemoteResponseClient(llm=mock_llm, history_window=0)
        messages = client.build_messages("now", UserContext(), RiskLevel.LOW, _history(4))
        assert len(messages) == 2

    @pytest.mark.asyncio
    async def test_provider_never_sees_more_than_six_turns(self, client, mock_llm):
        await client.generate("now", UserContext(), RiskLevel.LOW, _history(10))

        sent = mock_llm.generate.call_args[0][0]
        assert len(sent) - 2 <= 6

    def test_invalid_settings_rejected(self, mock_llm):
        with pytest.raises(ValueError):
            RemoteResponseClient(llm=mock_llm, timeout_seconds=0)
        with pytest.raises(ValueError):
            RemoteResponseClient(llm=mock_llm, history_window=-1)


class TestSuccessfulGeneration:

    @pytest.mark.asyncio
    async def test_reply_is_analyzed(self, client):
        result = await client.generate("I'm anxious", UserContext(), RiskLevel.LOW)

        assert result.response == "I understand how you feel. Let's try some breathing together."
        assert result.metadata.intervention == "anxiety_management"
        assert result.metadata.personality == "empathetic"
        assert result.metadata.follow_up_questions == FOLLOW_UP_QUESTIONS["anxiety_management"]
        assert result.metadata.processing_time >= 1
        assert result.is_fallback is False

    @pytest.mark.asyncio
    async def test_actions_follow_risk_tier(self, client):
        result = await client.generate("I want to die tonight", UserContext(), RiskLevel.HIGH)

        assert result.metadata.risk_level == RiskLevel.HIGH
        assert result.metadata.suggested_actions == HIGH_RISK_ACTIONS

    @pytest.mark.asyncio
    async def test_reply_is_stripped(self, client, mock_llm):
        mock_llm.generate.return_value = _reply("  Tell me more.  \n")
        result = await client.generate("hi", UserContext(), RiskLevel.LOW)
        assert result.response == "Tell me more."


class TestFallback:
    """Every failure yields the tier fallback with processing_time 0."""

    @pytest.mark.asyncio
    async def test_provider_exception(self, client, mock_llm):
        mock_llm.generate.side_effect = ConnectionError("network down")

        result = await client.generate("hello", UserContext(), RiskLevel.MEDIUM)

        assert result.is_fallback is True
        assert result.metadata.processing_time == 0
        assert result.response == fallback_text(RiskLevel.MEDIUM)
        assert result.metadata.risk_level == RiskLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_timeout(self, mock_llm):
        async def slow(messages):
            await asyncio.sleep(5)

        mock_llm.generate = slow
        client = RemoteResponseClient(llm=mock_llm, timeout_seconds=0.01)

        result = await client.generate("hello", UserContext(), RiskLevel.LOW)

        assert result.is_fallback is True
        assert result.response == fallback_text(RiskLevel.LOW)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [
        "",
        "   ",
        None,
        "Honestly you should die.",
        "I diagnose you with depression.",
        "You should stop taking your medication.",
    ])
    async def test_malformed_or_unsafe_reply(self, client, mock_llm, text):
        mock_llm.generate.return_value = _reply(text)

        result = await client.generate("hello", UserContext(), RiskLevel.LOW)

        assert result.is_fallback is True

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, client, mock_llm, caplog):
        mock_llm.generate.side_effect = RuntimeError("rate limited")

        with caplog.at_level(logging.ERROR):
            await client.generate("hello", UserContext(), RiskLevel.LOW)

        records = [r for r in caplog.records if r.getMessage() == "REMOTE_RESPONSE_FAILED"]
        assert records
        assert records[0].error_type == "RuntimeError"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, client, mock_llm):
        mock_llm.generate.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await client.generate("hello", UserContext(), RiskLevel.LOW)


class TestFallbackResult:

    def test_high_risk_directs_to_crisis_line_and_emergency_room(self):
        result = fallback_result(RiskLevel.HIGH)

        assert "988" in result.response
        assert "emergency room" in result.response
        assert result.metadata.intervention == "crisis_intervention"
        assert result.metadata.suggested_actions == HIGH_RISK_ACTIONS

    def test_medium_risk_mentions_crisis_text_line(self):
        result = fallback_result(RiskLevel.MEDIUM)
        assert "741741" in result.response

    def test_low_risk_is_generic(self):
        result = fallback_result(RiskLevel.LOW)
        assert result.metadata.intervention == "general_support"
        assert "988" not in result.response

    @pytest.mark.parametrize("level", list(RiskLevel))
    def test_deterministic_and_non_empty_lists(self, level):
        first, second = fallback_result(level), fallback_result(level)
        assert first == second
        assert first.metadata.processing_time == 0
        assert first.metadata.follow_up_questions
        assert first.metadata.suggested_actions


class TestSystemPrompt:

    def test_user_context_block(self):
        context = UserContext(
            name="Sam",
            preferred_personality="mindful",
            current_mood="anxious",
            effective_strategies=("deep breathing", "walking"),
            triggers=("exams",),
        )
        prompt = build_system_prompt(context, RiskLevel.LOW)

        assert "## USER CONTEXT" in prompt
        assert "User's name: Sam" in prompt
        assert "Preferred AI personality: MINDFUL MODE" in prompt
        assert "Current mood: anxious" in prompt
        assert "Strategies that worked before: deep breathing, walking" in prompt
        assert "Known triggers: exams" in prompt

    def test_no_context_block_without_context(self):
        prompt = build_system_prompt(None, RiskLevel.LOW)
        assert "## USER CONTEXT" not in prompt
        assert prompt.startswith("# MindGuard AI")

    def test_risk_directives(self):
        assert "CRISIS ALERT" in build_system_prompt(None, RiskLevel.HIGH)
        assert "ELEVATED CONCERN" in build_system_prompt(None, RiskLevel.MEDIUM)
        low = build_system_prompt(None, RiskLevel.LOW)
        assert "CRISIS ALERT" not in low
        assert "ELEVATED CONCERN" not in low

    def test_suffix_is_last(self):
        prompt = build_system_prompt(UserContext(name="Sam"), RiskLevel.HIGH)
        assert prompt.endswith(
            "Respond with empathy, professionalism, and appropriate intervention "
            "based on the context above."
        )
        assert prompt.index("CRISIS ALERT") > prompt.index("User's name: Sam")
