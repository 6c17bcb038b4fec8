"""Remote response client with safety validation and deterministic fallback.

Pipeline:
1. Build system prompt from user context and risk tier
2. Send the bounded history plus the new message to the provider
3. Validate the reply (empty, harmful, or medical content is rejected)
4. Derive intervention/personality and attach guidance tables

Any failure at steps 2-3 returns the fallback for the risk tier with
processing_time 0. Caller cancellation is not swallowed.
"""

import asyncio
import logging
import time
from typing import List, Optional, Sequence

from mindguard.shared.models import (
    ConversationTurn,
    ResponseMetadata,
    ResponseResult,
    RiskLevel,
    UserContext,
)
from ..response_service.analysis import analyze_response
from ..response_service.guidance import (
    CRISIS_INTERVENTION,
    GENERAL_SUPPORT,
    follow_up_questions,
    suggested_actions,
)
from ..response_service.templates import fallback_text
from .base_llm import BaseLLM, ChatMessage
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_HISTORY_WINDOW = 6

HARMFUL_PATTERNS = (
    "kill yourself",
    "end your life",
    "you should die",
    "harm yourself",
    "commit suicide",
)

MEDICAL_PATTERNS = (
    "i diagnose",
    "you have depression",
    "you have anxiety disorder",
    "take this medication",
    "stop taking your medication",
)


class MalformedResponseError(ValueError):
    """Raised when the provider reply is empty or fails safety validation."""


def fallback_result(risk_level: RiskLevel) -> ResponseResult:
    """Deterministic result for a risk tier, used whenever generation fails.

    Args:
        risk_level: Locally computed tier

    Returns:
        ResponseResult with processing_time 0
    """
    if risk_level in (RiskLevel.HIGH, RiskLevel.MEDIUM):
        intervention, personality = CRISIS_INTERVENTION, "empathetic"
    else:
        intervention, personality = GENERAL_SUPPORT, "adaptive"

    return ResponseResult(
        response=fallback_text(risk_level),
        metadata=ResponseMetadata(
            personality=personality,
            intervention=intervention,
            risk_level=risk_level,
            follow_up_questions=follow_up_questions(intervention),
            suggested_actions=suggested_actions(intervention, risk_level),
            processing_time=0,
        ),
    )


def validate_reply(text: Optional[str]) -> str:
    """Return the stripped reply or raise MalformedResponseError."""
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError("Empty reply from provider")

    lowered = text.lower()

    for pattern in HARMFUL_PATTERNS:
        if pattern in lowered:
            logger.critical(
                "HARMFUL_CONTENT_IN_LLM_RESPONSE",
                extra={"pattern": pattern}
            )
            raise MalformedResponseError("Reply failed harmful-content check")

    for pattern in MEDICAL_PATTERNS:
        if pattern in lowered:
            logger.warning(
                "MEDICAL_ADVICE_IN_LLM_RESPONSE",
                extra={"pattern": pattern}
            )
            raise MalformedResponseError("Reply failed medical-advice check")

    return text.strip()


class RemoteResponseClient:
    """Generates responses through a remote LLM, never raising on failure."""

    def __init__(
        self,
        llm: BaseLLM,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ):
        """Initialize client.

        Args:
            llm: Provider implementation
            timeout_seconds: Upper bound for one provider call
            history_window: Maximum number of prior turns sent to the provider
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if history_window < 0:
            raise ValueError("history_window must not be negative")

        self.llm = llm
        self.timeout_seconds = timeout_seconds
        self.history_window = history_window

        logger.info(
            "REMOTE_RESPONSE_CLIENT_INITIALIZED",
            extra={
                "provider": llm.config.provider.value,
                "timeout_seconds": timeout_seconds,
                "history_window": history_window,
            }
        )

    def build_messages(
        self,
        message: str,
        user_context: Optional[UserContext],
        risk_level: RiskLevel,
        history: Optional[Sequence[ConversationTurn]] = None,
    ) -> List[ChatMessage]:
        """Assemble system prompt, last N history turns, and the new message."""
        messages = [ChatMessage("system", build_system_prompt(user_context, risk_level))]

        if history is None and user_context is not None:
            history = user_context.conversation_history

        if history and self.history_window > 0:
            for turn in list(history)[-self.history_window:]:
                messages.append(ChatMessage(turn.role, turn.content))

        messages.append(ChatMessage("user", message))
        return messages

    async def generate(
        self,
        message: str,
        user_context: Optional[UserContext],
        risk_level: RiskLevel,
        history: Optional[Sequence[ConversationTurn]] = None,
    ) -> ResponseResult:
        """Generate a response, substituting the fallback on any failure.

        Args:
            message: Raw user message
            user_context: Caller-supplied context (may be None)
            risk_level: Tier already computed by the safety service
            history: Prior turns, oldest first; defaults to the context history

        Returns:
            ResponseResult; processing_time 0 marks the fallback
        """
        start_time = time.perf_counter()

        try:
            messages = self.build_messages(message, user_context, risk_level, history)
            llm_response = await asyncio.wait_for(
                self.llm.generate(messages),
                timeout=self.timeout_seconds,
            )
            text = validate_reply(llm_response.text)

        except Exception as e:
            logger.error(
                "REMOTE_RESPONSE_FAILED",
                extra={
                    "risk_level": risk_level.value,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            return fallback_result(risk_level)

        intervention, personality = analyze_response(text)
        elapsed_ms = max(1, int((time.perf_counter() - start_time) * 1000))

        logger.info(
            "REMOTE_RESPONSE_GENERATED",
            extra={
                "risk_level": risk_level.value,
                "intervention": intervention,
                "history_turns": len(messages) - 2,
                "latency_ms": elapsed_ms,
            }
        )

        return ResponseResult(
            response=text,
            metadata=ResponseMetadata(
                personality=personality,
                intervention=intervention,
                risk_level=risk_level,
                follow_up_questions=follow_up_questions(intervention),
                suggested_actions=suggested_actions(intervention, risk_level),
                processing_time=elapsed_ms,
            ),
        )
