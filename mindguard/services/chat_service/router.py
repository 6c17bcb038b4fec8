"""Response router - the entry point of the chat core.

Every request follows the same sequence:
1. Classify risk locally (authoritative for the returned metadata)
2. Remote generation when a remote client is configured, otherwise the
   local responder (patterns, sentiment branch, continuity, default)
3. Override the risk tier in the result with the value from step 1

The router is total: any unexpected error after classification yields
the deterministic fallback for the locally computed tier.
"""
import dataclasses
import logging
from typing import Optional, Tuple

from mindguard.shared.models import ConversationTurn, ResponseResult, RiskLevel, UserContext
from mindguard.shared.utils.pii import user_log_id
from ..llm_service.remote_client import RemoteResponseClient, fallback_result
from ..response_service.responder import LocalResponder
from ..safety_service.classifier import RiskClassifier
from .history import ConversationHistoryCache

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 6


class ResponseRouter:
    """Classify-then-respond pipeline with a total contract."""

    def __init__(
        self,
        remote_client: Optional[RemoteResponseClient] = None,
        responder: Optional[LocalResponder] = None,
        classifier: Optional[RiskClassifier] = None,
        history_cache: Optional[ConversationHistoryCache] = None,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ):
        """Initialize router.

        Args:
            remote_client: Remote generator; None means local responses only
            responder: Local responder (creates new if None)
            classifier: Risk classifier (creates new if None)
            history_cache: Optional bounded cache used when the caller
                sends no history; each exchange is recorded into it
            history_window: Recent turns the remote client and theme check read
        """
        self.remote_client = remote_client
        self.responder = responder or LocalResponder(history_window=history_window)
        self.classifier = classifier or RiskClassifier()
        self.history_cache = history_cache
        self.history_window = history_window

    @property
    def remote_configured(self) -> bool:
        return self.remote_client is not None

    async def respond(
        self,
        message: str,
        user_id: Optional[str] = None,
        user_context: Optional[UserContext] = None,
        sentiment: Optional[float] = None,
    ) -> ResponseResult:
        """Produce a response for one message. Never raises.

        Args:
            message: Raw message text
            user_id: Caller's user identifier (hashed before logging)
            user_context: Caller-supplied context
            sentiment: Precomputed sentiment score in [-1, 1]

        Returns:
            ResponseResult whose risk level is the local classification
        """
        text = message if isinstance(message, str) else ""
        risk_level = self._classify(text, sentiment)

        try:
            context = user_context if user_context is not None else UserContext()
            history = self._history_for(user_id, context)

            if self.remote_client is not None and text.strip():
                result = await self.remote_client.generate(
                    text, context, risk_level, self._windowed(history)
                )
                source = "remote"
            else:
                result = self.responder.respond(text, context, risk_level, sentiment, history)
                source = "local"

        except Exception as e:
            logger.error(
                "RESPONSE_ROUTING_FAILED",
                extra={
                    "user_id_hash": user_log_id(user_id),
                    "risk_level": risk_level.value,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            result = fallback_result(risk_level)
            source = "error"

        if result.risk_level != risk_level:
            result = dataclasses.replace(
                result,
                metadata=dataclasses.replace(result.metadata, risk_level=risk_level),
            )

        if result.is_fallback:
            logger.warning(
                "FALLBACK_RESPONSE_USED",
                extra={
                    "user_id_hash": user_log_id(user_id),
                    "risk_level": risk_level.value,
                    "source": source,
                }
            )

        self._record(user_id, text, result)

        logger.info(
            "RESPONSE_ROUTED",
            extra={
                "user_id_hash": user_log_id(user_id),
                "risk_level": risk_level.value,
                "intervention": result.metadata.intervention,
                "source": source,
                "processing_time_ms": result.metadata.processing_time,
            }
        )

        return result

    def _classify(self, text: str, sentiment: Optional[float]) -> RiskLevel:
        try:
            return self.classifier.classify(text, sentiment)
        except Exception as e:
            logger.critical(
                "RISK_CLASSIFICATION_FAILED",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return RiskLevel.LOW

    def _history_for(
        self,
        user_id: Optional[str],
        context: UserContext,
    ) -> Tuple[ConversationTurn, ...]:
        """Caller-supplied history wins; otherwise use the cache."""
        if context.conversation_history is not None:
            history = context.conversation_history
        elif self.history_cache is not None and user_id:
            history = self.history_cache.get(user_id)
        else:
            return ()
        return tuple(history)

    def _windowed(self, history: Tuple[ConversationTurn, ...]) -> Tuple[ConversationTurn, ...]:
        if self.history_window <= 0:
            return ()
        return history[-self.history_window:]

    def _record(self, user_id: Optional[str], text: str, result: ResponseResult) -> None:
        if self.history_cache is None or not user_id:
            return
        try:
            self.history_cache.record_exchange(user_id, text, result.response)
        except Exception as e:
            logger.error(
                "HISTORY_RECORD_FAILED",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
