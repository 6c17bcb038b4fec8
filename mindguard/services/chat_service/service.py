"""Chat service facade.

Wires sentiment scoring, the risk classifier, the local responder and,
when configured, the remote generator behind a single async entry point.
The chat API layer calls this per message.
"""
import logging
from typing import Any, Mapping, Optional, Union

from mindguard.shared.models import ResponseResult, UserContext
from mindguard.shared.utils.pii import configure_pii_salt, is_pii_salt_configured
from ..llm_service.base_llm import BaseLLM, create_llm
from ..llm_service.remote_client import RemoteResponseClient
from ..response_service.responder import LocalResponder
from ..sentiment_service.scorer import SentimentScorer
from .config import ChatServiceConfig
from .history import ConversationHistoryCache
from .router import ResponseRouter

logger = logging.getLogger(__name__)


class ChatService:
    """Entry point for the chat API layer."""

    def __init__(
        self,
        config: Optional[ChatServiceConfig] = None,
        llm: Optional[BaseLLM] = None,
        responder: Optional[LocalResponder] = None,
        history_cache: Optional[ConversationHistoryCache] = None,
        scorer: Optional[SentimentScorer] = None,
    ):
        """Initialize chat service.

        Args:
            config: Service configuration (uses env vars if None)
            llm: Pre-built provider; skips provider construction from config
            responder: Local responder (creates new if None)
            history_cache: History cache (creates one sized from config if None)
            scorer: Sentiment scorer (creates new if None)

        Raises:
            ValueError: If a configured PII salt is too short
        """
        self.config = config or ChatServiceConfig.from_env()

        if self.config.pii_salt and not is_pii_salt_configured():
            configure_pii_salt(self.config.pii_salt)

        self.scorer = scorer or SentimentScorer()
        self.history_cache = history_cache or ConversationHistoryCache(
            max_turns_per_user=self.config.history_cache_size
        )

        remote_client = None
        if llm is not None or self.config.remote_configured:
            remote_client = self._initialize_remote(llm)

        self.router = ResponseRouter(
            remote_client=remote_client,
            responder=responder or LocalResponder(history_window=self.config.history_window),
            history_cache=self.history_cache,
            history_window=self.config.history_window,
        )

        logger.info(
            "CHAT_SERVICE_INITIALIZED",
            extra={
                "remote_enabled": remote_client is not None,
                "provider": self.config.llm_provider,
                "model": self.config.model_name,
            }
        )

    def _initialize_remote(self, llm: Optional[BaseLLM]) -> Optional[RemoteResponseClient]:
        """Build the remote client; configuration errors leave it disabled."""
        try:
            if llm is None:
                llm = create_llm(self.config.to_llm_config())
            return RemoteResponseClient(
                llm=llm,
                timeout_seconds=self.config.timeout_seconds,
                history_window=self.config.history_window,
            )
        except ValueError as e:
            logger.error(
                "REMOTE_CLIENT_INITIALIZATION_FAILED",
                extra={"provider": self.config.llm_provider, "error": str(e)}
            )
            return None

    @property
    def remote_enabled(self) -> bool:
        return self.router.remote_configured

    async def chat(
        self,
        message: str,
        user_id: Optional[str] = None,
        user_context: Union[UserContext, Mapping[str, Any], None] = None,
        sentiment: Optional[float] = None,
    ) -> ResponseResult:
        """Respond to one chat message.

        Args:
            message: Raw message text
            user_id: Caller's user identifier
            user_context: UserContext or the camelCase request mapping
            sentiment: Precomputed score; scored here when None

        Returns:
            ResponseResult (never raises)
        """
        if user_context is not None and not isinstance(user_context, UserContext):
            try:
                user_context = UserContext.from_dict(user_context)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(
                    "USER_CONTEXT_INVALID",
                    extra={"error": str(e), "error_type": type(e).__name__}
                )
                user_context = None

        if sentiment is None:
            sentiment = self.scorer.score(message)

        return await self.router.respond(
            message,
            user_id=user_id,
            user_context=user_context,
            sentiment=sentiment,
        )
