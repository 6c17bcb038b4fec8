"""Chat Service: classify-then-respond routing for chat messages.

Components:
- router.py: ResponseRouter (total contract, risk override)
- history.py: ConversationHistoryCache (bounded, thread-safe)
- config.py: ChatServiceConfig.from_env()
- service.py: ChatService facade used by the chat API layer

Usage:
    from mindguard.services.chat_service import ChatService

    service = ChatService()
    result = await service.chat("I feel anxious", user_id="user-123")
"""

from .config import ChatServiceConfig
from .history import ConversationHistoryCache
from .router import ResponseRouter
from .service import ChatService

__all__ = [
    "ChatServiceConfig",
    "ConversationHistoryCache",
    "ResponseRouter",
    "ChatService",
]
