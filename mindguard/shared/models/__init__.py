"""Shared domain models for the MindGuard chat core."""
from .risk import RiskLevel
from .conversation import (
    ConversationTurn,
    UserContext,
    ResponseMetadata,
    ResponseResult,
    history_contents,
)

__all__ = [
    "RiskLevel",
    "ConversationTurn",
    "UserContext",
    "ResponseMetadata",
    "ResponseResult",
    "history_contents",
]
