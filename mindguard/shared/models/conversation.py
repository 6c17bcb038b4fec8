"""Conversation domain models: user context in, response result out.

UserContext is supplied by the caller per request and is read-only.
Every optional field uses None as its explicit "absent" representation;
an empty string or empty list is a present value, not an absent one.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .risk import RiskLevel


@dataclass(frozen=True)
class ConversationTurn:
    """One prior entry of a conversation as the chat UI stores it.

    User turns carry their text in `message`; assistant turns carry
    theirs in `response`.
    """
    is_user: bool
    message: str = ""
    response: str = ""

    @property
    def role(self) -> str:
        return "user" if self.is_user else "assistant"

    @property
    def content(self) -> str:
        return self.message if self.is_user else self.response

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConversationTurn":
        """Build a turn from the {isUser, message, response} wire shape."""
        is_user = data.get("isUser", data.get("is_user", False))
        return cls(
            is_user=bool(is_user),
            message=str(data.get("message") or ""),
            response=str(data.get("response") or ""),
        )


def _optional_str(data: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        if key in data and data[key] is not None:
            return str(data[key])
    return None


def _optional_str_tuple(data: Mapping[str, Any], *keys: str) -> Optional[Tuple[str, ...]]:
    for key in keys:
        if key in data and data[key] is not None:
            return tuple(str(item) for item in data[key])
    return None


@dataclass(frozen=True)
class UserContext:
    """Per-request, read-only description of the user.

    Missing context never causes an error; personalization simply
    degrades when a field is None.
    """
    name: Optional[str] = None
    preferred_personality: Optional[str] = None
    current_mood: Optional[str] = None
    effective_strategies: Optional[Tuple[str, ...]] = None
    triggers: Optional[Tuple[str, ...]] = None
    conversation_history: Optional[Tuple[ConversationTurn, ...]] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "UserContext":
        """Build a context from the camelCase request shape.

        Args:
            data: Mapping with optional name, preferredPersonality,
                currentMood, effectiveStrategies, triggers and
                conversationHistory keys (snake_case also accepted)

        Returns:
            UserContext with absent keys mapped to None
        """
        if not data:
            return cls()

        history = None
        raw_history = data.get("conversationHistory", data.get("conversation_history"))
        if raw_history is not None:
            history = tuple(
                turn if isinstance(turn, ConversationTurn) else ConversationTurn.from_dict(turn)
                for turn in raw_history
            )

        return cls(
            name=_optional_str(data, "name"),
            preferred_personality=_optional_str(data, "preferredPersonality", "preferred_personality"),
            current_mood=_optional_str(data, "currentMood", "current_mood"),
            effective_strategies=_optional_str_tuple(data, "effectiveStrategies", "effective_strategies"),
            triggers=_optional_str_tuple(data, "triggers"),
            conversation_history=history,
        )


@dataclass(frozen=True)
class ResponseMetadata:
    """Structured metadata attached to every response."""
    personality: str
    intervention: str
    risk_level: RiskLevel
    follow_up_questions: Tuple[str, ...] = field(default_factory=tuple)
    suggested_actions: Tuple[str, ...] = field(default_factory=tuple)
    processing_time: int = 0  # milliseconds; 0 signals the fallback path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personality": self.personality,
            "intervention": self.intervention,
            "riskLevel": self.risk_level.value,
            "followUpQuestions": list(self.follow_up_questions),
            "suggestedActions": list(self.suggested_actions),
            "processingTime": self.processing_time,
        }


@dataclass(frozen=True)
class ResponseResult:
    """Output of the chat core: response text plus metadata."""
    response: str
    metadata: ResponseMetadata

    @property
    def risk_level(self) -> RiskLevel:
        return self.metadata.risk_level

    @property
    def is_fallback(self) -> bool:
        return self.metadata.processing_time == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API response shape."""
        return {
            "response": self.response,
            "metadata": self.metadata.to_dict(),
        }


def history_contents(history: Optional[Sequence[ConversationTurn]]) -> List[str]:
    """Return the visible text of each turn, oldest first."""
    if not history:
        return []
    return [turn.content for turn in history]
