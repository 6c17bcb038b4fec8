"""Risk tier domain model.

A risk tier is derived per message by the safety service and is never
stored as authoritative state by the chat core.
"""
from enum import Enum
from typing import Optional


class RiskLevel(Enum):
    """Crisis-severity classification for a single message.

    Totally ordered: LOW < MEDIUM < HIGH.
    """
    LOW = "low"         # No crisis language, ordinary support
    MEDIUM = "medium"   # Crisis language without immediacy, or very negative sentiment
    HIGH = "high"       # Explicit intent plus time/method/readiness qualifier

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def from_value(cls, value: Optional[str], default: "RiskLevel" = None) -> "RiskLevel":
        """Parse a tier from its string value, case-insensitively.

        Args:
            value: "low", "medium" or "high" (any case)
            default: Returned when value is missing or unknown (LOW if None)

        Returns:
            Matching RiskLevel
        """
        fallback = default or cls.LOW
        if not isinstance(value, str):
            return fallback
        try:
            return cls(value.strip().lower())
        except ValueError:
            return fallback


_RANKS = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}
