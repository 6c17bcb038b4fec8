"""Risk classifier - single-message crisis tiering.

This is the first step of every chat request and runs locally, so crisis
detection survives even when the remote generator is unreachable.

Layers, evaluated in order:
- Intent + immediacy: high-risk phrase AND time/method/readiness qualifier -> HIGH
- Keyword: high-risk phrase alone, or a medium-risk phrase -> MEDIUM
- Sentiment: caller-supplied score strictly below -0.7 -> MEDIUM
- Otherwise -> LOW
"""
import hashlib
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple

from mindguard.shared.models import RiskLevel
from .config import (
    HIGH_RISK_PATTERN,
    IMMEDIACY_PATTERN,
    MEDIUM_RISK_PATTERN,
    RiskThresholds,
    SafetyConfig,
)

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 16


def message_fingerprint(text: str) -> str:
    """Short digest that lets classification logs be correlated without content."""
    return hashlib.sha256(text.encode()).hexdigest()[:FINGERPRINT_LENGTH]


LAYER_IMMEDIACY = "intent_immediacy"
LAYER_KEYWORD = "keyword"
LAYER_SENTIMENT = "sentiment"
LAYER_NONE = "none"


@dataclass(frozen=True)
class RiskAssessment:
    """Result of classifying one message.

    Immutable - assessments cannot be modified after creation.
    """
    risk_level: RiskLevel
    layer: str = LAYER_NONE
    matched_terms: Tuple[str, ...] = field(default_factory=tuple)
    sentiment: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "risk_level": self.risk_level.value,
            "layer": self.layer,
            "matched_terms": list(self.matched_terms),
            "sentiment": self.sentiment,
        }


class RiskClassifier:
    """Deterministic, rule-based risk classifier.

    The same (message, sentiment) pair always yields the same tier, and
    any message matching a high-risk phrase is at least MEDIUM whatever
    the sentiment.
    """

    def __init__(
        self,
        config: Optional[SafetyConfig] = None,
        thresholds: Optional[RiskThresholds] = None,
        high_risk_pattern: Pattern = HIGH_RISK_PATTERN,
        immediacy_pattern: Pattern = IMMEDIACY_PATTERN,
        medium_risk_pattern: Pattern = MEDIUM_RISK_PATTERN,
    ):
        """Initialize classifier with configuration.

        Args:
            config: Classifier behavior configuration
            thresholds: Sentiment escalation threshold
            high_risk_pattern: Explicit-intent pattern
            immediacy_pattern: Time/method/readiness qualifier pattern
            medium_risk_pattern: Hopelessness / ideation pattern
        """
        self.config = config or SafetyConfig()
        self.thresholds = thresholds or RiskThresholds()
        self._high_risk = high_risk_pattern
        self._immediacy = immediacy_pattern
        self._medium_risk = medium_risk_pattern

    def classify(self, message: str, sentiment: Optional[float] = None) -> RiskLevel:
        """Classify a message into a risk tier. Never raises."""
        return self.assess(message, sentiment).risk_level

    def assess(self, message: str, sentiment: Optional[float] = None) -> RiskAssessment:
        """Classify a message and report which layer decided.

        Args:
            message: Raw message text; non-string or blank input is LOW
            sentiment: Optional score in [-1, 1]; non-finite values are ignored

        Returns:
            RiskAssessment with tier, deciding layer and matched terms

        Logs:
            - RISK_HIGH_DETECTED: intent plus immediacy (critical level)
            - RISK_CLASSIFIED: every other outcome
        """
        sentiment = _usable_sentiment(sentiment)
        text = message if isinstance(message, str) else ""

        if not text.strip():
            return self._finish(RiskAssessment(RiskLevel.LOW, sentiment=sentiment), text)

        intent_terms = _find_all(self._high_risk, text)
        if intent_terms:
            immediacy_terms = _find_all(self._immediacy, text)
            if immediacy_terms:
                return self._finish(
                    RiskAssessment(
                        RiskLevel.HIGH,
                        layer=LAYER_IMMEDIACY,
                        matched_terms=tuple(intent_terms + immediacy_terms),
                        sentiment=sentiment,
                    ),
                    text,
                )

        keyword_terms = intent_terms + _find_all(self._medium_risk, text)
        if keyword_terms:
            return self._finish(
                RiskAssessment(
                    RiskLevel.MEDIUM,
                    layer=LAYER_KEYWORD,
                    matched_terms=tuple(keyword_terms),
                    sentiment=sentiment,
                ),
                text,
            )

        if (
            self.config.sentiment_escalation_enabled
            and sentiment is not None
            and sentiment < self.thresholds.NEGATIVE_SENTIMENT_MEDIUM
        ):
            return self._finish(
                RiskAssessment(RiskLevel.MEDIUM, layer=LAYER_SENTIMENT, sentiment=sentiment),
                text,
            )

        return self._finish(RiskAssessment(RiskLevel.LOW, sentiment=sentiment), text)

    def _finish(self, assessment: RiskAssessment, text: str) -> RiskAssessment:
        fields = {
            "text_hash": message_fingerprint(text),
            "risk_level": assessment.risk_level.value,
            "layer": assessment.layer,
            "matched_count": len(assessment.matched_terms),
            "pattern_version": self.config.pattern_version,
        }
        if assessment.risk_level == RiskLevel.HIGH:
            logger.critical("RISK_HIGH_DETECTED", extra=fields)
        else:
            logger.info("RISK_CLASSIFIED", extra=fields)
        return assessment


def _find_all(pattern: Pattern, text: str) -> List[str]:
    """Return distinct lowercase matches in order of first appearance."""
    seen: List[str] = []
    for match in pattern.finditer(text):
        term = match.group(0).lower()
        if term not in seen:
            seen.append(term)
    return seen


def _usable_sentiment(sentiment: Optional[float]) -> Optional[float]:
    if sentiment is None or isinstance(sentiment, bool):
        return None
    try:
        value = float(sentiment)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


_default_classifier: Optional[RiskClassifier] = None


def get_classifier() -> RiskClassifier:
    """Get the shared default RiskClassifier instance."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = RiskClassifier()
    return _default_classifier


def classify(message: str, sentiment: Optional[float] = None) -> RiskLevel:
    """Convenience function: classify with the default classifier."""
    return get_classifier().classify(message, sentiment)
