"""Safety Service configuration: risk patterns and thresholds.

Patterns are matched case-insensitively against the raw message, before
any personalization or normalization.
"""
import re
from dataclasses import dataclass
from typing import Pattern, Tuple


@dataclass(frozen=True)
class RiskThresholds:
    """Sentiment cut-off that escalates an otherwise quiet message."""
    NEGATIVE_SENTIMENT_MEDIUM: float = -0.7   # strictly below escalates to MEDIUM


@dataclass(frozen=True)
class SafetyConfig:
    """Configuration for risk classification behavior."""

    # Whether the sentiment signal may escalate LOW to MEDIUM
    sentiment_escalation_enabled: bool = True

    # Version tracking for audit trail
    pattern_version: str = "2026.10.01"


def _compile(phrases: Tuple[str, ...]) -> Pattern:
    return re.compile(r"\b(?:" + "|".join(phrases) + r")\b", re.IGNORECASE)


# ==========================================================================
# HIGH-RISK: explicit suicidal / self-destructive intent
# Alone this is MEDIUM; with an immediacy qualifier it is HIGH.
# ==========================================================================
INTENT_PHRASES: Tuple[str, ...] = (
    r"suicid(?:e|al)",
    r"kill(?:ing)? myself",
    r"end(?:ing)? it all",
    r"end(?:ing)? my (?:own )?life",
    r"take my (?:own )?life",
    r"(?:want|wish|plan(?:ning)?|ready) to die",
    r"unalive(?: myself)?",
    r"better off dead",
)

HIGH_RISK_PATTERN: Pattern = _compile(INTENT_PHRASES)

# ==========================================================================
# IMMEDIACY: time-bound language, method references, expressed readiness
# Only meaningful in combination with HIGH_RISK_PATTERN.
# ==========================================================================
IMMEDIACY_PATTERN: Pattern = re.compile(
    r"\b(?:"
    # time-bound
    r"tonight|today|tomorrow|right now|this (?:morning|afternoon|evening|weekend|week)"
    # planning / readiness
    r"|plan(?:ned|ning)? to|have a plan|made a plan|ready to|going to|about to"
    r"|written (?:a )?(?:note|letters?)|said (?:my )?goodbyes?"
    # methods
    r"|pills|overdose|bridge|gun|rope|noose|jump(?:ing)? off|hang myself"
    r")\b",
    re.IGNORECASE,
)

# ==========================================================================
# MEDIUM-RISK: self-harm, passive ideation, hopelessness without immediacy
# ==========================================================================
SELF_HARM_PHRASES: Tuple[str, ...] = (
    r"harm(?:ing)? myself",
    r"hurt(?:ing)? myself",
    r"self[- ]?harm",
    r"cut(?:ting)? myself",
)

PASSIVE_IDEATION_PHRASES: Tuple[str, ...] = (
    r"can(?:no|[’']?)t go on",
    r"no reason to live",
    r"better off without me",
    r"nobody would miss me",
    r"don[’']?t want to be here",
)

HOPELESSNESS_PHRASES: Tuple[str, ...] = (
    r"no point",
    r"hopeless",
    r"worthless",
    r"give up",
    r"giving up",
)

MEDIUM_RISK_PATTERN: Pattern = _compile(
    SELF_HARM_PHRASES + PASSIVE_IDEATION_PHRASES + HOPELESSNESS_PHRASES
)

# Every phrase that must route a local reply to the crisis rule
CRISIS_PHRASES: Tuple[str, ...] = INTENT_PHRASES + SELF_HARM_PHRASES + PASSIVE_IDEATION_PHRASES
