"""Response Service: local pattern responses, guidance tables, analysis.

Provides everything needed to answer a message without a remote
generator, plus the tables and reply analysis the remote client reuses.

Components:
- patterns.py: PatternRule and the ordered PATTERN_RULES library
- guidance.py: Follow-up question and suggested-action tables
- personalization.py: RandomSource, pool picks, name/strategy/mood touches
- templates.py: Sentiment, continuity, default and fallback texts
- analysis.py: Keyword-sniff intervention/personality inference
- responder.py: LocalResponder tying the above together
"""

from .analysis import analyze_response
from .guidance import follow_up_questions, suggested_actions
from .patterns import PATTERN_RULES, PatternRule, select_pattern
from .personalization import RandomSource, personalize, pick
from .responder import LocalResponder
from .templates import fallback_text

__all__ = [
    "analyze_response",
    "follow_up_questions",
    "suggested_actions",
    "PATTERN_RULES",
    "PatternRule",
    "select_pattern",
    "RandomSource",
    "personalize",
    "pick",
    "LocalResponder",
    "fallback_text",
]
