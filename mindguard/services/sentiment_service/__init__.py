"""Sentiment Service: lexicon sentiment scoring for chat messages.

The chat layer scores each message once and passes the value to the
response router; the router never computes sentiment itself.

Usage:
    from mindguard.services.sentiment_service import score, sentiment_label
    value = score("I feel hopeless today")
"""

from .scorer import (
    SentimentScorer,
    POSITIVE_WORDS,
    NEGATIVE_WORDS,
    score,
    sentiment_label,
    sentiment_emoji,
)

__all__ = [
    "SentimentScorer",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
    "score",
    "sentiment_label",
    "sentiment_emoji",
]
