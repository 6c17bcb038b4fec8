"""Lexicon-based sentiment scorer.

Maps free text to a scalar in [-1, 1] by counting hits against fixed
positive and negative word sets. Pure and deterministic; never raises.
"""
from typing import FrozenSet


POSITIVE_WORDS: FrozenSet[str] = frozenset({
    "happy", "joy", "love", "excited", "great", "wonderful", "amazing", "fantastic",
    "good", "better", "best", "excellent", "perfect", "beautiful", "awesome",
    "grateful", "thankful", "blessed", "hopeful", "optimistic", "confident",
    "successful", "achievement", "progress", "improvement", "victory", "win",
})

NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    "sad", "angry", "hate", "terrible", "awful", "bad", "worst", "horrible",
    "depressed", "anxious", "worried", "stress", "panic", "fear", "scared",
    "upset", "frustrated", "disappointed", "hopeless", "worthless", "failure",
    "problem", "difficult", "hard", "struggle", "pain", "hurt", "lonely",
})

# Label thresholds used by the chat UI
POSITIVE_LABEL_THRESHOLD = 0.3
NEGATIVE_LABEL_THRESHOLD = -0.3


class SentimentScorer:
    """Bag-of-words sentiment scorer.

    Tokens are whitespace-separated and lowercased; punctuation is not
    stripped, so "sad." does not count as "sad".
    """

    def __init__(
        self,
        positive_words: FrozenSet[str] = POSITIVE_WORDS,
        negative_words: FrozenSet[str] = NEGATIVE_WORDS,
    ):
        self.positive_words = positive_words
        self.negative_words = negative_words

    def score(self, text: str) -> float:
        """Score text on [-1, 1].

        The raw sum (+1 per positive hit, -1 per negative hit) is divided
        by max(matched, total_words / 4), which damps long messages with
        few sentiment-bearing words.

        Args:
            text: Message text

        Returns:
            0.0 when nothing matched, otherwise the clamped normalized sum
        """
        if not isinstance(text, str):
            return 0.0

        words = text.lower().split()
        raw = 0
        matched = 0
        for word in words:
            if word in self.positive_words:
                raw += 1
                matched += 1
            elif word in self.negative_words:
                raw -= 1
                matched += 1

        if matched == 0:
            return 0.0

        normalized = raw / max(matched, len(words) / 4)
        return max(-1.0, min(1.0, normalized))


def sentiment_label(score: float) -> str:
    """Bucket a score into positive / negative / neutral."""
    if score > POSITIVE_LABEL_THRESHOLD:
        return "positive"
    if score < NEGATIVE_LABEL_THRESHOLD:
        return "negative"
    return "neutral"


def sentiment_emoji(score: float) -> str:
    if score > 0.5:
        return "😊"
    if score > 0.1:
        return "🙂"
    if score < -0.5:
        return "😢"
    if score < -0.1:
        return "😟"
    return "😐"


_scorer = SentimentScorer()


def score(text: str) -> float:
    """Score text with the default lexicon."""
    return _scorer.score(text)
