"""Random selection and personalization of canned responses.

Randomness comes from an injected RandomSource so tests can force
deterministic picks; `random.Random` satisfies the protocol.
"""
import random
import re
from typing import Optional, Protocol, Sequence, TypeVar

from mindguard.shared.models import RiskLevel, UserContext

T = TypeVar("T")

# Probability thresholds: a draw strictly above the value triggers
MOOD_AFFIRMATION_THRESHOLD = 0.7

MOOD_AFFIRMATIONS = {
    "low": "Sometimes when we're feeling low, even tiny steps count as victories.",
    "sad": "Sometimes when we're feeling low, even tiny steps count as victories.",
    "anxious": "When anxiety rises, remember that you can always return to your breath.",
    "stressed": "When everything feels urgent, one thing at a time is enough.",
}

_FIRST_SENTENCE_END = re.compile(r"([.!?]) ")


class RandomSource(Protocol):
    """Anything yielding floats in [0, 1]."""

    def random(self) -> float:
        ...


def default_random_source() -> RandomSource:
    return random.Random()


def pick(items: Sequence[T], rng: RandomSource) -> T:
    """Pick one item uniformly using rng.

    Raises:
        ValueError: If items is empty
    """
    if not items:
        raise ValueError("Cannot pick from an empty pool")
    index = int(rng.random() * len(items))
    return items[min(max(index, 0), len(items) - 1)]


def insert_name(response: str, name: Optional[str]) -> str:
    """Insert the user's name after the first sentence.

    "I hear you. Let's talk." -> "I hear you, Sam. Let's talk."
    Left unchanged when the name is absent, blank, already present, or
    the response has no sentence break.
    """
    if name is None or not name.strip() or name in response:
        return response
    return _FIRST_SENTENCE_END.sub(lambda m: f", {name}{m.group(1)} ", response, count=1)


def personalize(
    response: str,
    user_context: UserContext,
    rng: RandomSource,
    risk_level: RiskLevel = RiskLevel.LOW,
) -> str:
    """Apply post-processing personalization to a canned response.

    Steps:
    1. Insert the display name after the first sentence
    2. Append a reminder of the first known effective strategy
    3. With probability 0.3, append a mood-aware affirmation

    Steps 2 and 3 are skipped for HIGH risk so crisis directives stay
    the last thing the user reads.

    Args:
        response: Selected canned response
        user_context: Caller-supplied context
        rng: Randomness source for the affirmation draw
        risk_level: Tier computed for the message

    Returns:
        Personalized response text
    """
    personalized = insert_name(response, user_context.name)

    if risk_level == RiskLevel.HIGH:
        return personalized

    if user_context.effective_strategies:
        strategy = user_context.effective_strategies[0]
        personalized += (
            f"\n\nRemember, {strategy} helped you before - might it be worth trying again?"
        )

    if user_context.current_mood is not None:
        affirmation = MOOD_AFFIRMATIONS.get(user_context.current_mood.strip().lower())
        if rng.random() > MOOD_AFFIRMATION_THRESHOLD and affirmation:
            personalized += f"\n\n{affirmation}"

    return personalized
