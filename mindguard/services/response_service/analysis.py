"""Keyword-sniff analysis of generated replies.

Infers the intervention category and personality tone of a reply by
substring matching. Kept as one pure function so the heuristic can be
swapped without touching the router or the remote client.
"""
from typing import Tuple

from .guidance import (
    ANXIETY_MANAGEMENT,
    CRISIS_INTERVENTION,
    DEPRESSION_SUPPORT,
    GENERAL_SUPPORT,
    RELATIONSHIP_SUPPORT,
)

# (intervention, cues) in priority order
INTERVENTION_CUES = (
    (CRISIS_INTERVENTION, ("988", "crisis")),
    (ANXIETY_MANAGEMENT, ("breathing", "ground")),
    (DEPRESSION_SUPPORT, ("small step", "self-care")),
    (RELATIONSHIP_SUPPORT, ("relationship", "communication")),
)

DEFAULT_PERSONALITY = "adaptive"


def analyze_response(text: str) -> Tuple[str, str]:
    """Infer (intervention, personality) from a reply.

    Matching is case-insensitive.

    Args:
        text: Generated reply text

    Returns:
        Tuple of intervention label and personality label
    """
    lowered = text.lower() if isinstance(text, str) else ""

    intervention = GENERAL_SUPPORT
    for label, cues in INTERVENTION_CUES:
        if any(cue in lowered for cue in cues):
            intervention = label
            break

    if "feel" in lowered and "understand" in lowered:
        personality = "empathetic"
    elif "step" in lowered and "plan" in lowered:
        personality = "practical"
    elif "breathe" in lowered or "present" in lowered:
        personality = "mindful"
    elif "meaning" in lowered or "growth" in lowered:
        personality = "wise"
    else:
        personality = DEFAULT_PERSONALITY

    return intervention, personality
