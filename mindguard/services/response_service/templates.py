"""Canned templates outside the pattern rules.

Covers the sentiment branch, conversation-continuity check-ins, the
adaptive default, coping tips, and the deterministic fallback texts
used when the remote generator is unavailable.
"""
from typing import Dict, Tuple

from mindguard.shared.models import RiskLevel


# ==========================================================================
# FALLBACK - deterministic, depends only on the risk tier
# ==========================================================================

FALLBACK_RESPONSES: Dict[RiskLevel, str] = {
    RiskLevel.HIGH: (
        "I'm very concerned about you right now. Please call 988 (Suicide & Crisis Lifeline) "
        "or go to your nearest emergency room immediately. You don't have to face this alone."
    ),
    RiskLevel.MEDIUM: (
        "I can hear that you're going through a really difficult time. Please consider reaching "
        "out to the Crisis Text Line (text HOME to 741741) or calling 988 for support."
    ),
    RiskLevel.LOW: (
        "I'm here to support you through whatever you're experiencing. What would be most helpful "
        "for you right now - talking through your feelings, exploring some strategies, or just "
        "having someone listen?"
    ),
}


def fallback_text(risk_level: RiskLevel) -> str:
    return FALLBACK_RESPONSES.get(risk_level, FALLBACK_RESPONSES[RiskLevel.LOW])


# ==========================================================================
# SENTIMENT BRANCH
# ==========================================================================

VERY_NEGATIVE_SENTIMENT = -0.6
VERY_POSITIVE_SENTIMENT = 0.4
MILDLY_NEGATIVE_SENTIMENT = -0.2

EMPATHETIC_RESPONSES: Tuple[str, ...] = (
    "I can sense you're going through a really difficult time. Your feelings are completely valid, "
    "and you don't have to face this alone. What's one small step you could take right now to care "
    "for yourself?",
    "It sounds like you're carrying a heavy emotional load. Feelings are temporary, even when they "
    "feel overwhelming. What usually helps you feel even slightly better?",
    "I hear how much you're struggling. When we're in emotional pain, it's important to be gentle "
    "with ourselves. Is there someone in your life you can reach out to for support?",
)

REINFORCEMENT_RESPONSES: Tuple[str, ...] = (
    "I can hear some positive energy in your message! That's wonderful to see. How can we build on "
    "these good feelings and keep this momentum going?",
    "It's great to connect with you when you're feeling more positive! What's contributing to this "
    "good mood? Knowing what helps can be valuable on tougher days.",
    "I love hearing when things are going well! What's been working for you lately?",
)

MILD_NEGATIVE_RESPONSES: Tuple[str, ...] = (
    "I can sense some difficulty in what you're sharing. It's okay to not be okay sometimes. What's been "
    "on your mind that's causing some stress?",
    "It sounds like you might be working through some challenges. That's completely normal. What "
    "aspect of your situation feels most manageable to start with?",
    "I hear that things might feel a bit heavy right now. Sometimes talking through our thoughts can "
    "help lighten the load. What would be helpful to explore?",
)

# Appended to every very-negative reply: a draw strictly above this picks a
# resource, otherwise a self-care strategy
RESOURCE_LINE_THRESHOLD = 0.5

MENTAL_HEALTH_RESOURCES: Tuple[str, ...] = (
    "If you're in crisis, please reach out: Suicide & Crisis Lifeline: 988",
    "Crisis Text Line: Text HOME to 741741",
    "For ongoing support, consider the Psychology Today directory to find a therapist.",
    "Online therapy services can be an option if in-person care is hard to reach.",
    "Local community mental health centers often offer sliding scale fees.",
)

SELF_CARE_STRATEGIES: Tuple[str, ...] = (
    "Take a 5-minute walk outside - fresh air and movement can shift your mood.",
    "Practice deep breathing: 4 counts in, 4 counts hold, 6 counts out.",
    "Write down 3 things you're grateful for, no matter how small.",
    "Reach out to one person you care about with a simple check-in.",
    "Do something creative for 10 minutes - draw, write, sing, dance.",
    "Take a warm shower or bath with intention to wash away stress.",
    "Spend time in nature, even if it's just looking out a window.",
)


# ==========================================================================
# CONTINUITY - themes carried over from recent history
# ==========================================================================

ANXIETY_THEME_CUES: Tuple[str, ...] = ("anxiety", "anxious")
LOW_MOOD_THEME_CUES: Tuple[str, ...] = ("sad", "depressed")

ANXIETY_CHECK_IN = (
    "I notice we've been talking about anxiety. How are you feeling now? Are the strategies we "
    "discussed helping, or would you like to try something different?"
)

LOW_MOOD_CHECK_IN = (
    "You mentioned feeling down earlier. How are you doing now? Sometimes it helps to check in "
    "with ourselves throughout the day."
)

WELLNESS_CHECK_INS: Tuple[str, ...] = (
    "How are you taking care of yourself today?",
    "What's one thing that's going well in your life right now?",
    "Have you had enough water and rest today?",
    "What's one small thing you can do for yourself right now?",
    "How are your energy levels today?",
    "What would make today feel a little better for you?",
)

# Periodic check-in once a conversation runs long and no theme applies
WELLNESS_CHECK_IN_MIN_TURNS = 8
WELLNESS_CHECK_IN_THRESHOLD = 0.7  # a draw strictly above this checks in

WELLNESS_CHECK_IN_TEMPLATE = (
    "I appreciate you sharing so openly with me. {check_in}\n\n"
    "Remember, I'm here to support you through whatever you're experiencing."
)


# ==========================================================================
# ADAPTIVE DEFAULT
# ==========================================================================

DEFAULT_RESPONSES: Tuple[str, ...] = (
    "Thank you for sharing with me. I can hear that something important is on your mind. What "
    "would be most helpful for you right now - talking through your feelings, exploring some "
    "strategies, or just having someone listen?",
    "I'm here to support you through whatever you're experiencing. What's been weighing on you most "
    "lately? I want to understand so I can better help you.",
    "It takes courage to reach out and share. What's happening in your life that brought you here "
    "today? I'm here to listen and support you however I can.",
)


# ==========================================================================
# COPING TIPS - appended to some pattern matches
# ==========================================================================

COPING_TIP_THRESHOLD = 0.6  # a draw strictly above this appends a tip

COPING_STRATEGIES: Dict[str, Tuple[str, ...]] = {
    "anxiety": (
        "Try the 4-7-8 breathing technique: inhale for 4, hold for 7, exhale for 8.",
        "Ground yourself by naming 5 things you can see around you right now.",
        "Gently remind yourself: 'This feeling will pass. I am safe right now.'",
        "Try progressive muscle relaxation: tense and release each muscle group.",
    ),
    "depression": (
        "Set a tiny goal for today - even getting dressed counts as an achievement.",
        "Reach out to one person, even just to say hello.",
        "Spend 5 minutes outside if possible, or near a window with natural light.",
        "Listen to music that matches your mood, then gradually shift to something uplifting.",
    ),
    "anger": (
        "Take 10 deep breaths before responding to whatever triggered you.",
        "Write down your feelings without censoring yourself, then tear up the paper.",
        "Do something physical - walk, stretch, or do jumping jacks for 2 minutes.",
        "Ask yourself: 'What do I need right now?' and honor that need constructively.",
    ),
    "stress": (
        "Make a to-do list and pick just ONE thing to focus on right now.",
        "Take a 5-minute break to do something you enjoy.",
        "Practice saying 'no' to additional commitments today.",
        "Remember: you don't have to be perfect, you just have to show up.",
    ),
}

COPING_TIP_PREFIXES: Dict[str, str] = {
    "anxiety": "Quick strategy",
    "depression": "Gentle reminder",
    "anger": "Try this",
    "stress": "Try this",
}
