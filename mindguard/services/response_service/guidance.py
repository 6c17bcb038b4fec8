"""Follow-up question and suggested-action tables.

Every response carries follow-ups and actions looked up here by
intervention and risk tier, so the chat UI always has non-empty lists.
"""
from typing import Dict, Tuple

from mindguard.shared.models import RiskLevel


CRISIS_INTERVENTION = "crisis_intervention"
ANXIETY_MANAGEMENT = "anxiety_management"
DEPRESSION_SUPPORT = "depression_support"
RELATIONSHIP_SUPPORT = "relationship_support"
WORK_STRESS = "work_stress"
ANGER_MANAGEMENT = "anger_management"
COGNITIVE_RESTRUCTURING = "cognitive_restructuring"
CONNECTION_BUILDING = "connection_building"
EMOTIONAL_SUPPORT = "emotional_support"
POSITIVE_REINFORCEMENT = "positive_reinforcement"
GENERAL_SUPPORT = "general_support"


FOLLOW_UP_QUESTIONS: Dict[str, Tuple[str, ...]] = {
    CRISIS_INTERVENTION: (
        "Are you in a safe place right now?",
        "Do you have someone you can call for support?",
        "Have you been in contact with a mental health professional?",
    ),
    ANXIETY_MANAGEMENT: (
        "What specific situation is triggering this anxiety?",
        "Have you tried any breathing techniques before?",
        "What does your body feel like right now?",
    ),
    DEPRESSION_SUPPORT: (
        "How long have you been feeling this way?",
        "What usually helps you feel even slightly better?",
        "Are you taking care of your basic needs like sleep and food?",
    ),
    RELATIONSHIP_SUPPORT: (
        "What aspect of this relationship is most challenging?",
        "How do you typically handle conflicts together?",
        "What kind of support feels most needed right now?",
    ),
    WORK_STRESS: (
        "What specific aspect of work is most stressful?",
        "Do you have support at work?",
        "How is this affecting your life outside work?",
    ),
    ANGER_MANAGEMENT: (
        "What triggered this anger?",
        "How do you usually handle anger? What works and what doesn't?",
        "What would a positive outcome look like in this situation?",
    ),
    COGNITIVE_RESTRUCTURING: (
        "What specifically feels impossible right now?",
        "What resources or support do you have available?",
        "What's the smallest possible step you could take?",
    ),
    CONNECTION_BUILDING: (
        "When did you last feel truly connected to someone?",
        "What interests or activities make you feel most like yourself?",
        "Is there anyone you've lost touch with that you could reconnect with?",
    ),
    EMOTIONAL_SUPPORT: (
        "How long have you been feeling this way?",
        "What support do you have available?",
    ),
    POSITIVE_REINFORCEMENT: (
        "What contributed to this good mood?",
        "How can we maintain this positive energy?",
    ),
    GENERAL_SUPPORT: (
        "How are you feeling right now?",
        "What would be most helpful to explore?",
        "Is there anything else on your mind?",
    ),
}

HIGH_RISK_ACTIONS: Tuple[str, ...] = (
    "Call crisis line immediately",
    "Go to emergency room",
    "Contact trusted person",
)

MEDIUM_RISK_ACTIONS: Tuple[str, ...] = (
    "Call crisis hotline",
    "Reach out for support",
    "Practice safety planning",
)

# Low-risk coping actions, by intervention
COPING_ACTIONS: Dict[str, Tuple[str, ...]] = {
    CRISIS_INTERVENTION: (
        "Reach out to someone you trust",
        "Write down your reasons for staying safe",
        "Save 988 in your phone",
    ),
    ANXIETY_MANAGEMENT: (
        "Practice 4-7-8 breathing",
        "Try 5-4-3-2-1 grounding",
        "Take a short walk",
    ),
    DEPRESSION_SUPPORT: (
        "Do one small self-care activity",
        "Reach out to one person",
        "Get some sunlight",
    ),
    RELATIONSHIP_SUPPORT: (
        'Practice "I" statements',
        "Take time to cool down",
        "Listen actively",
    ),
    WORK_STRESS: (
        "Set boundaries with work hours",
        "Take regular breaks",
        "Talk to your supervisor or HR",
    ),
    ANGER_MANAGEMENT: (
        "Take 10 slow breaths before responding",
        "Journal what you're feeling",
        "Move your body for two minutes",
    ),
    COGNITIVE_RESTRUCTURING: (
        "Write down the thought and the evidence against it",
        "Reframe 'I can't' as 'I haven't yet'",
        "Pick the smallest next step",
    ),
    CONNECTION_BUILDING: (
        "Send one check-in message",
        "Join a group around an interest",
        "Plan one small social activity",
    ),
    EMOTIONAL_SUPPORT: (
        "Practice self-compassion",
        "Reach out to a trusted friend",
        "Consider professional support",
    ),
    POSITIVE_REINFORCEMENT: (
        "Notice and savor this positive moment",
        "Share this good feeling with someone",
        "Write down what helped",
    ),
    GENERAL_SUPPORT: (
        "Take deep breaths",
        "Practice self-compassion",
        "Consider next steps",
    ),
}


def follow_up_questions(intervention: str) -> Tuple[str, ...]:
    """Follow-up questions for an intervention (general set if unknown)."""
    return FOLLOW_UP_QUESTIONS.get(intervention, FOLLOW_UP_QUESTIONS[GENERAL_SUPPORT])


def suggested_actions(intervention: str, risk_level: RiskLevel) -> Tuple[str, ...]:
    """Suggested actions for an intervention at a risk tier.

    HIGH and MEDIUM tiers always get the crisis action sets, whatever
    the intervention; LOW gets intervention-specific coping actions.
    """
    if risk_level == RiskLevel.HIGH:
        return HIGH_RISK_ACTIONS
    if risk_level == RiskLevel.MEDIUM:
        return MEDIUM_RISK_ACTIONS
    return COPING_ACTIONS.get(intervention, COPING_ACTIONS[GENERAL_SUPPORT])
