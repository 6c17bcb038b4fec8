"""Pattern Response Library - local, non-remote response rules.

A fixed, ordered list of rules maps trigger regexes to response pools.
Rule selection depends on the message text only: the first matching
rule wins. The risk tier only chooses which pool of the crisis rule is
used.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Pattern, Tuple

from mindguard.shared.models import RiskLevel
from ..safety_service.config import CRISIS_PHRASES
from .guidance import (
    ANGER_MANAGEMENT,
    ANXIETY_MANAGEMENT,
    COGNITIVE_RESTRUCTURING,
    CONNECTION_BUILDING,
    CRISIS_INTERVENTION,
    DEPRESSION_SUPPORT,
    RELATIONSHIP_SUPPORT,
    WORK_STRESS,
    follow_up_questions,
    suggested_actions,
)


@dataclass(frozen=True)
class PatternRule:
    """One static trigger-to-response mapping.

    Immutable; built once at import. Optional follow-ups and actions
    override the guidance tables; None means "use the table".
    """
    intervention: str
    technique: str
    trigger: Pattern
    responses: Tuple[str, ...]
    personality: str = "empathetic"
    honor_preferred_personality: bool = True
    risk_responses: Dict[RiskLevel, Tuple[str, ...]] = field(default_factory=dict)
    follow_up_questions: Optional[Tuple[str, ...]] = None
    suggested_actions: Optional[Tuple[str, ...]] = None
    coping_category: Optional[str] = None

    def __post_init__(self):
        if not self.responses:
            raise ValueError(f"Pattern rule {self.intervention!r} has an empty response pool")
        for level, pool in self.risk_responses.items():
            if not pool:
                raise ValueError(
                    f"Pattern rule {self.intervention!r} has an empty {level.value} pool"
                )

    def matches(self, message: str) -> bool:
        return bool(self.trigger.search(message))

    def pool_for(self, risk_level: RiskLevel) -> Tuple[str, ...]:
        """Response pool for a tier; the default pool when no tier pool exists."""
        return self.risk_responses.get(risk_level, self.responses)

    def personality_for(self, preferred: Optional[str]) -> str:
        if self.honor_preferred_personality and preferred:
            return preferred
        return self.personality

    def follow_ups(self) -> Tuple[str, ...]:
        if self.follow_up_questions:
            return self.follow_up_questions
        return follow_up_questions(self.intervention)

    def actions(self, risk_level: RiskLevel) -> Tuple[str, ...]:
        """Suggested actions; crisis sets always win at MEDIUM and HIGH."""
        if risk_level == RiskLevel.LOW and self.suggested_actions:
            return self.suggested_actions
        return suggested_actions(self.intervention, risk_level)


def _trigger(*alternatives: str) -> Pattern:
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE)


# ==========================================================================
# RESPONSE POOLS
# ==========================================================================

CRISIS_HIGH_RESPONSES = (
    "I'm extremely concerned about you right now. Your safety is the most important thing. "
    "Please call 988 (Suicide & Crisis Lifeline) immediately or go to your nearest emergency room. "
    "You matter, and there are people who want to help you right now.",
    "This sounds like a crisis, and I want to make sure you're safe. Please call 988 or emergency "
    "services (911), or go to the nearest emergency room right now. You can also text HOME to 741741. "
    "Can you tell me if you're in a safe place?",
    "I hear how much pain you're in, and I'm worried about your immediate safety. Please don't go "
    "through this alone - call 988 or go to the nearest emergency room. Your life has value, and help "
    "is available right now.",
)

CRISIS_MEDIUM_RESPONSES = (
    "I'm really concerned about what you're sharing. These thoughts can feel overwhelming, but you "
    "don't have to face them alone. Please consider calling 988 (Suicide & Crisis Lifeline) to talk to "
    "someone right now. How can we get you some immediate support?",
    "Thank you for trusting me with something so serious. What you're feeling is a sign of deep "
    "emotional pain, not that ending your life is the answer. Please reach out to the Crisis Text Line "
    "(text HOME to 741741) or call 988. Are you somewhere safe right now?",
    "I can hear how much you're struggling. These thoughts are scary, but they're also a signal that "
    "you need support right now. Please contact 988 or your local crisis line. You deserve care and "
    "help through this difficult time.",
)

CRISIS_LOW_RESPONSES = (
    "I'm glad you felt comfortable sharing these difficult thoughts with me. Even passing thoughts "
    "about not wanting to be here matter. Have you considered talking to a mental health professional "
    "about these feelings?",
    "Thank you for being open about such a difficult topic. Sometimes when life feels overwhelming, "
    "these thoughts can surface. What support do you have available to you right now?",
    "It takes courage to talk about these kinds of thoughts. While they might feel manageable right "
    "now, it's important to have support. Do you have a therapist or counselor you can speak with?",
)

DEPRESSION_RESPONSES = (
    "I can really hear the heaviness in what you're sharing. Depression can make everything feel "
    "impossible, but you're not alone in this. What's one tiny thing you could do today just to take "
    "care of yourself?",
    "Thank you for sharing how you're feeling. Depression lies to us and tells us we're worthless, but "
    "that's not the truth. You have value, and these feelings will pass. What's something that used to "
    "bring you even small moments of comfort?",
    "I hear you, and reaching out like this shows real strength. Depression can make us feel "
    "disconnected from everything we used to enjoy. What would taking care of yourself look like "
    "today, even in the smallest way?",
    "When we're depressed, our brain focuses on the negatives. Let's gently challenge that. Can you "
    "think of one person who cares about you, or one thing you got through recently, even something "
    "small?",
)

ANXIETY_RESPONSES = (
    "I can sense how anxious you're feeling right now. Let's try to ground you in this moment. Can you "
    "take a slow breath with me and tell me 5 things you can see around you right now?",
    "Anxiety can make our minds race with worst-case scenarios. Let's slow down and challenge some of "
    "those thoughts. What evidence do you have that your worry will actually happen? What's a more "
    "realistic outcome?",
    "I understand how overwhelming anxiety can feel. Your body is trying to protect you, but sometimes "
    "it goes into overdrive. Let's try 4-7-8 breathing: breathe in for 4, hold for 7, exhale for 8. "
    "Want to try it together?",
    "Anxiety is your brain trying to protect you, but sometimes it's overactive. What specific "
    "situation is triggering this? Let's break it down into smaller, manageable parts.",
)

RELATIONSHIP_RESPONSES = (
    "Relationships can be one of our greatest sources of both joy and pain. I hear that you're going "
    "through something difficult. What aspect of this situation feels most challenging for you right "
    "now?",
    "Thank you for sharing what's happening in your relationship. Conflicts and challenges are normal, "
    "even in healthy relationships. What kind of support would be most helpful - talking through your "
    "feelings, exploring solutions, or just having someone listen?",
    "I can sense this relationship situation is really affecting you. Sometimes when we're in the "
    "middle of relationship stress, it's hard to see clearly. What would you tell a good friend who "
    "came to you with this same situation?",
)

WORK_STRESS_RESPONSES = (
    "Work stress can really take a toll on our mental health. It sounds like things have been "
    "particularly challenging lately. What aspect of work is causing you the most stress right now?",
    "I hear how overwhelming work has become. When we're stressed at work, it often spills over into "
    "every other area of our life. What boundaries could you set to protect your well-being?",
    "Workplace stress is so common, but that doesn't make it any less difficult. Have you been able to "
    "take breaks during your day, or has it been non-stop pressure?",
)

ANGER_RESPONSES = (
    "I can sense your frustration. Anger is often a secondary emotion covering hurt, fear, or "
    "disappointment. What do you think might be underneath this anger?",
    "Let's pause and use the STOP technique: Stop, Take a breath, Observe your thoughts and feelings, "
    "Proceed mindfully. What would responding, rather than reacting, look like here?",
    "Anger gives us energy for action, but we want to channel it productively. What boundary needs to "
    "be set? What problem needs solving?",
    "It sounds like something important to you feels threatened or violated. What values or needs "
    "aren't being met in this situation?",
)

COGNITIVE_RESPONSES = (
    "I notice some all-or-nothing language. Let's reframe it: instead of 'I can't', try 'I haven't "
    "figured out how yet.' Instead of 'It's impossible', try 'It's challenging, but there may be "
    "another approach.'",
    "Those thoughts sound really overwhelming. Let's examine the evidence: what facts support this "
    "thought, and what facts challenge it? What would you tell a good friend in this exact situation?",
    "When we feel stuck, our thinking narrows. Let's brainstorm. What are three different approaches "
    "you could try, even if they seem unlikely to work?",
    "Perfectionist thinking can paralyze us. What would 'good enough' look like here? Sometimes "
    "imperfect action is better than no action at all.",
)

LONELINESS_RESPONSES = (
    "Loneliness is painful, and it's brave of you to acknowledge it. Connection starts with small "
    "steps. Could you send a text to an acquaintance or join an online community around something you "
    "enjoy?",
    "Feeling alone doesn't mean you are alone. Sometimes we feel disconnected even around people. What "
    "kind of connection are you craving - someone to talk to, do things with, or just feel understood "
    "by?",
    "Loneliness often makes us feel like we're the only ones struggling, but many people feel this "
    "way. What's one way you could reach out today?",
)


# ==========================================================================
# RULES - evaluated in this order; crisis first
# ==========================================================================

PATTERN_RULES: Tuple[PatternRule, ...] = (
    PatternRule(
        intervention=CRISIS_INTERVENTION,
        technique="Crisis Intervention",
        trigger=_trigger(*CRISIS_PHRASES),
        responses=CRISIS_LOW_RESPONSES,
        risk_responses={
            RiskLevel.HIGH: CRISIS_HIGH_RESPONSES,
            RiskLevel.MEDIUM: CRISIS_MEDIUM_RESPONSES,
        },
        personality="empathetic",
        honor_preferred_personality=False,
    ),
    PatternRule(
        intervention=DEPRESSION_SUPPORT,
        technique="Depression Support",
        trigger=_trigger(
            r"sad", r"depressed", r"depression", r"down", r"hopeless", r"worthless",
            r"empty", r"numb", r"no energy", r"can[’']?t get out of bed",
        ),
        responses=DEPRESSION_RESPONSES,
        personality="empathetic",
        coping_category="depression",
    ),
    PatternRule(
        intervention=ANXIETY_MANAGEMENT,
        technique="Anxiety Management",
        trigger=_trigger(
            r"anxiety", r"anxious", r"worried", r"stress(?:ed)?", r"panic", r"nervous",
            r"overwhelmed", r"can[’']?t breathe",
        ),
        responses=ANXIETY_RESPONSES,
        personality="mindful",
        coping_category="anxiety",
    ),
    PatternRule(
        intervention=RELATIONSHIP_SUPPORT,
        technique="Relationship Support",
        trigger=_trigger(
            r"relationship", r"partner", r"boyfriend", r"girlfriend", r"husband", r"wife",
            r"marriage", r"divorce", r"breakup", r"broke up", r"fight", r"argument",
        ),
        responses=RELATIONSHIP_RESPONSES,
        personality="practical",
    ),
    PatternRule(
        intervention=WORK_STRESS,
        technique="Work Stress",
        trigger=_trigger(
            r"work", r"job", r"boss", r"career", r"deadline", r"fired", r"quit",
            r"colleague", r"workplace", r"burnout", r"burned out", r"overworked",
        ),
        responses=WORK_STRESS_RESPONSES,
        personality="practical",
        coping_category="stress",
    ),
    PatternRule(
        intervention=ANGER_MANAGEMENT,
        technique="Anger Management",
        trigger=_trigger(
            r"angry", r"frustrated", r"mad", r"irritated", r"furious", r"rage",
        ),
        responses=ANGER_RESPONSES,
        personality="practical",
        coping_category="anger",
    ),
    PatternRule(
        intervention=COGNITIVE_RESTRUCTURING,
        technique="Cognitive Restructuring",
        trigger=_trigger(
            r"can[’']?t do (?:it|anything)", r"impossible", r"won[’']?t work", r"give up",
            r"pointless", r"always fail", r"never (?:get|do) anything right",
        ),
        responses=COGNITIVE_RESPONSES,
        personality="practical",
    ),
    PatternRule(
        intervention=CONNECTION_BUILDING,
        technique="Connection Building",
        trigger=_trigger(
            r"lonely", r"alone", r"isolated", r"no friends", r"nobody",
        ),
        responses=LONELINESS_RESPONSES,
        personality="empathetic",
    ),
)


def select_pattern(
    message: str,
    rules: Tuple[PatternRule, ...] = PATTERN_RULES,
) -> Optional[PatternRule]:
    """Return the first rule whose trigger matches, or None.

    Args:
        message: Raw message text
        rules: Rules in priority order

    Returns:
        Matching PatternRule, or None when no rule matches
    """
    if not isinstance(message, str) or not message:
        return None
    for rule in rules:
        if rule.matches(message):
            return rule
    return None
