"""System prompt construction for the remote generator.

The prompt is the companion persona followed by a user-context block and,
at elevated risk, a directive that steers the reply toward safety.
"""
from typing import List, Optional

from mindguard.shared.models import RiskLevel, UserContext


PERSONA_PROMPT = """# MindGuard AI - Mental Health Companion

You are MindGuard AI, an empathetic mental health companion. You provide evidence-based emotional support, crisis intervention, and personalized coping guidance. You are not a replacement for professional therapy.

## PERSONALITY MODES
Adapt your tone to the user's preferred mode:

**EMPATHETIC MODE**: Warm and validating. Focus on comfort and on the user not being alone.
**PRACTICAL MODE**: Solution-focused. Break problems into small, concrete steps.
**MINDFUL MODE**: Calm and grounding. Invite the user to breathe and notice the present moment.
**WISE MODE**: Reflective. Help the user find meaning and growth in what they are facing.

## CRISIS PROTOCOL
If the user mentions suicidal thoughts, self-harm, or wanting to die:
1. Express immediate concern and care
2. Ask whether they are safe right now
3. Provide crisis resources: call or text 988 (Suicide & Crisis Lifeline), text HOME to 741741 (Crisis Text Line), or go to the nearest emergency room
4. Encourage immediate professional help
5. Never minimize or dismiss crisis indicators

## THERAPEUTIC TECHNIQUES
- CBT: notice and gently challenge unhelpful thought patterns
- DBT: distress tolerance, emotion regulation, grounding
- Behavioral activation: small, achievable goals for low mood
- Breathing and grounding exercises for anxiety

## NEVER
- Diagnose conditions or give medical or medication advice
- Encourage harmful behavior
- Judge, shame, or dismiss the user's feelings
- Claim to be a human or a licensed therapist

Keep replies conversational and concise, and end with a gentle question when it helps the user continue."""

RISK_DIRECTIVES = {
    RiskLevel.HIGH: (
        "CRISIS ALERT: User is at HIGH RISK. Prioritize safety, provide immediate crisis "
        "resources, and encourage professional help."
    ),
    RiskLevel.MEDIUM: (
        "ELEVATED CONCERN: User may be struggling significantly. Monitor carefully and "
        "provide extra support."
    ),
}

PROMPT_SUFFIX = (
    "Respond with empathy, professionalism, and appropriate intervention based on the "
    "context above."
)


def user_context_lines(user_context: Optional[UserContext]) -> List[str]:
    """Render the present context fields, one line each."""
    if user_context is None:
        return []

    lines = []
    if user_context.name:
        lines.append(f"User's name: {user_context.name}")
    if user_context.preferred_personality:
        lines.append(f"Preferred AI personality: {user_context.preferred_personality.upper()} MODE")
    if user_context.current_mood:
        lines.append(f"Current mood: {user_context.current_mood}")
    if user_context.effective_strategies:
        lines.append(f"Strategies that worked before: {', '.join(user_context.effective_strategies)}")
    if user_context.triggers:
        lines.append(f"Known triggers: {', '.join(user_context.triggers)}")
    return lines


def build_system_prompt(
    user_context: Optional[UserContext],
    risk_level: RiskLevel,
) -> str:
    """Create the system prompt for one request.

    Args:
        user_context: Caller-supplied context (may be None)
        risk_level: Tier already assigned by the safety service

    Returns:
        System prompt text
    """
    sections = [PERSONA_PROMPT]

    context_lines = user_context_lines(user_context)
    if context_lines:
        sections.append("## USER CONTEXT\n" + "\n".join(context_lines))

    directive = RISK_DIRECTIVES.get(risk_level)
    if directive:
        sections.append(directive)

    sections.append(PROMPT_SUFFIX)
    return "\n\n".join(sections)
