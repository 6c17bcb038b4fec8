"""Local responder - builds a response without any remote call.

Order of strategies:
1. First matching pattern rule (crisis rule pool chosen by risk tier)
2. Sentiment branch: very negative -> empathetic plus a resource or
   self-care line, very positive -> reinforcement, mildly negative -> gentle
3. Continuity check-in when recent history carries an anxiety or low-mood
   theme, or an occasional wellness check-in once the conversation runs long
4. Adaptive default
"""
import logging
import time
from typing import Optional, Sequence, Tuple

from mindguard.shared.models import (
    ConversationTurn,
    ResponseMetadata,
    ResponseResult,
    RiskLevel,
    UserContext,
    history_contents,
)
from .guidance import (
    ANXIETY_MANAGEMENT,
    DEPRESSION_SUPPORT,
    EMOTIONAL_SUPPORT,
    GENERAL_SUPPORT,
    POSITIVE_REINFORCEMENT,
    follow_up_questions,
    suggested_actions,
)
from .patterns import PATTERN_RULES, PatternRule, select_pattern
from .personalization import RandomSource, default_random_source, insert_name, personalize, pick
from .templates import (
    ANXIETY_CHECK_IN,
    ANXIETY_THEME_CUES,
    COPING_STRATEGIES,
    COPING_TIP_PREFIXES,
    COPING_TIP_THRESHOLD,
    DEFAULT_RESPONSES,
    EMPATHETIC_RESPONSES,
    LOW_MOOD_CHECK_IN,
    LOW_MOOD_THEME_CUES,
    MENTAL_HEALTH_RESOURCES,
    MILD_NEGATIVE_RESPONSES,
    MILDLY_NEGATIVE_SENTIMENT,
    REINFORCEMENT_RESPONSES,
    RESOURCE_LINE_THRESHOLD,
    SELF_CARE_STRATEGIES,
    VERY_NEGATIVE_SENTIMENT,
    VERY_POSITIVE_SENTIMENT,
    WELLNESS_CHECK_INS,
    WELLNESS_CHECK_IN_MIN_TURNS,
    WELLNESS_CHECK_IN_TEMPLATE,
    WELLNESS_CHECK_IN_THRESHOLD,
)

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 6


class LocalResponder:
    """Rule-based responder used when no remote endpoint is configured."""

    def __init__(
        self,
        rules: Tuple[PatternRule, ...] = PATTERN_RULES,
        rng: Optional[RandomSource] = None,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ):
        """Initialize responder.

        Args:
            rules: Pattern rules in priority order
            rng: Randomness source for pool picks and flourishes
            history_window: How many recent turns the continuity check reads
        """
        self.rules = rules
        self.rng = rng or default_random_source()
        self.history_window = history_window

    def respond(
        self,
        message: str,
        user_context: UserContext,
        risk_level: RiskLevel,
        sentiment: Optional[float] = None,
        history: Optional[Sequence[ConversationTurn]] = None,
    ) -> ResponseResult:
        """Build a response for a classified message.

        Args:
            message: Raw message text
            user_context: Caller-supplied context
            risk_level: Tier already computed by the safety service
            sentiment: Optional precomputed sentiment score
            history: Recent turns, oldest first

        Returns:
            ResponseResult whose risk level equals risk_level
        """
        start_time = time.perf_counter()

        rule = select_pattern(message, self.rules)
        if rule is not None:
            text = self._rule_response(rule, user_context, risk_level)
            logger.info(
                "LOCAL_PATTERN_MATCHED",
                extra={"intervention": rule.intervention, "risk_level": risk_level.value}
            )
            return self._result(
                text,
                personality=rule.personality_for(user_context.preferred_personality),
                intervention=rule.intervention,
                risk_level=risk_level,
                follow_ups=rule.follow_ups(),
                actions=rule.actions(risk_level),
                start_time=start_time,
            )

        if sentiment is not None:
            if sentiment < VERY_NEGATIVE_SENTIMENT:
                return self._template_result(
                    EMPATHETIC_RESPONSES, EMOTIONAL_SUPPORT, "empathetic",
                    user_context, risk_level, start_time,
                    with_support_line=True,
                )
            if sentiment > VERY_POSITIVE_SENTIMENT:
                return self._template_result(
                    REINFORCEMENT_RESPONSES, POSITIVE_REINFORCEMENT, "empathetic",
                    user_context, risk_level, start_time,
                )
            if sentiment < MILDLY_NEGATIVE_SENTIMENT:
                return self._template_result(
                    MILD_NEGATIVE_RESPONSES, EMOTIONAL_SUPPORT, "empathetic",
                    user_context, risk_level, start_time,
                )

        continuity = self._continuity_response(history)
        if continuity is not None:
            text, intervention, personality = continuity
            return self._result(
                insert_name(text, user_context.name),
                personality=user_context.preferred_personality or personality,
                intervention=intervention,
                risk_level=risk_level,
                follow_ups=follow_up_questions(intervention),
                actions=suggested_actions(intervention, risk_level),
                start_time=start_time,
            )

        return self._template_result(
            DEFAULT_RESPONSES, GENERAL_SUPPORT,
            user_context.preferred_personality or "adaptive",
            user_context, risk_level, start_time,
        )

    def _rule_response(
        self,
        rule: PatternRule,
        user_context: UserContext,
        risk_level: RiskLevel,
    ) -> str:
        text = pick(rule.pool_for(risk_level), self.rng)

        if rule.coping_category and risk_level != RiskLevel.HIGH:
            if self.rng.random() > COPING_TIP_THRESHOLD:
                tip = pick(COPING_STRATEGIES[rule.coping_category], self.rng)
                prefix = COPING_TIP_PREFIXES.get(rule.coping_category, "Try this")
                text += f"\n\n{prefix}: {tip}"

        return personalize(text, user_context, self.rng, risk_level)

    def _continuity_response(
        self,
        history: Optional[Sequence[ConversationTurn]],
    ) -> Optional[Tuple[str, str, str]]:
        """Check-in text for a theme carried over from recent turns.

        Themes are read from the last history_window turns only; the
        wellness check-in counts the whole history.
        """
        if not history:
            return None

        if self.history_window > 0:
            window = tuple(history)[-self.history_window:]
            recent = " ".join(history_contents(window)).lower()

            if any(cue in recent for cue in ANXIETY_THEME_CUES):
                tip = pick(COPING_STRATEGIES["anxiety"], self.rng)
                return f"{ANXIETY_CHECK_IN}\n\nRemember: {tip}", ANXIETY_MANAGEMENT, "mindful"

            if any(cue in recent for cue in LOW_MOOD_THEME_CUES):
                check_in = pick(WELLNESS_CHECK_INS, self.rng)
                return f"{LOW_MOOD_CHECK_IN}\n\n{check_in}", DEPRESSION_SUPPORT, "empathetic"

        if len(history) >= WELLNESS_CHECK_IN_MIN_TURNS:
            if self.rng.random() > WELLNESS_CHECK_IN_THRESHOLD:
                check_in = pick(WELLNESS_CHECK_INS, self.rng)
                text = WELLNESS_CHECK_IN_TEMPLATE.format(check_in=check_in)
                return text, GENERAL_SUPPORT, "adaptive"

        return None

    def _support_line(self) -> str:
        """A crisis resource or a self-care strategy, chosen by one draw."""
        if self.rng.random() > RESOURCE_LINE_THRESHOLD:
            return f"Remember: {pick(MENTAL_HEALTH_RESOURCES, self.rng)}"
        return f"Try this: {pick(SELF_CARE_STRATEGIES, self.rng)}"

    def _template_result(
        self,
        pool: Tuple[str, ...],
        intervention: str,
        personality: str,
        user_context: UserContext,
        risk_level: RiskLevel,
        start_time: float,
        with_support_line: bool = False,
    ) -> ResponseResult:
        text = insert_name(pick(pool, self.rng), user_context.name)
        if with_support_line:
            text += f"\n\n{self._support_line()}"
        return self._result(
            text,
            personality=personality,
            intervention=intervention,
            risk_level=risk_level,
            follow_ups=follow_up_questions(intervention),
            actions=suggested_actions(intervention, risk_level),
            start_time=start_time,
        )

    @staticmethod
    def _result(
        text: str,
        personality: str,
        intervention: str,
        risk_level: RiskLevel,
        follow_ups: Tuple[str, ...],
        actions: Tuple[str, ...],
        start_time: float,
    ) -> ResponseResult:
        # Non-fallback paths never report 0 ms; 0 is reserved for the fallback
        elapsed_ms = max(1, int((time.perf_counter() - start_time) * 1000))
        return ResponseResult(
            response=text,
            metadata=ResponseMetadata(
                personality=personality,
                intervention=intervention,
                risk_level=risk_level,
                follow_up_questions=tuple(follow_ups),
                suggested_actions=tuple(actions),
                processing_time=elapsed_ms,
            ),
        )
