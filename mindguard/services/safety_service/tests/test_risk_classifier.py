"""Tests for RiskClassifier - crisis detection must never be silently lost.

Covers every layer, the ordering guarantees between them, and malformed
input that must classify as LOW instead of raising.
"""
import logging

import pytest

from mindguard.shared.models import RiskLevel
from mindguard.shared.utils import configure_pii_salt
from mindguard.services.safety_service import RiskClassifier, SafetyConfig, classify
from mindguard.services.safety_service.classifier import (
    LAYER_IMMEDIACY,
    LAYER_KEYWORD,
    LAYER_NONE,
    LAYER_SENTIMENT,
    message_fingerprint,
)


@pytest.fixture(autouse=True)
def setup_pii_salt():
    """Configure PII salt before each test."""
    configure_pii_salt("test_salt_that_is_at_least_32_characters_long")


@pytest.fixture
def classifier():
    return RiskClassifier()


class TestHighRisk:
    """Intent plus immediacy must always be HIGH."""

    @pytest.mark.parametrize("text", [
        "I want to end it all tonight",
        "I'm going to kill myself right now",
        "I've written a note and I'm ready to die",
        "thinking about suicide, I have the pills here",
        "I plan to take my life this weekend",
        "I WANT TO END IT ALL TONIGHT",
    ])
    def test_intent_with_immediacy_is_high(self, classifier, text):
        assert classifier.classify(text) == RiskLevel.HIGH

    def test_high_ignores_positive_sentiment(self, classifier):
        assert classifier.classify("I want to end it all tonight", 1.0) == RiskLevel.HIGH

    def test_assessment_reports_layer_and_terms(self, classifier):
        assessment = classifier.assess("I want to end it all tonight")
        assert assessment.layer == LAYER_IMMEDIACY
        assert "end it all" in assessment.matched_terms
        assert "tonight" in assessment.matched_terms

    def test_high_logs_critical(self, classifier, caplog):
        with caplog.at_level(logging.INFO):
            classifier.classify("I want to end it all tonight")
        records = [r for r in caplog.records if r.getMessage() == "RISK_HIGH_DETECTED"]
        assert records and records[0].levelno == logging.CRITICAL

    def test_log_never_contains_message_text(self, classifier, caplog):
        with caplog.at_level(logging.INFO):
            classifier.classify("I want to end it all tonight")
        for record in caplog.records:
            assert "end it all" not in record.getMessage()
            assert "end it all" not in str(record.__dict__.get("text_hash", ""))

    def test_log_carries_message_fingerprint(self, classifier, caplog):
        text = "I want to end it all tonight"
        with caplog.at_level(logging.INFO):
            classifier.classify(text)
        records = [r for r in caplog.records if r.getMessage() == "RISK_HIGH_DETECTED"]
        assert records[0].text_hash == message_fingerprint(text)
        assert len(records[0].text_hash) == 16
        assert message_fingerprint(text) != message_fingerprint(text + "!")


class TestMediumRisk:
    """Intent alone or hopelessness language is at least MEDIUM."""

    def test_hopelessness_is_medium(self, classifier):
        assert classifier.classify("I feel hopeless and worthless") == RiskLevel.MEDIUM

    def test_intent_without_immediacy_is_medium(self, classifier):
        assert classifier.classify("Sometimes I think about suicide") == RiskLevel.MEDIUM

    @pytest.mark.parametrize("sentiment", [None, -1.0, 0.0, 0.5, 1.0])
    def test_high_risk_keyword_is_at_least_medium_for_any_sentiment(self, classifier, sentiment):
        assert classifier.classify("I want to kill myself", sentiment) >= RiskLevel.MEDIUM

    def test_self_harm_phrases(self, classifier):
        assert classifier.classify("I keep cutting myself") == RiskLevel.MEDIUM
        assert classifier.classify("I can't go on like this") == RiskLevel.MEDIUM
        assert classifier.classify("I don't want to be here anymore") == RiskLevel.MEDIUM

    def test_keyword_layer_reported(self, classifier):
        assessment = classifier.assess("I feel hopeless")
        assert assessment.layer == LAYER_KEYWORD
        assert assessment.matched_terms == ("hopeless",)

    def test_very_negative_sentiment_escalates(self, classifier):
        assessment = classifier.assess("rough day", -0.8)
        assert assessment.risk_level == RiskLevel.MEDIUM
        assert assessment.layer == LAYER_SENTIMENT

    def test_threshold_is_strict(self, classifier):
        assert classifier.classify("rough day", -0.7) == RiskLevel.LOW

    def test_sentiment_escalation_can_be_disabled(self):
        classifier = RiskClassifier(config=SafetyConfig(sentiment_escalation_enabled=False))
        assert classifier.classify("rough day", -0.9) == RiskLevel.LOW


class TestLowRisk:
    """Ordinary messages and malformed input are LOW."""

    def test_ordinary_stress_is_low(self, classifier):
        assert classifier.classify("I had a difficult day at work today", -0.2) == RiskLevel.LOW

    def test_immediacy_alone_is_low(self, classifier):
        assert classifier.classify("I'm going to the bridge club tonight") == RiskLevel.LOW

    def test_no_match_no_sentiment_is_low(self, classifier):
        assessment = classifier.assess("Just checking in")
        assert assessment.risk_level == RiskLevel.LOW
        assert assessment.layer == LAYER_NONE

    @pytest.mark.parametrize("message", ["", "   ", None, 42, ["suicide"]])
    def test_malformed_message_is_low(self, classifier, message):
        assert classifier.classify(message) == RiskLevel.LOW

    @pytest.mark.parametrize("sentiment", [float("nan"), float("-inf"), "bad", True])
    def test_unusable_sentiment_is_ignored(self, classifier, sentiment):
        assert classifier.classify("rough day", sentiment) == RiskLevel.LOW

    def test_word_boundaries(self, classifier):
        assert classifier.classify("The pointless meeting ran late") == RiskLevel.LOW


class TestDeterminism:

    def test_repeated_calls_agree(self, classifier):
        text = "I feel hopeless, maybe I'll end it all tomorrow"
        results = {classifier.classify(text, -0.3) for _ in range(20)}
        assert results == {RiskLevel.HIGH}

    def test_module_classify_matches_instance(self, classifier):
        text = "nobody would miss me"
        assert classify(text) == classifier.classify(text) == RiskLevel.MEDIUM

    def test_to_dict(self, classifier):
        data = classifier.assess("I feel hopeless", -0.5).to_dict()
        assert data == {
            "risk_level": "medium",
            "layer": "keyword",
            "matched_terms": ["hopeless"],
            "sentiment": -0.5,
        }
