"""Safety Service: deterministic crisis-risk classification.

Every chat message is classified here BEFORE any response strategy runs.
The tier computed here is authoritative for the response metadata, even
when a remote generator is used.

Components:
- config.py: Risk patterns and sentiment threshold
- classifier.py: RiskClassifier with layered keyword/sentiment rules

Usage:
    from mindguard.services.safety_service import RiskClassifier
    classifier = RiskClassifier()
    tier = classifier.classify("I want to end it all tonight")
"""

from .classifier import RiskClassifier, RiskAssessment, classify, get_classifier
from .config import (
    SafetyConfig,
    RiskThresholds,
    HIGH_RISK_PATTERN,
    IMMEDIACY_PATTERN,
    MEDIUM_RISK_PATTERN,
)

__all__ = [
    "RiskClassifier",
    "RiskAssessment",
    "classify",
    "get_classifier",
    "SafetyConfig",
    "RiskThresholds",
    "HIGH_RISK_PATTERN",
    "IMMEDIACY_PATTERN",
    "MEDIUM_RISK_PATTERN",
]
