"""Chat user identifiers in logs.

Routing, fallback and history events are keyed by the chat user so a
session can be followed across log lines. The raw user id never goes
into a record: user_log_id() turns it into a salted digest.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32

# Placeholders for the user_id_hash field when no digest can be produced
ANONYMOUS_USER = "anonymous"
UNSALTED_USER = "unconfigured"

_PII_SALT: Optional[str] = None


def configure_pii_salt(salt: str) -> None:
    """Set the salt for user id digests.

    ChatService calls this at start-up from PII_HASH_SALT.

    Raises:
        ValueError: If salt is empty or shorter than MIN_SALT_LENGTH
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_CONFIGURATION_FAILED",
            extra={"reason": "Salt too short or empty", "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def is_pii_salt_configured() -> bool:
    return _PII_SALT is not None


def hash_pii(value: str) -> str:
    """64-char hex SHA-256 of salt + value.

    Raises:
        RuntimeError: If the salt has not been configured
    """
    if _PII_SALT is None:
        logger.critical(
            "PII_HASH_FAILED",
            extra={"reason": "Salt not configured", "action": "call configure_pii_salt()"}
        )
        raise RuntimeError("PII salt not configured. Call configure_pii_salt() first.")

    return hashlib.sha256(f"{_PII_SALT}{value}".encode()).hexdigest()


def user_log_id(user_id: Optional[str]) -> str:
    """Value for the user_id_hash log field of one chat request.

    Requests without a user id are logged as ANONYMOUS_USER. Without a
    salt the id is logged as UNSALTED_USER rather than raising, so a
    misconfigured deployment still answers the user.
    """
    if not user_id:
        return ANONYMOUS_USER
    if _PII_SALT is None:
        return UNSALTED_USER
    return hash_pii(user_id)
