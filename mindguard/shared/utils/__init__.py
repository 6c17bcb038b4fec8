"""Shared utilities for the MindGuard chat core."""
from .pii import configure_pii_salt, hash_pii, is_pii_salt_configured, user_log_id

__all__ = ["configure_pii_salt", "hash_pii", "is_pii_salt_configured", "user_log_id"]
