"""Hashing helpers for privacy-preserving lookup keys."""

import hashlib


def hash_email(email: str) -> str:
    """SHA-256 hex digest of the lowercased, trimmed email.

    Used as a lookup key so emails are not stored in plain text next to
    tenant data. Not for passwords.
    """
    normalized = email.lower().strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
