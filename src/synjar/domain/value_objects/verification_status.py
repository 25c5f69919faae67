"""Document verification status."""

from enum import StrEnum


class VerificationStatus(StrEnum):
    """Whether a human reviewer has confirmed the document."""

    VERIFIED = "VERIFIED"
    UNVERIFIED = "UNVERIFIED"
