"""Document tag normalization and value object."""

import re
from dataclasses import dataclass

from synjar.domain.exceptions import ValidationError

MAX_TAG_LENGTH = 50

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def normalize_tag(raw: str) -> str:
    """Lowercase, trim, and replace every char outside [a-z0-9-] with '-'."""
    return _DISALLOWED.sub("-", raw.lower().strip())


@dataclass(frozen=True)
class Tag:
    """Normalized, non-empty tag of bounded length."""

    value: str

    @classmethod
    def create(cls, raw: str) -> "Tag":
        normalized = normalize_tag(raw)
        if not normalized:
            raise ValidationError("Tag cannot be empty")
        if len(normalized) > MAX_TAG_LENGTH:
            raise ValidationError(f"Tag cannot exceed {MAX_TAG_LENGTH} characters")
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value
