"""Object key naming for uploaded files."""

import re
from uuid import uuid4

_UNSAFE = re.compile(r"[^a-z0-9.-]")
_DASHES = re.compile(r"-+")


def sanitize_filename(filename: str) -> str:
    """Lowercase and keep only [a-z0-9.-], collapsing runs of dashes."""
    return _DASHES.sub("-", _UNSAFE.sub("-", filename.lower()))


def build_object_key(filename: str) -> str:
    """``<uuid4>-<sanitized filename>``, unique per upload."""
    return f"{uuid4()}-{sanitize_filename(filename)}"
