"""Domain value objects."""

from synjar.domain.value_objects.chunking_strategy import ChunkingStrategy
from synjar.domain.value_objects.content_type import ContentType
from synjar.domain.value_objects.processing_status import ProcessingStatus
from synjar.domain.value_objects.tag import MAX_TAG_LENGTH, Tag, normalize_tag
from synjar.domain.value_objects.verification_status import VerificationStatus

__all__ = [
    "MAX_TAG_LENGTH",
    "ChunkingStrategy",
    "ContentType",
    "ProcessingStatus",
    "Tag",
    "VerificationStatus",
    "normalize_tag",
]
