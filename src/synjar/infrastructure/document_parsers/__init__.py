"""Document parsers: validate uploads and extract text."""

from synjar.infrastructure.document_parsers.registry import (
    RegistryFileParser,
    parse_file,
    supported_extensions,
    validate_file,
)

__all__ = ["RegistryFileParser", "parse_file", "supported_extensions", "validate_file"]
