"""Registry: validate an upload and pick the parser by extension."""

from pathlib import Path

from synjar.application.ports.file_parser import ParseResult
from synjar.infrastructure.document_parsers.base import FormatParser
from synjar.infrastructure.document_parsers.docx_parser import parse_docx
from synjar.infrastructure.document_parsers.pdf_parser import parse_pdf
from synjar.infrastructure.document_parsers.text_parser import parse_md, parse_text

# extension (lower) -> parse function
_PARSERS_BY_EXT: dict[str, FormatParser] = {
    "txt": parse_text,
    "md": parse_md,
    "pdf": parse_pdf,
    "docx": parse_docx,
}

# extension -> MIME types a client may declare for it
_MIME_BY_EXT: dict[str, frozenset[str]] = {
    "txt": frozenset({"text/plain"}),
    "md": frozenset({"text/markdown", "text/x-markdown", "text/plain"}),
    "pdf": frozenset({"application/pdf"}),
    "docx": frozenset(
        {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
    ),
}

# Binary formats are checked by magic bytes; text files have none.
_MAGIC_BY_EXT: dict[str, bytes] = {
    "pdf": b"%PDF-",
    "docx": b"PK\x03\x04",
}

# Sent by browsers when they cannot tell.
_GENERIC_MIME = frozenset({"", "application/octet-stream"})


def _extension(filename: str) -> str:
    return Path(filename).suffix.lstrip(".").lower()


def validate_file(data: bytes, filename: str, mime_type: str | None = None) -> str:
    """Check extension, declared MIME type and magic bytes. Returns the extension."""
    ext = _extension(filename)
    if ext not in _PARSERS_BY_EXT:
        raise ValueError(f"File extension not allowed: {filename}")
    if not data:
        raise ValueError(f"File is empty: {filename}")
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime not in _GENERIC_MIME and mime not in _MIME_BY_EXT[ext]:
        raise ValueError(f"Declared type {mime} does not match file extension .{ext}")
    magic = _MAGIC_BY_EXT.get(ext)
    if magic is not None and not data.startswith(magic):
        raise ValueError(f"File content does not match declared type .{ext}")
    return ext


def parse_file(data: bytes, filename: str, mime_type: str | None = None) -> ParseResult:
    """Validate, then run the parser for the file's extension.

    Raises ValueError if the type is not allowed or parsing failed.
    """
    ext = validate_file(data, filename, mime_type)
    return _PARSERS_BY_EXT[ext](data, filename)


def supported_extensions() -> list[str]:
    """Return list of supported file extensions (e.g. for frontend accept attribute)."""
    return sorted(_PARSERS_BY_EXT.keys())


class RegistryFileParser:
    """FileParser port backed by the extension registry."""

    def parse(self, data: bytes, filename: str, mime_type: str | None = None) -> ParseResult:
        return parse_file(data, filename, mime_type)
