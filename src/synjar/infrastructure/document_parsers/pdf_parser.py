"""Parser for PDF."""

import io

from pypdf import PdfReader

from synjar.application.ports.file_parser import ParseResult


def _map_metadata(reader: PdfReader) -> dict[str, str]:
    """Pick title and author from the PDF info dictionary."""
    result: dict[str, str] = {}
    meta = reader.metadata
    if not meta:
        return result
    for key, name in (("/Title", "title"), ("/Author", "author")):
        value = meta.get(key)
        if value:
            result[name] = str(value).strip()
    return {k: v for k, v in result.items() if v}


def parse_pdf(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text and metadata from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(data))
        parts = [t for t in (page.extract_text() for page in reader.pages) if t]
    except Exception as e:
        raise ValueError(f"Invalid or corrupted PDF: {e}") from e
    metadata = _map_metadata(reader)
    metadata["page_count"] = str(len(reader.pages))
    return ParseResult(text="\n\n".join(parts), metadata=metadata)
