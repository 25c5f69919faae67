"""Parser for .docx (Office Open XML Word)."""

import io
from zipfile import BadZipFile

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError

from synjar.application.ports.file_parser import ParseResult


def parse_docx(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract paragraphs, table rows and core properties from .docx bytes."""
    try:
        doc = DocxDocument(io.BytesIO(data))
    except (PackageNotFoundError, BadZipFile, KeyError) as e:
        raise ValueError("Invalid or corrupted docx file") from e
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    tables_text: list[str] = []
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                tables_text.append(" ".join(cells))
    text = "\n\n".join(paragraphs)
    if tables_text:
        text += "\n\n" + "\n".join(tables_text)

    metadata: dict[str, str] = {}
    props = doc.core_properties
    if props.title:
        metadata["title"] = props.title.strip()
    if props.author:
        metadata["author"] = props.author.strip()
    return ParseResult(text=text, metadata={k: v for k, v in metadata.items() if v})
