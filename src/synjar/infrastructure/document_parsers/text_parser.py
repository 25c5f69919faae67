"""Parser for plain text and markdown."""

from synjar.application.ports.file_parser import ParseResult


def parse_text(data: bytes, filename: str | None = None) -> ParseResult:
    """Treat as UTF-8 text, falling back to cp1251 and then to replacement chars."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            text = data.decode("cp1251")
        except UnicodeDecodeError:
            text = data.decode("utf-8", errors="replace")
    return ParseResult(text=text.lstrip("\ufeff"))


def parse_md(data: bytes, filename: str | None = None) -> ParseResult:
    """Markdown - stored as-is; the first level-1 heading becomes the title."""
    result = parse_text(data, filename)
    for line in result.text.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            result.metadata["title"] = stripped[2:].strip()
            break
    return result
