"""parsers/ — Turn book files into plain-text chapters for the reader."""

from pathlib import Path

from models import Book

SUPPORTED_EXTENSIONS = {".epub", ".md", ".markdown", ".txt"}


def parse_file(file_path: Path) -> Book:
    """Dispatch to the appropriate parser based on file extension."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input not found: {file_path}")
    suffix = file_path.suffix.lower()

    if suffix == ".epub" or file_path.is_dir():
        from parsers.epub_parser import parse_epub
        return parse_epub(file_path)
    elif suffix in (".md", ".markdown"):
        from parsers.markdown_parser import parse_markdown
        return parse_markdown(file_path)
    elif suffix == ".txt":
        from parsers.markdown_parser import parse_plain_text
        return parse_plain_text(file_path)
    else:
        raise ValueError(
            f"Unsupported file format: '{suffix}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )
