"""parsers/markdown_parser.py — Parse Markdown files into chapters."""

import re
from pathlib import Path

from models import Book
from parsers.base import build_book

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n", re.DOTALL)
HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)
INLINE_MARKUP_RE = re.compile(r"(\*\*|__|\*|`)(.+?)\1")
LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")


def _extract_frontmatter(content: str) -> tuple[dict, str]:
    """Split off a --- delimited key: value block. Returns (meta, body)."""
    m = FRONTMATTER_RE.match(content)
    if not m:
        return {}, content
    meta = {}
    for line in m.group(1).splitlines():
        key, sep, value = line.partition(":")
        if sep:
            meta[key.strip().lower()] = value.strip().strip("\"'")
    return meta, content[m.end():]


def _strip_markup(text: str) -> str:
    text = LINK_RE.sub(r"\1", text)
    text = INLINE_MARKUP_RE.sub(r"\2", text)
    return re.sub(r"^[ \t]*(?:#{1,6}|[-*+]|>|\d+\.)[ \t]+", "", text, flags=re.MULTILINE)


def _split_by_headings(body: str) -> list[tuple[str, str]]:
    """
    Split on the shallowest heading level present. Deeper headings stay in the
    chapter text. Without headings the whole body is one chapter.
    """
    headings = list(HEADING_RE.finditer(body))
    if not headings:
        return [("Chapter 1", body)]

    level = min(len(m.group(1)) for m in headings)
    splits = [m for m in headings if len(m.group(1)) == level]

    sections = []
    preamble = body[:splits[0].start()]
    if preamble.strip():
        sections.append(("Introduction", preamble))
    for m, nxt in zip(splits, splits[1:] + [None]):
        end = nxt.start() if nxt else len(body)
        sections.append((m.group(2), body[m.end():end]))
    return sections


def parse_markdown(file_path: Path) -> Book:
    """Parse a Markdown file into chapters, splitting on headings."""
    file_path = Path(file_path)
    content = file_path.read_text(encoding="utf-8-sig")
    frontmatter, body = _extract_frontmatter(content)

    title = frontmatter.get("title", file_path.stem.replace("_", " ").replace("-", " ").title())
    author = frontmatter.get("author", "Unknown")

    sections = [(heading, _strip_markup(text)) for heading, text in _split_by_headings(body)]
    return build_book(title, author, sections, "markdown")


def parse_plain_text(file_path: Path) -> Book:
    """A .txt file is a single chapter titled after the file."""
    file_path = Path(file_path)
    title = file_path.stem.replace("_", " ").replace("-", " ").title()
    return build_book(title, "Unknown", [(title, file_path.read_text(encoding="utf-8-sig"))], "text")
