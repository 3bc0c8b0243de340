"""parsers/base.py — Shared parser utilities."""

import html
import re

from models import Book, Chapter


def clean_text(text: str) -> str:
    """
    Normalize extracted text for reading. Curly quotes become ASCII so trailing
    punctuation is recognized by the pacing rules; em-dashes are kept.
    """
    text = html.unescape(text)
    text = text.replace("\r", "")
    text = text.replace("\ufeff", "").replace("\u00ad", "").replace("\u00a0", " ")
    text = text.replace("\u2018", "'").replace("\u2019", "'")
    text = text.replace("\u201c", '"').replace("\u201d", '"')
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def build_book(title: str, author: str, sections: list[tuple[str, str]], source_format: str) -> Book:
    """Number the non-empty sections as chapters; a book with none is rejected."""
    chapters = []
    for heading, raw in sections:
        text = clean_text(raw)
        if not text:
            continue
        chapters.append(Chapter(index=len(chapters) + 1, title=heading, text=text))
    if not chapters:
        raise ValueError(f"Could not find readable chapters in '{title}'")
    return Book(title=title, author=author, chapters=chapters, source_format=source_format)
