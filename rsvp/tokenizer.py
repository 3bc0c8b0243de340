"""rsvp/tokenizer.py — Split source text into whitespace-delimited tokens with offsets."""

import re

from models import Token

TOKEN_RE = re.compile(r"\S+")


def tokenize(text: str) -> list[Token]:
    """One Token per maximal run of non-whitespace, offsets counted in characters."""
    if not text:
        return []
    return [Token(m.group(0), m.start(), m.end()) for m in TOKEN_RE.finditer(text)]


def token_index_at(tokens: list[Token], offset: int) -> int:
    """
    Map a character offset to a token index.
    Inside a token -> that token; in a whitespace gap -> the following token;
    past the last token -> the last token; no tokens -> 0.
    """
    if not tokens:
        return 0
    for i, tok in enumerate(tokens):
        if offset < tok.end:
            return i
    return len(tokens) - 1
