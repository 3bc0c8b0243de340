"""rsvp/punctuation.py — Character classes used by bundling, anchoring and pacing."""

OPENING_CHARS = "(\"'["
CLOSING_CHARS = ")\"']"                  # may follow a pause mark: stop." (yes)
TRAILING_STRIP_CHARS = ")\"'].,;:!?"
SENTENCE_MARKS = ".?!"
CLAUSE_MARKS = ",;:"
PAUSE_MARKS = SENTENCE_MARKS + CLAUSE_MARKS
EM_DASH = "\u2014"


def strip_edge_punct(text: str) -> str:
    """Return the bare word: leading openers and trailing closers/punctuation removed."""
    return text.lstrip(OPENING_CHARS).rstrip(TRAILING_STRIP_CHARS)


def _ends_with_mark(text: str, marks: str) -> bool:
    """True if text ends in one of marks, optionally followed by one closing quote/bracket."""
    if not text:
        return False
    if text[-1] in marks:
        return True
    return len(text) >= 2 and text[-1] in CLOSING_CHARS and text[-2] in marks


def ends_with_sentence_punct(text: str) -> bool:
    return _ends_with_mark(text, SENTENCE_MARKS)


def ends_with_clause_punct(text: str) -> bool:
    return _ends_with_mark(text, CLAUSE_MARKS)


def ends_with_pause_punct(text: str) -> bool:
    return _ends_with_mark(text, PAUSE_MARKS)


def ends_with_em_dash(text: str) -> bool:
    return text.endswith(EM_DASH)
