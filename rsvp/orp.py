"""rsvp/orp.py — Optimal reading position: which character of a unit to highlight."""

from rsvp.punctuation import strip_edge_punct


def orp_offset(length: int) -> int:
    """Fixation offset into a bare word of the given length."""
    if length <= 1:
        return 0
    if length <= 5:
        return 1
    if length <= 9:
        return 2
    if length <= 13:
        return 3
    return 4


def anchor_index(text: str) -> int:
    """
    Index of the anchor character within text.

    The offset table is applied to the bare form of the whole string, so a
    bundled "of a" is measured as one four-character word, space included.
    """
    bare = strip_edge_punct(text)
    bare_start = text.find(bare)
    anchor = bare_start + orp_offset(len(bare))
    return max(0, min(anchor, len(text) - 1))


def split_at_anchor(text: str) -> tuple[str, str, str]:
    """Return (prefix, anchor_char, suffix); the pieces concatenate back to text."""
    anchor = anchor_index(text)
    return text[:anchor], text[anchor:anchor + 1], text[anchor + 1:]
