"""rsvp/bundling.py — Decide whether two short tokens are shown together."""

from models import DisplayUnit, Token
from rsvp.punctuation import ends_with_pause_punct, strip_edge_punct

# 2 pairs "of a", "to be", "in it"; 3 would also pair "the cat"
SHORT_WORD_MAX = 2


def is_short_word(text: str) -> bool:
    bare = strip_edge_punct(text)
    return 0 < len(bare) <= SHORT_WORD_MAX


def display_unit(tokens: list[Token], index: int, pair_short_words: bool = True) -> DisplayUnit:
    """
    Resolve the unit shown at index. Two tokens are bundled only when both are
    short and the first does not close a clause or sentence.
    """
    if not tokens:
        return DisplayUnit("", 1)
    index = max(0, min(index, len(tokens) - 1))
    current = tokens[index].value

    if not pair_short_words or index >= len(tokens) - 1:
        return DisplayUnit(current, 1)

    following = tokens[index + 1].value
    if is_short_word(current) and is_short_word(following) and not ends_with_pause_punct(current):
        return DisplayUnit(f"{current} {following}", 2)
    return DisplayUnit(current, 1)
