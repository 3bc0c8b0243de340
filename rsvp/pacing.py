"""rsvp/pacing.py — How long each display unit stays on screen."""

from config import Configuration
from models import Token
from rsvp.bundling import display_unit
from rsvp.punctuation import (
    ends_with_clause_punct,
    ends_with_em_dash,
    ends_with_sentence_punct,
    strip_edge_punct,
)

SENTENCE_PAUSE_MS = 220
CLAUSE_PAUSE_MS = 120
LONG_WORD_BONUS_MS = 120
LONG_WORD_MIN = 12
MEDIUM_WORD_BONUS_MS = 70
MEDIUM_WORD_MIN = 9


def base_ms(words_per_minute: int) -> float:
    return 60000 / max(1, words_per_minute)


def punctuation_pause_ms(text: str, smart_pauses: bool) -> int:
    if not smart_pauses:
        return 0
    if ends_with_sentence_punct(text):
        return SENTENCE_PAUSE_MS
    if ends_with_clause_punct(text) or ends_with_em_dash(text):
        return CLAUSE_PAUSE_MS
    return 0


def length_bonus_ms(text: str, smart_pauses: bool) -> int:
    if not smart_pauses:
        return 0
    length = len(strip_edge_punct(text))
    if length >= LONG_WORD_MIN:
        return LONG_WORD_BONUS_MS
    if length >= MEDIUM_WORD_MIN:
        return MEDIUM_WORD_BONUS_MS
    return 0


def unit_duration_ms(text: str, words_per_minute: int, smart_pauses: bool) -> float:
    """Base rate plus punctuation pause plus long-word bonus; the two bonuses stack."""
    return (
        base_ms(words_per_minute)
        + punctuation_pause_ms(text, smart_pauses)
        + length_bonus_ms(text, smart_pauses)
    )


def estimate_reading_ms(tokens: list[Token], config: Configuration, start: int = 0) -> float:
    """
    Total display time from start to the end of the document, walking units the
    way playback does (bundles advance by two). The final token is included.
    """
    total = 0.0
    index = max(0, start)
    while index < len(tokens):
        unit = display_unit(tokens, index, config.pair_short_words)
        total += unit_duration_ms(unit.text, config.words_per_minute, config.smart_pauses)
        index += unit.advance_by
    return total
