"""rsvp/navigation.py — Manual movement through the token list and the book's chapters."""

import logging
from typing import Callable

from config import REWIND_WORDS, Configuration
from models import Book, Chapter, DisplayUnit, StopReason
from rsvp.bundling import display_unit
from rsvp.scheduler import PlaybackScheduler
from rsvp.state import ReadingState
from rsvp.tokenizer import token_index_at, tokenize

logger = logging.getLogger(__name__)


class NavigationController:
    """Owns the token list and index. Every mutation halts playback first."""

    def __init__(
        self,
        state: ReadingState,
        scheduler: PlaybackScheduler,
        config_source: Callable[[], Configuration],
    ):
        self.state = state
        self.scheduler = scheduler
        self.config_source = config_source

    def _halt(self) -> None:
        if self.scheduler.held:
            self.scheduler.disengage(StopReason.NONE)

    def current_unit(self) -> DisplayUnit:
        state = self.state
        return display_unit(state.tokens, state.clamp_index(), self.config_source().pair_short_words)

    def load_text(self, text: str, cursor: int = 0) -> None:
        """Replace the source text, rebuild tokens and place the index at cursor."""
        self._halt()
        state = self.state
        state.text = text
        state.tokens = tokenize(text)
        state.cursor = max(0, min(cursor, len(text)))
        state.index = token_index_at(state.tokens, state.cursor)
        logger.debug("loaded %d tokens, index %d", len(state.tokens), state.index)

    def sync_to_cursor(self, cursor: int) -> None:
        """Follow an external caret move without re-tokenizing."""
        self._halt()
        state = self.state
        state.cursor = max(0, min(cursor, len(state.text)))
        state.index = token_index_at(state.tokens, state.cursor)

    def step_forward(self) -> None:
        self._halt()
        state = self.state
        if not state.tokens:
            return
        step = self.current_unit().advance_by
        state.index = min(state.last_index, state.index + step)

    def step_back(self) -> None:
        # One token, never a whole bundle, so the word just seen is not skipped.
        self._halt()
        state = self.state
        if not state.tokens:
            return
        state.index = max(0, state.clamp_index() - 1)

    def rewind(self, count: int = REWIND_WORDS) -> None:
        self._halt()
        state = self.state
        if not state.tokens:
            return
        state.index = max(0, state.clamp_index() - count)

    def jump_to(self, index: int) -> None:
        self._halt()
        self.state.index = index
        self.state.clamp_index()


class ChapterCursor:
    """Position within a Book's chapters (0-based)."""

    def __init__(self, book: Book):
        self.book = book
        self.index = 0 if book.chapters else -1

    @property
    def count(self) -> int:
        return len(self.book.chapters)

    @property
    def has_prev(self) -> bool:
        return self.index > 0

    @property
    def has_next(self) -> bool:
        return 0 <= self.index < self.count - 1

    @property
    def current(self) -> Chapter | None:
        if 0 <= self.index < self.count:
            return self.book.chapters[self.index]
        return None

    def move_to(self, index: int) -> Chapter | None:
        """Select chapter index; out-of-range requests leave the cursor where it is."""
        if not 0 <= index < self.count:
            return None
        self.index = index
        return self.book.chapters[index]

    @property
    def label(self) -> str:
        if self.index < 0:
            return "Chapter: —"
        return f"Chapter: {self.index + 1}/{self.count}"
