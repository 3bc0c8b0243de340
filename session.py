"""session.py — One reading session: the surface views and input adapters talk to."""

import logging
from typing import Callable

from config import WPM_STEP, REWIND_WORDS, Configuration
from models import Book, DisplayUnit, RenderFrame, StopReason
from rsvp.navigation import ChapterCursor, NavigationController
from rsvp.orp import split_at_anchor
from rsvp.pacing import estimate_reading_ms
from rsvp.scheduler import PlaybackScheduler
from rsvp.state import ReadingState
from rsvp.timers import AsyncioTimers, TimerBackend

logger = logging.getLogger(__name__)


class ReadingSession:
    """
    Owns the reading state, the scheduler and the navigation controller for one
    document. Every state-affecting call ends by pushing a RenderFrame to
    on_render. on_status reports Held/Paused changes and on_cursor reports where
    a release left the external caret.
    """

    def __init__(
        self,
        config: Configuration | None = None,
        timers: TimerBackend | None = None,
        on_render: Callable[[RenderFrame], None] | None = None,
        on_status: Callable[[bool, StopReason], None] | None = None,
        on_cursor: Callable[[int], None] | None = None,
    ):
        self.config = config or Configuration()
        self.on_render = on_render
        self.on_status = on_status
        self.on_cursor = on_cursor
        self.state = ReadingState()
        self.chapters: ChapterCursor | None = None
        self.scheduler = PlaybackScheduler(
            self.state,
            timers or AsyncioTimers(),
            lambda: self.config,
            on_advance=self._emit,
            on_status=self._status_changed,
            on_cursor=self._cursor_moved,
        )
        self.navigation = NavigationController(self.state, self.scheduler, lambda: self.config)

    # -- read-only views -------------------------------------------------

    @property
    def held(self) -> bool:
        return self.state.held

    @property
    def index(self) -> int:
        return self.state.index

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def stop_reason(self) -> StopReason:
        return self.state.stop_reason

    @property
    def token_count(self) -> int:
        return len(self.state.tokens)

    def current_unit(self) -> DisplayUnit:
        return self.navigation.current_unit()

    def render(self) -> RenderFrame:
        if not self.state.tokens:
            return RenderFrame("", "", "", 0, 0)
        prefix, anchor, suffix = split_at_anchor(self.current_unit().text)
        return RenderFrame(prefix, anchor, suffix, self.state.index + 1, len(self.state.tokens))

    def remaining_ms(self) -> float:
        return estimate_reading_ms(self.state.tokens, self.config, self.state.index)

    # -- text and configuration -----------------------------------------

    def load_text(self, text: str, cursor: int = 0) -> None:
        self.navigation.load_text(text, cursor)
        self._emit()

    def set_configuration(self, config: Configuration) -> None:
        # Read fresh on the next arm; a pending timer keeps its duration.
        self.config = config
        self._emit()

    def nudge_speed(self, delta: int = WPM_STEP) -> None:
        self.scheduler.disengage(StopReason.NONE)
        self.set_configuration(self.config.with_speed_delta(delta))

    def resync(self) -> None:
        """Re-derive the index from the external caret."""
        self.navigation.sync_to_cursor(self.state.cursor)
        self._emit()

    def move_cursor(self, cursor: int) -> None:
        self.navigation.sync_to_cursor(cursor)
        self._emit()

    # -- playback ---------------------------------------------------------

    def engage(self) -> bool:
        engaged = self.scheduler.engage()
        if engaged:
            self._emit()
        return engaged

    def disengage(self, reason: StopReason = StopReason.NONE) -> None:
        self.scheduler.disengage(reason)
        self._emit()

    # -- navigation -------------------------------------------------------

    def step_forward(self) -> None:
        self.navigation.step_forward()
        self._emit()

    def step_back(self) -> None:
        self.navigation.step_back()
        self._emit()

    def rewind(self, count: int = REWIND_WORDS) -> None:
        self.navigation.rewind(count)
        self._emit()

    def jump_to(self, index: int) -> None:
        self.navigation.jump_to(index)
        self._emit()

    # -- chapters ---------------------------------------------------------

    def load_book(self, book: Book) -> bool:
        self.chapters = ChapterCursor(book)
        logger.info("Loaded '%s' with %d chapters", book.title, self.chapters.count)
        return self.load_chapter(0)

    def load_chapter(self, index: int) -> bool:
        if self.chapters is None:
            return False
        self.scheduler.disengage(StopReason.NONE)
        chapter = self.chapters.move_to(index)
        if chapter is None:
            return False
        self.load_text(chapter.text, 0)
        return True

    @property
    def has_prev_chapter(self) -> bool:
        return self.chapters is not None and self.chapters.has_prev

    @property
    def has_next_chapter(self) -> bool:
        return self.chapters is not None and self.chapters.has_next

    @property
    def chapter_label(self) -> str:
        return self.chapters.label if self.chapters else "Chapter: —"

    def next_chapter(self) -> bool:
        return self.has_next_chapter and self.load_chapter(self.chapters.index + 1)

    def prev_chapter(self) -> bool:
        return self.has_prev_chapter and self.load_chapter(self.chapters.index - 1)

    # -- callbacks ----------------------------------------------------------

    def _emit(self) -> None:
        if self.on_render:
            self.on_render(self.render())

    def _status_changed(self, held: bool, reason: StopReason) -> None:
        if self.on_status:
            self.on_status(held, reason)

    def _cursor_moved(self, cursor: int) -> None:
        if self.on_cursor:
            self.on_cursor(cursor)
