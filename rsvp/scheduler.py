"""rsvp/scheduler.py — Press-and-hold playback: advance while held, stop on release or end."""

import logging
from typing import Callable

from config import Configuration
from models import StopReason
from rsvp.bundling import display_unit
from rsvp.pacing import unit_duration_ms
from rsvp.state import ReadingState
from rsvp.timers import TimerBackend

logger = logging.getLogger(__name__)


class PlaybackScheduler:
    """
    Two states, Paused and Held. While Held exactly one timer is pending; each
    fire advances the index by the shown unit's step and re-arms, until the last
    token is reached. Configuration is read through config_source on every arm.
    """

    def __init__(
        self,
        state: ReadingState,
        timers: TimerBackend,
        config_source: Callable[[], Configuration],
        on_advance: Callable[[], None] | None = None,
        on_status: Callable[[bool, StopReason], None] | None = None,
        on_cursor: Callable[[int], None] | None = None,
    ):
        self.state = state
        self.timers = timers
        self.config_source = config_source
        self.on_advance = on_advance
        self.on_status = on_status
        self.on_cursor = on_cursor
        self._generation = 0

    @property
    def held(self) -> bool:
        return self.state.held

    @property
    def pending_count(self) -> int:
        return 0 if self.state.pending is None else 1

    def engage(self) -> bool:
        """Start playback from the current index. Returns False if nothing changed."""
        state = self.state
        if state.held or not state.tokens:
            return False
        state.clamp_index()
        state.held = True
        logger.debug("engage at index %d", state.index)
        self._notify_status()
        self._arm()
        return True

    def disengage(self, reason: StopReason = StopReason.NONE) -> None:
        """
        Stop playback. A RELEASE moves the external cursor to the current token
        (or the end of the text on the last token); END and NONE leave it alone.
        Disengaging while already paused only clears stray timers.
        """
        self._cancel()
        state = self.state
        if not state.held:
            return
        state.held = False
        state.stop_reason = reason
        logger.debug("disengage (%s) at index %d", reason.value, state.index)

        if reason is StopReason.RELEASE:
            self._move_cursor_to_current()
        self._notify_status()

    def _arm(self) -> None:
        self._cancel()
        state = self.state
        config = self.config_source()
        unit = display_unit(state.tokens, state.index, config.pair_short_words)
        delay = unit_duration_ms(unit.text, config.words_per_minute, config.smart_pauses)
        generation = self._generation
        state.pending = self.timers.call_later(delay, lambda: self._fire(generation))
        logger.debug("armed %.1fms for %r", delay, unit.text)

    def _cancel(self) -> None:
        self._generation += 1
        pending, self.state.pending = self.state.pending, None
        if pending is not None:
            pending.cancel()

    def _fire(self, generation: int) -> None:
        state = self.state
        if generation != self._generation or not state.held:
            logger.debug("ignoring stale timer")
            return
        state.pending = None

        config = self.config_source()
        step = display_unit(state.tokens, state.index, config.pair_short_words).advance_by
        state.index = min(state.last_index, state.index + step)
        if self.on_advance:
            self.on_advance()

        if state.index >= state.last_index:
            self.disengage(StopReason.END)
            return
        self._arm()

    def _move_cursor_to_current(self) -> None:
        state = self.state
        if not state.tokens:
            return
        if state.at_end:
            state.cursor = len(state.text)
        else:
            state.cursor = state.tokens[state.clamp_index()].start
        if self.on_cursor:
            self.on_cursor(state.cursor)

    def _notify_status(self) -> None:
        if self.on_status:
            self.on_status(self.state.held, self.state.stop_reason)
