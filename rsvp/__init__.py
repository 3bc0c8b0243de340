"""rsvp/ — Reading-pacing engine: tokens, bundles, anchors, timing and playback."""

from rsvp.bundling import display_unit
from rsvp.navigation import ChapterCursor, NavigationController
from rsvp.orp import anchor_index, orp_offset, split_at_anchor
from rsvp.pacing import estimate_reading_ms, unit_duration_ms
from rsvp.scheduler import PlaybackScheduler
from rsvp.state import ReadingState
from rsvp.timers import AsyncioTimers
from rsvp.tokenizer import token_index_at, tokenize

__all__ = [
    "AsyncioTimers",
    "ChapterCursor",
    "NavigationController",
    "PlaybackScheduler",
    "ReadingState",
    "anchor_index",
    "display_unit",
    "estimate_reading_ms",
    "orp_offset",
    "split_at_anchor",
    "token_index_at",
    "tokenize",
    "unit_duration_ms",
]
