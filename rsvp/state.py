"""rsvp/state.py — The single mutable aggregate shared by navigation and playback."""

from dataclasses import dataclass, field

from models import StopReason, Token
from rsvp.timers import TimerHandle


@dataclass
class ReadingState:
    text: str = ""
    tokens: list[Token] = field(default_factory=list)
    index: int = 0
    cursor: int = 0                  # External caret offset into text
    held: bool = False
    pending: TimerHandle | None = None
    stop_reason: StopReason = StopReason.NONE

    @property
    def last_index(self) -> int:
        return max(0, len(self.tokens) - 1)

    @property
    def at_end(self) -> bool:
        return bool(self.tokens) and self.index >= self.last_index

    def clamp_index(self) -> int:
        self.index = max(0, min(self.index, self.last_index)) if self.tokens else 0
        return self.index
