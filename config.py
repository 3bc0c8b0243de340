"""config.py — Reader configuration: pacing rate and timing toggles."""

import dataclasses
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_WPM = 350
MIN_WPM = 100
MAX_WPM = 900
WPM_STEP = 10
REWIND_WORDS = 10

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def clamp_wpm(value) -> int:
    """Coerce a words-per-minute value into [MIN_WPM, MAX_WPM]; junk becomes the default."""
    try:
        wpm = int(value)
    except (TypeError, ValueError):
        return DEFAULT_WPM
    if wpm == 0:
        return DEFAULT_WPM
    return max(MIN_WPM, min(MAX_WPM, wpm))


@dataclass
class Configuration:
    words_per_minute: int = DEFAULT_WPM
    smart_pauses: bool = True
    pair_short_words: bool = True

    def __post_init__(self):
        self.words_per_minute = clamp_wpm(self.words_per_minute)

    def with_speed_delta(self, delta: int) -> "Configuration":
        return dataclasses.replace(self, words_per_minute=self.words_per_minute + delta)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


def load_configuration() -> Configuration:
    """Build a Configuration from SPEEDREADER_* variables (.env is honoured)."""
    load_dotenv(find_dotenv(usecwd=True))
    return Configuration(
        words_per_minute=os.getenv("SPEEDREADER_WPM", "").strip() or DEFAULT_WPM,
        smart_pauses=_env_flag("SPEEDREADER_SMART_PAUSES", True),
        pair_short_words=_env_flag("SPEEDREADER_PAIR_SHORT_WORDS", True),
    )
