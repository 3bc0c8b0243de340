"""models.py — Shared data types for speedreader."""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


@dataclass(frozen=True)
class Token:
    value: str       # Non-empty, no whitespace
    start: int       # Offset of first character in the source text
    end: int         # Half-open end offset


@dataclass(frozen=True)
class DisplayUnit:
    text: str
    advance_by: int = 1   # Tokens to move past once shown (1 or 2)


class StopReason(Enum):
    NONE = "none"
    RELEASE = "release"
    END = "end"


class RenderFrame(NamedTuple):
    """What a view needs to draw one unit. prefix + anchor + suffix is the unit text."""
    prefix: str
    anchor: str
    suffix: str
    position: int    # 1-based, 0 when the document is empty
    total: int


@dataclass
class Chapter:
    index: int       # 1-based
    title: str       # Display title, e.g. "Chapter I: Jeeves Exerts the Old Cerebellum"
    text: str        # Cleaned plain text


@dataclass
class Book:
    title: str
    author: str
    chapters: list[Chapter] = field(default_factory=list)
    source_format: str = ""         # "epub", "markdown", "text"
