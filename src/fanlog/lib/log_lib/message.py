"""
The Message record: one logging event.

A Message is created once per write, never mutated, and handed to every
matching destination.  Its origin (file, line) is used for formatting
only, never for routing.
"""

import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Tuple

from .levels import Level, parse_level

# Tags are plain strings; matching is exact and case-sensitive.
Tag = str


def _now() -> datetime:
    return datetime.now().astimezone()


def caller_origin(depth: int = 1) -> Tuple[str, int]:
    """Return (file, line) of the frame `depth` levels above the caller.

    depth=1 is the caller's caller.  Falls back to ('<unknown>', 0)
    when the stack is shallower than requested.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return '<unknown>', 0
    return frame.f_code.co_filename, frame.f_lineno


@dataclass(frozen=True)
class Message:
    """A single log message.

    Attributes:
        text: Human-readable payload
        level: Severity
        tags: Classification tags, order kept but not significant
        timestamp: When the message was recorded (defaults to now)
        file: Source file the message was written from
        line: Source line the message was written from
    """
    text: str
    level: Level = Level.INFO
    tags: Tuple[Tag, ...] = ()
    timestamp: datetime = field(default_factory=_now)
    file: str = '<unknown>'
    line: int = 0

    def __post_init__(self):
        # A bare string is one tag, not a sequence of characters
        if isinstance(self.tags, str):
            object.__setattr__(self, 'tags', (self.tags,))
        elif not isinstance(self.tags, tuple):
            object.__setattr__(self, 'tags', tuple(self.tags))
        if not isinstance(self.level, Level):
            object.__setattr__(self, 'level', parse_level(self.level))

    @classmethod
    def create(cls, text: str, level: Level = Level.INFO,
               tags: Iterable[Tag] = (), *, timestamp: datetime = None,
               file: str = None, line: int = None,
               depth: int = 1) -> 'Message':
        """Build a message, capturing the caller's origin when not given.

        Args:
            level: A Level, or its name (see parse_level)
            tags: Tags to attach; a single string is one tag
            depth: Frames to skip when capturing origin (1 = our caller)

        Raises:
            ValueError: if the level name is unknown
        """
        if file is None or line is None:
            origin_file, origin_line = caller_origin(depth)
            file = origin_file if file is None else file
            line = origin_line if line is None else line
        return cls(
            text=str(text),
            level=level,
            tags=tags,
            timestamp=timestamp if timestamp is not None else _now(),
            file=file,
            line=line,
        )
