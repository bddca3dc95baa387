"""
Formatters turn a Message into one line of text.

A formatter is any object with a format(message) -> str method.  It is
pure: all configuration is fixed at construction, so one instance can
be shared by many destinations and threads.

PrettyFormatter output shape:

    [LEVEL] [TIMESTAMP] [@file:line] [#tag #tag]: text

Present components are joined by single spaces, then joined to the
text with ": ".  With no components the output is the text alone.

There is no special case for a level marker on its own: it follows the
same rule, so a level-only render is "[info]: text" rather than
"[info] text".
"""

from pathlib import PurePath
from typing import Dict, Optional, Protocol

from .levels import Level
from .message import Message


class Formatter(Protocol):
    def format(self, message: Message) -> str:
        ...


LEVEL_STYLES = ('none', 'text', 'emoji')

TIMESTAMP_STYLES = {
    'none': None,
    'time': '%H:%M:%S',
    'datetime': '%Y-%m-%d %H:%M:%S',
    'datetime_offset': '%Y-%m-%d %H:%M:%S %:z',
}

LEVEL_TEXT = {
    Level.DEBUG: '[debug]',
    Level.INFO: '[info]',
    Level.WARNING: '[warning]',
    Level.ERROR: '[error]',
}

LEVEL_EMOJI = {
    Level.DEBUG: '\U0001f6a7',          # construction sign
    Level.INFO: '\U0001f4ac',           # speech balloon
    Level.WARNING: '\u26a0\ufe0f',      # warning sign
    Level.ERROR: '\u26d4',              # no entry
}


def _format_offset(ts) -> str:
    """UTC offset as +HH:MM (strftime's %:z needs Python 3.12)."""
    offset = ts.utcoffset()
    if offset is None:
        return ''
    minutes = int(offset.total_seconds() // 60)
    sign = '+' if minutes >= 0 else '-'
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


class PrettyFormatter:
    """Configurable single-line formatter.

    Args:
        level_style: 'none', 'text' ([warning]) or 'emoji'
        timestamp_style: 'none', 'time', 'datetime' or 'datetime_offset'
        include_location: Append @<file stem>:<line>
        include_tags: Append #tag for each tag (omitted when untagged)
    """

    def __init__(self, level_style: str = 'none',
                 timestamp_style: str = 'none',
                 include_location: bool = False,
                 include_tags: bool = False):
        if level_style not in LEVEL_STYLES:
            raise ValueError(
                f"Unknown level style {level_style!r} "
                f"(expected one of: {', '.join(LEVEL_STYLES)})")
        if timestamp_style not in TIMESTAMP_STYLES:
            raise ValueError(
                f"Unknown timestamp style {timestamp_style!r} "
                f"(expected one of: {', '.join(TIMESTAMP_STYLES)})")
        self.level_style = level_style
        self.timestamp_style = timestamp_style
        self.include_location = include_location
        self.include_tags = include_tags

    def format(self, message: Message) -> str:
        components = [
            self._level_component(message),
            self._timestamp_component(message),
            self._location_component(message),
            self._tag_component(message),
        ]
        attributes = ' '.join(c for c in components if c)
        if not attributes:
            return message.text
        return f"{attributes}: {message.text}"

    def _level_component(self, message: Message) -> Optional[str]:
        if self.level_style == 'text':
            return LEVEL_TEXT[message.level]
        if self.level_style == 'emoji':
            return LEVEL_EMOJI[message.level]
        return None

    def _timestamp_component(self, message: Message) -> Optional[str]:
        pattern = TIMESTAMP_STYLES[self.timestamp_style]
        if pattern is None:
            return None
        if '%:z' in pattern:
            pattern = pattern.replace('%:z', _format_offset(message.timestamp))
        return message.timestamp.strftime(pattern).rstrip()

    def _location_component(self, message: Message) -> Optional[str]:
        if not self.include_location:
            return None
        return f"@{PurePath(message.file).stem}:{message.line}"

    def _tag_component(self, message: Message) -> Optional[str]:
        if not self.include_tags or not message.tags:
            return None
        return ' '.join(f"#{tag}" for tag in message.tags)

    def __repr__(self) -> str:
        return (f"PrettyFormatter(level_style={self.level_style!r}, "
                f"timestamp_style={self.timestamp_style!r}, "
                f"include_location={self.include_location}, "
                f"include_tags={self.include_tags})")


# Named presets, selectable from route specs
PRESETS: Dict[str, PrettyFormatter] = {
    'plain': PrettyFormatter(),
    'text': PrettyFormatter(level_style='text', timestamp_style='datetime',
                            include_tags=True),
    'emoji': PrettyFormatter(level_style='emoji', include_tags=True),
    'full': PrettyFormatter(level_style='emoji',
                            timestamp_style='datetime_offset',
                            include_location=True, include_tags=True),
}

DEFAULT_FORMATTER = PRESETS['plain']


def get_formatter(name: Optional[str]) -> PrettyFormatter:
    """Look up a preset formatter by name (None gives the default).

    Raises:
        ValueError: if the preset is unknown.
    """
    if name is None:
        return DEFAULT_FORMATTER
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown format {name!r} "
            f"(expected one of: {', '.join(PRESETS)})") from None
