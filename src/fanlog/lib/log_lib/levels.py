"""
Message severity levels.

Levels are declared in increasing severity, but routing never compares
them by order: a level filter is a plain set-membership test.

    debug  →  info  →  warning  →  error

DEBUG messages are dropped by a router running in release mode.
"""

from enum import Enum


class Level(Enum):
    """Severity of a single message."""
    DEBUG = 'debug'        # Development-only detail, dropped in release
    INFO = 'info'          # Neutral events; classify further with tags
    WARNING = 'warning'    # Faults caused by the user or external systems
    ERROR = 'error'        # Faults caused by bugs in the application

    def __str__(self) -> str:
        return self.value


def parse_level(name) -> Level:
    """Look up a level by name, case-insensitively.

    Accepts a Level instance unchanged.

    Raises:
        ValueError: if the name is not a known level.
    """
    if isinstance(name, Level):
        return name
    try:
        return Level(str(name).strip().lower())
    except ValueError:
        choices = ', '.join(lvl.value for lvl in Level)
        raise ValueError(
            f"Unknown level {name!r} (expected one of: {choices})"
        ) from None
