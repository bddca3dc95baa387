"""
Destinations: where formatted messages end up.

A destination is any object with a write(message) method.  The router
calls it synchronously, possibly from several threads at once, so each
destination backed by a single stream serializes its own writes.

Failure policy:
    - Creating a file destination can fail; open_file_destination()
      reports that as None rather than a half-usable object.
    - Failing to write an established destination is swallowed: a log
      call must never crash the application.

Default file location:
    $XDG_CACHE_HOME/fanlog/ (or ~/.cache/fanlog/), with a file name
    derived from the current date and time.
"""

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, TextIO

from .formatters import DEFAULT_FORMATTER, Formatter
from .message import Message

_log = logging.getLogger(__name__)


class Destination(Protocol):
    def write(self, message: Message) -> None:
        ...


class ConsoleDestination:
    """Writes one line per message to a text stream.

    Args:
        formatter: Formatter to render messages (default: text only)
        stream: Target stream; None means sys.stdout at write time
    """

    def __init__(self, formatter: Formatter = None, stream: TextIO = None):
        self.formatter = formatter if formatter is not None else DEFAULT_FORMATTER
        self.stream = stream
        self._lock = threading.Lock()

    def write(self, message: Message) -> None:
        text = self.formatter.format(message)
        stream = self.stream if self.stream is not None else sys.stdout
        with self._lock:
            try:
                print(text, file=stream, flush=True)
            except (OSError, ValueError):
                _log.debug("Dropped console message", exc_info=True)

    def __repr__(self) -> str:
        name = getattr(self.stream, 'name', 'stdout')
        return f"ConsoleDestination({name})"


# ---------------------------------------------------------------------------
# File destination
# ---------------------------------------------------------------------------
def default_directory() -> Path:
    """Return the default log directory (not created)."""
    base = os.environ.get('XDG_CACHE_HOME')
    root = Path(base) if base else Path.home() / '.cache'
    return root / 'fanlog'


def default_name(now: datetime = None) -> str:
    """Return a log file name for the given (default: current) time."""
    now = now or datetime.now().astimezone()
    return f"{now.strftime('%Y-%m-%d-%H-%M-%S%z')}.txt"


class FileDestination:
    """Appends one line per message to a file.

    The file (and its parent directory) is created when missing.

    Raises:
        OSError: if the file cannot be created or opened for appending.
    """

    def __init__(self, path, formatter: Formatter = None):
        self.path = Path(path)
        self.formatter = formatter if formatter is not None else DEFAULT_FORMATTER
        self._lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.path, 'a', encoding='utf-8')

    def write(self, message: Message) -> None:
        text = self.formatter.format(message)
        with self._lock:
            try:
                self._handle.write(text + '\n')
                self._handle.flush()
            except (OSError, ValueError):
                # ValueError: the handle was closed
                _log.debug("Dropped message for %s", self.path, exc_info=True)

    def close(self) -> None:
        with self._lock:
            self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"FileDestination({str(self.path)!r})"


def open_file_destination(path=None, *, name: str = None, directory=None,
                          formatter: Formatter = None
                          ) -> Optional[FileDestination]:
    """Create a file destination, or return None when that fails.

    Resolution:
        path given        -> that file
        name given        -> <directory or default directory>/<name>
        neither           -> <directory or default directory>/<timestamp>.txt

    Args:
        path: Explicit file path
        name: File name inside the directory
        directory: Directory for name/generated files
        formatter: Formatter for the destination

    Returns:
        FileDestination, or None if the file could not be opened
    """
    if path is None:
        folder = Path(directory) if directory is not None else default_directory()
        if folder.exists() and not folder.is_dir():
            _log.error("The path %s does not represent a directory.", folder)
            return None
        path = folder / (name or default_name())

    try:
        return FileDestination(path, formatter=formatter)
    except OSError as e:
        _log.error("Could not open a file for writing at %s: %s", path, e)
        return None


# ---------------------------------------------------------------------------
# In-memory destination
# ---------------------------------------------------------------------------
class MemoryDestination:
    """Keeps every delivered message and its formatted line in memory."""

    def __init__(self, formatter: Formatter = None):
        self.formatter = formatter if formatter is not None else DEFAULT_FORMATTER
        self._lock = threading.Lock()
        self._messages: List[Message] = []
        self._lines: List[str] = []

    def write(self, message: Message) -> None:
        text = self.formatter.format(message)
        with self._lock:
            self._messages.append(message)
            self._lines.append(text)

    @property
    def messages(self) -> List[Message]:
        with self._lock:
            return list(self._messages)

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()
            self._lines.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
