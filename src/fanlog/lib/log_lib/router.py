"""
Router — the fan-out core.

Central coordinator between code that writes messages and any number of
independently filtered destinations.  Each attach() adds a registration
(destination, level filter, tag filter); each write() delivers the
message to every registration whose two filters both pass:

    levels.test(message.level) and tags.test_many(message.tags)

Delivery is synchronous, on the calling thread, in attach order.

Concurrency:
    attach/detach/detach_all/registrations hold one lock while touching
    the registry.  write() takes a snapshot of the registry under that
    lock and delivers outside it, so a destination may write back into
    the router without deadlocking, and an attach racing an in-flight
    write may or may not be seen by that write.

Build mode:
    Router(debug=False) drops DEBUG messages before any filter runs.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Tuple

from .filters import Filter, PASS_ALL
from .levels import Level
from .message import Message, Tag
from .routes import attach_route, parse_route_spec

_log = logging.getLogger(__name__)


class Environment(Enum):
    """Build modes a block of code can be restricted to."""
    DEBUG = 'debug'
    RELEASE = 'release'
    ANY = 'any'

    def matches(self, debug: bool) -> bool:
        if self is Environment.ANY:
            return True
        return debug == (self is Environment.DEBUG)


@dataclass(frozen=True, eq=False)
class Registration:
    """One registry entry.  Compared by identity, so it doubles as a handle."""
    destination: Any
    levels: Filter = PASS_ALL
    tags: Filter = PASS_ALL

    def accepts(self, message: Message) -> bool:
        return (self.levels.test(message.level)
                and self.tags.test_many(message.tags))


class Router:
    """Routes messages to filtered destinations.

    The router does not own its destinations: the same destination may
    be attached to several routers, or several times to one router.

    Usage::

        router = Router()
        router.attach(ConsoleDestination())
        router.attach(errors_file, levels=Filter.include(Level.ERROR))
        router.info("Loaded 42 items", 'config')
        router.write("Disk almost full", level=Level.WARNING)
    """

    def __init__(self, debug: bool = True):
        self.debug_mode = debug
        self._lock = threading.Lock()
        self._entries: list = []

    # -- registry ---------------------------------------------------------

    def attach(self, destination: Any, levels: Filter = PASS_ALL,
               tags: Filter = PASS_ALL) -> Registration:
        """Attach a destination with optional level and tag filters.

        Attaching the same destination twice creates two entries and
        therefore two deliveries per matching message.

        Returns:
            The new Registration, usable as a handle for detach()
        """
        entry = Registration(destination, levels, tags)
        with self._lock:
            self._entries.append(entry)
        return entry

    def detach(self, target: Any) -> None:
        """Remove registrations by identity.

        `target` is either a destination (every entry for it is
        removed) or a Registration returned by attach() (only that
        entry is removed).  Unknown targets are ignored.
        """
        with self._lock:
            self._entries = [
                e for e in self._entries
                if e is not target and e.destination is not target
            ]

    def detach_all(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._entries = []

    @property
    def registrations(self) -> Tuple[Registration, ...]:
        """Snapshot of the registry in attach order."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # -- writing ----------------------------------------------------------

    def write(self, message: Any, level: Level = Level.INFO,
              tags: Iterable[Tag] = (), *, timestamp=None,
              file: Optional[str] = None,
              line: Optional[int] = None) -> None:
        """Deliver a message to every matching destination.

        Accepts a prebuilt Message, or text plus level/tags from which
        a Message is built with the caller's file and line.
        """
        if not isinstance(message, Message):
            message = Message.create(message, level, tags,
                                     timestamp=timestamp, file=file,
                                     line=line, depth=2)
        self._deliver(message)

    def debug(self, text: str, *tags: Tag) -> None:
        self._write_text(text, Level.DEBUG, tags)

    def info(self, text: str, *tags: Tag) -> None:
        self._write_text(text, Level.INFO, tags)

    def warning(self, text: str, *tags: Tag) -> None:
        self._write_text(text, Level.WARNING, tags)

    def error(self, text: str, *tags: Tag) -> None:
        self._write_text(text, Level.ERROR, tags)

    def run_in(self, environment: Environment,
               func: Callable[[], Any]) -> Any:
        """Call func() only when this router's build mode matches.

        Returns func's result, or None when skipped.
        """
        if environment.matches(self.debug_mode):
            return func()
        return None

    def _write_text(self, text, level, tags) -> None:
        # frames: create <- _write_text <- info/warning/... <- caller
        self._deliver(Message.create(text, level, tags, depth=3))

    def _deliver(self, message: Message) -> None:
        if not self.debug_mode and message.level is Level.DEBUG:
            return

        with self._lock:
            entries = tuple(self._entries)

        for entry in entries:
            if not entry.accepts(message):
                continue
            try:
                entry.destination.write(message)
            except Exception:
                # One failing destination must not starve the rest
                _log.warning("Destination %r failed to write a message",
                             entry.destination, exc_info=True)


# =============================================================================
# Module-level singleton
# =============================================================================

_router: Optional[Router] = None


def init_router(debug: bool = True, routes: list = None,
                directory=None) -> Router:
    """Initialize the module-level Router singleton.

    Call once at program startup.

    Args:
        debug: Build mode (False drops DEBUG messages)
        routes: Route spec strings (e.g. ['console', 'file:warning,error'])
        directory: Log directory for file routes given by name only

    Returns:
        The initialized Router instance
    """
    global _router

    router = Router(debug=debug)
    for spec in routes or []:
        attach_route(router, parse_route_spec(spec), directory=directory)

    _router = router
    return _router


def get_router() -> Router:
    """Get the module-level Router, creating a default if needed."""
    global _router
    if _router is None:
        _router = Router()
    return _router
