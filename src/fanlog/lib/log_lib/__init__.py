"""
log_lib — tag- and level-filtered message routing.

A small, embeddable logging core:
- A Router fanning each message out to any number of destinations
- Per-destination include/exclude filters over levels and tags
- Pluggable formatters and destinations (console, file, memory)
- Compact route specs for configuring destinations from text

Public API:
    Router            — the fan-out core
    init_router       — singleton initialization
    get_router        — access singleton
    Registration      — attach() handle
    Environment       — debug/release/any build modes
    Level             — message severity
    Filter            — include/exclude/all predicate
    Message           — one logging event
    PrettyFormatter   — configurable single-line formatter
    ConsoleDestination, FileDestination, MemoryDestination
    open_file_destination — file destination or None
    RouteConfig, parse_route_spec, attach_route — route specs
    Obscured          — value masked outside debug builds
    trace             — function tracing decorator
"""

from .levels import Level, parse_level
from .filters import Filter, parse_filter
from .message import Message, Tag
from .formatters import Formatter, PrettyFormatter, get_formatter
from .destinations import (
    Destination, ConsoleDestination, FileDestination, MemoryDestination,
    open_file_destination,
)
from .routes import (
    RouteConfig, parse_route_spec, build_destination, attach_route,
    KNOWN_DESTINATIONS, DESTINATION_DESCRIPTIONS, format_destination_list,
)
from .router import Router, Registration, Environment, init_router, get_router
from .redact import Obscured
from .trace import trace

__all__ = [
    'Level', 'parse_level',
    'Filter', 'parse_filter',
    'Message', 'Tag',
    'Formatter', 'PrettyFormatter', 'get_formatter',
    'Destination', 'ConsoleDestination', 'FileDestination',
    'MemoryDestination', 'open_file_destination',
    'RouteConfig', 'parse_route_spec', 'build_destination', 'attach_route',
    'KNOWN_DESTINATIONS', 'DESTINATION_DESCRIPTIONS', 'format_destination_list',
    'Router', 'Registration', 'Environment', 'init_router', 'get_router',
    'Obscured',
    'trace',
]
