"""
Route specs: configuring destinations from text.

A route is a destination plus its level and tag filters.  Routes can be
given on the command line or in config files with a compact, positional
syntax:

    DEST:LEVELS:TAGS:LOCATION:FORMAT

    Examples:
        console                         # Everything to stdout
        stderr:warning,error            # Warnings and errors to stderr
        file:::app.log                  # Everything to app.log
        file:error:verybad:bad.log      # Errors tagged #verybad
        file:!debug:!noisy::full        # Default file, full format

LEVELS and TAGS use filter syntax ("" or "*" = all, "a,b" = include,
"!a,b" = exclude).  Empty slots use :: (empty between colons).
Windows drive letters (e.g., C:\\logs\\app.log) in LOCATION are
detected and rejoined.
"""

import sys
from dataclasses import dataclass
from typing import Optional

from .destinations import ConsoleDestination, open_file_destination
from .filters import Filter, PASS_ALL, parse_filter
from .formatters import get_formatter
from .levels import parse_level


# Destination kinds a route may name
KNOWN_DESTINATIONS = {
    'console',      # Standard output (alias of stdout)
    'stdout',       # Standard output
    'stderr',       # Standard error
    'file',         # Append to a file
}

DESTINATION_DESCRIPTIONS = {
    'console': 'Standard output (same as stdout)',
    'stdout':  'Standard output',
    'stderr':  'Standard error',
    'file':    'Append to a file (LOCATION, or a dated file in the log dir)',
}


@dataclass
class RouteConfig:
    """Configuration for a single route.

    `location` is a file path for 'file' routes; a bare name is placed
    in the log directory.  `format` names a formatter preset.
    """
    destination: str
    levels: Filter = PASS_ALL
    tags: Filter = PASS_ALL
    location: Optional[str] = None
    format: Optional[str] = None


def parse_route_spec(spec: str) -> RouteConfig:
    """Parse a route spec string into a RouteConfig.

    Args:
        spec: Route spec like "stderr:warning,error" or
              "file:error::C:\\logs\\err.log:full"

    Returns:
        RouteConfig with parsed values

    Raises:
        ValueError: on an unknown destination, level or format
    """
    parts = spec.split(':')

    # Rejoin drive letters: 'C' + '\\logs' -> 'C:\\logs'
    rejoined = []
    i = 0
    while i < len(parts):
        if (len(parts[i]) == 1 and parts[i].isalpha()
                and i + 1 < len(parts)
                and parts[i+1][:1] in ('\\', '/')
                and len(rejoined) == 3):  # Only in LOCATION slot
            rejoined.append(f"{parts[i]}:{parts[i+1]}")
            i += 2
        else:
            rejoined.append(parts[i])
            i += 1
    parts = rejoined

    name = parts[0].strip().lower() if parts else ''
    if name not in KNOWN_DESTINATIONS:
        choices = ', '.join(sorted(KNOWN_DESTINATIONS))
        raise ValueError(
            f"Unknown destination {name!r} in route {spec!r} "
            f"(expected one of: {choices})")

    levels = tags = PASS_ALL
    location = fmt = None

    if len(parts) > 1 and parts[1]:
        levels = parse_filter(parts[1], convert=parse_level)
    if len(parts) > 2 and parts[2]:
        tags = parse_filter(parts[2])
    if len(parts) > 3 and parts[3]:
        location = parts[3]
    if len(parts) > 4 and parts[4]:
        fmt = parts[4]
        get_formatter(fmt)  # validate early

    return RouteConfig(destination=name, levels=levels, tags=tags,
                       location=location, format=fmt)


def build_destination(cfg: RouteConfig, directory=None):
    """Create the destination a route describes.

    Args:
        cfg: Parsed route
        directory: Log directory for file routes without a full path

    Returns:
        The destination, or None if a file could not be opened
    """
    formatter = get_formatter(cfg.format)
    if cfg.destination in ('console', 'stdout'):
        return ConsoleDestination(formatter=formatter)
    if cfg.destination == 'stderr':
        return ConsoleDestination(formatter=formatter, stream=sys.stderr)

    location = cfg.location
    if location and ('/' in location or '\\' in location):
        return open_file_destination(location, formatter=formatter)
    return open_file_destination(name=location, directory=directory,
                                 formatter=formatter)


def attach_route(router, cfg: RouteConfig, directory=None):
    """Build a route's destination and attach it to the router.

    Returns:
        The Registration, or None if the destination could not be built
    """
    destination = build_destination(cfg, directory=directory)
    if destination is None:
        return None
    return router.attach(destination, levels=cfg.levels, tags=cfg.tags)


def format_destination_list() -> str:
    """Format the list of destination kinds for display.

    Returns:
        Formatted string listing all kinds with descriptions.
    """
    lines = ["Available destinations:"]
    max_name = max(len(name) for name in KNOWN_DESTINATIONS)
    for name in sorted(KNOWN_DESTINATIONS):
        desc = DESTINATION_DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{max_name}}  {desc}")
    return "\n".join(lines)
