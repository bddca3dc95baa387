"""fanlog demo — route a sample of messages through filtered destinations.

Unless routes are configured, attaches:

    console                         everything
    <log dir>/bad-things.txt        warnings and errors
    <log dir>/very-bad-things.txt   errors tagged #verybad

and writes one message per level, a tagged message and a message
carrying an obscured secret.
"""

import argparse

from fanlog.lib.log_lib import (
    ConsoleDestination, Filter, Level, Obscured, get_formatter, get_router,
    open_file_destination,
)
from fanlog.lib.log_lib.destinations import default_directory


def register(subparsers):
    """Register the 'demo' subcommand."""
    p = subparsers.add_parser(
        "demo",
        help="Write sample messages through filtered destinations",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "--format", default="emoji", metavar="PRESET",
        help="Console format preset: plain, text, emoji, full (default: emoji)",
    )
    p.set_defaults(func=run)


def attach_default_routes(router, directory, console_format="emoji"):
    """Attach the console and the two filtered demo files.

    Files that cannot be opened are skipped.
    """
    router.attach(ConsoleDestination(formatter=get_formatter(console_format)))

    full = get_formatter("full")
    bad = open_file_destination(name="bad-things.txt", directory=directory,
                                formatter=full)
    if bad is not None:
        router.attach(bad, levels=Filter.include(Level.WARNING, Level.ERROR))

    very_bad = open_file_destination(name="very-bad-things.txt",
                                     directory=directory, formatter=full)
    if very_bad is not None:
        router.attach(very_bad, levels=Filter.include(Level.ERROR),
                      tags=Filter.include("verybad"))


def run(args):
    router = get_router()
    directory = args.resolved.get("log_dir") or default_directory()

    if not router.registrations:
        attach_default_routes(router, directory, args.format)
        print(f"Log directory: {directory}")

    router.debug("Debug messages are dropped in release builds.")
    router.info("Info messages describe neutral events, "
                "like a granted permission.")
    router.warning("Warning messages describe faults outside the app, "
                   "like a lost connection.")
    router.error("Error messages describe bugs, like a missing bundled image.",
                 "verybad")
    router.info("Tags classify messages further.", "network", "retry")
    router.info(f"Secrets are masked in release builds: "
                f"{Obscured('SUPER-SECRET-TOKEN')}", "oauth")
    return 0
