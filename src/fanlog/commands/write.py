"""fanlog write — route a single message.

Attaches the console when no routes are configured.
"""

import argparse

from fanlog.lib.log_lib import ConsoleDestination, get_router, parse_level


def register(subparsers):
    """Register the 'write' subcommand."""
    p = subparsers.add_parser(
        "write",
        help="Write one message",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("text", help="Message text")
    p.add_argument(
        "--level", "-l", default="info",
        help="debug, info, warning or error (default: info)",
    )
    p.add_argument(
        "--tag", "-t", action="append", default=[], dest="tags",
        metavar="TAG", help="Tag the message (repeatable)",
    )
    p.set_defaults(func=run)


def run(args):
    level = parse_level(args.level)
    router = get_router()
    if not router.registrations:
        router.attach(ConsoleDestination())
    router.write(args.text, level, args.tags)
    return 0
