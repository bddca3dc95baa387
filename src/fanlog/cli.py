"""Main CLI entry point for fanlog.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--env, --route, --log-dir, --config)
  2. Second pass: dispatch to subcommand

Global flags can appear before OR after the subcommand:
  fanlog --env release demo          # works
  fanlog demo --env release          # also works

Subcommands self-register via register(subparsers) convention.
"""

import argparse
import sys

from fanlog._version import PIP_VERSION, VERSION
from fanlog.config import is_debug_environment, resolve_config


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--env": {"aliases": ["-e"], "choices": ["debug", "release"],
              "default": None,
              "help": "Build mode; release drops debug messages "
                      "(default: $FANLOG_ENV or debug)"},
    "--route": {"aliases": ["-r"], "nargs": "?", "action": "append",
                "metavar": "DEST:LEVELS:TAGS:LOCATION:FORMAT",
                "help": "Attach a route (repeatable; bare --route lists "
                        "destinations)"},
    "--log-dir": {"metavar": "PATH", "default": None,
                  "help": "Directory for file routes given by name"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to config file (default: ~/.fanlog/config.json)"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        global_parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in fanlog.commands must export:
      register(subparsers) — add itself to the subparser
      run(args) — execute the command
    """
    from fanlog.commands import demo, init, write
    return [demo, write, init]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="fanlog",
        description="fanlog — level- and tag-filtered log routing",
        epilog=(
            "Run 'fanlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--env, --route, --log-dir, --config) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"fanlog {VERSION} ({PIP_VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers)

    return parser


def _init_router(global_args):
    """Resolve config layers and initialize the Router singleton."""
    from fanlog.lib.log_lib import init_router

    cfg = resolve_config(global_args)
    routes = cfg.get("routes") or []
    if isinstance(routes, str):
        routes = [routes]
    return init_router(
        debug=is_debug_environment(cfg["environment"]),
        routes=routes,
        directory=cfg.get("log_dir"),
    ), cfg


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for fanlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    # Handle bare --route (list destinations and exit)
    if global_args.route and None in global_args.route:
        from fanlog.lib.log_lib import format_destination_list
        print(format_destination_list())
        return 0
    # Flag names -> config key names
    global_args.routes = global_args.route or []
    global_args.environment = global_args.env

    # Pass 2: parse subcommand + specific args
    commands = _discover_commands()
    parser = _build_parser(commands)

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    try:
        _, args.resolved = _init_router(global_args)
        return args.func(args) or 0
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
