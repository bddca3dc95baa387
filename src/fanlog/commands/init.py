"""fanlog init — remember the current settings in .fanlog.json.

Writes the resolved environment, routes and log directory to
.fanlog.json in the current directory, so later commands need no flags.
"""

import argparse
import os
import sys
from pathlib import Path

from fanlog.config import save_project_config


def register(subparsers):
    """Register the 'init' subcommand."""
    p = subparsers.add_parser(
        "init",
        help="Save current settings to .fanlog.json",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "--dir", metavar="PATH", default=None, dest="target_dir",
        help="Directory to write .fanlog.json into (default: cwd)",
    )
    p.add_argument(
        "--force", action="store_true", default=False,
        help="Overwrite an existing .fanlog.json",
    )
    p.set_defaults(func=run)


def run(args):
    target = Path(args.target_dir or os.getcwd()) / ".fanlog.json"
    if target.exists() and not args.force:
        print(f"  [SKIP] {target} exists (use --force to overwrite)",
              file=sys.stderr)
        return 1

    cfg = args.resolved
    data = {
        "environment": cfg.get("environment"),
        "routes": list(cfg.get("routes") or []),
    }
    if cfg.get("log_dir"):
        data["log_dir"] = str(cfg["log_dir"])

    path = save_project_config(data, args.target_dir)
    print(f"  [OK] Wrote {path}")
    return 0
