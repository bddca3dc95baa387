"""Configuration management for fanlog.

Three-layer config resolution (highest priority wins):
  1. CLI flags — explicit on the command line
  2. Project config — .fanlog.json in the working directory or above
  3. Global config — ~/.fanlog/config.json

Recognized keys:
  environment   "debug" or "release" (FANLOG_ENV when no layer sets it)
  routes        list of route specs, e.g. ["console", "file:error"]
  log_dir       directory for file routes given by name only
"""

import json
import os
from pathlib import Path

ENV_VAR = "FANLOG_ENV"
ENVIRONMENTS = ("debug", "release")
DEFAULT_ENVIRONMENT = "debug"
CONFIG_KEYS = ["environment", "routes", "log_dir"]


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.fanlog/)."""
    return Path.home() / ".fanlog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .fanlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / ".fanlog.json"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object from a file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config(path=None):
    """Load the global config file (or an explicit --config path)."""
    return load_json(path or get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .fanlog.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def resolve_config(args=None, keys=None, start_dir=None):
    """Resolve config values using three-layer precedence.

    For each key in `keys`, checks (in order):
      1. CLI args (attributes of an argparse namespace; None = unset)
      2. Project .fanlog.json
      3. Global ~/.fanlog/config.json (or args.config if given)

    `environment` falls back to $FANLOG_ENV and then "debug".

    Returns a dict with resolved values (None when unset).
    """
    if keys is None:
        keys = CONFIG_KEYS

    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config(getattr(args, "config", None))

    resolved = {}
    for key in keys:
        arg_key = key.replace("-", "_")
        json_key = key.replace("_", "-")

        # Layer 1: CLI (empty lists from append actions count as unset)
        cli_val = getattr(args, arg_key, None)
        if cli_val is not None and cli_val != []:
            resolved[arg_key] = cli_val
            continue

        # Layer 2: Project config
        proj_val = project_cfg.get(arg_key, project_cfg.get(json_key))
        if proj_val is not None:
            resolved[arg_key] = proj_val
            continue

        # Layer 3: Global config
        global_val = global_cfg.get(arg_key, global_cfg.get(json_key))
        resolved[arg_key] = global_val

    if "environment" in resolved and resolved["environment"] is None:
        resolved["environment"] = os.environ.get(ENV_VAR) or DEFAULT_ENVIRONMENT

    return resolved


def is_debug_environment(value=None):
    """Return True when the environment name means a debug build.

    Args:
        value: "debug" or "release"; None reads $FANLOG_ENV

    Raises:
        ValueError: for any other name
    """
    if value is None:
        value = os.environ.get(ENV_VAR) or DEFAULT_ENVIRONMENT
    name = str(value).strip().lower()
    if name not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment {value!r} "
            f"(expected one of: {', '.join(ENVIRONMENTS)})")
    return name == "debug"


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, directory=None):
    """Write .fanlog.json to the given (default: current) directory."""
    target = Path(directory or os.getcwd()) / ".fanlog.json"
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target
