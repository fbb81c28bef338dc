"""Locate the ``verial.toml`` in effect for an invocation.

Precedence: an explicit ``--config`` path, then ``VERIAL_CONFIG``, then
the nearest ``verial.toml`` found walking up from the start directory.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "verial.toml"
CONFIG_ENV_VAR = "VERIAL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest verial.toml at or above *start* (default: cwd).

    A set ``VERIAL_CONFIG`` short-circuits the walk: its file is returned
    when it exists, otherwise None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None, start: Path | None = None) -> Path | None:
    """Return the config file for an invocation.

    An *explicit* path is used only when it names an existing file; a
    missing one falls back to code defaults rather than to discovery.
    """
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None
    return find_config(start)
