"""Project file discovery.

Respects an explicit ``--config`` path, then ``$SHIPRUNNER_CONFIG``, then
``./shiprunner.yaml``. When none exists the built-in defaults apply, rooted
at the current directory.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_ENV_VAR = "SHIPRUNNER_CONFIG"
DEFAULT_CONFIG_NAME = "shiprunner.yaml"


def find_config_file(explicit: Path | None = None, cwd: Path | None = None) -> Path | None:
    """Return the project file to load, or ``None`` to use defaults.

    An explicit path is returned as-is even if it does not exist, so the
    loader can report it.
    """
    if explicit is not None:
        return explicit
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None
