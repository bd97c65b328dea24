"""Config file discovery and loading.

Walks up from the working directory looking for ``confshift.toml``, or
a ``pyproject.toml`` that carries a ``[tool.confshift]`` table. The
``CONFSHIFT_CONFIG`` env var and the ``--config`` flag bypass the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "confshift.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "CONFSHIFT_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("confshift"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``confshift.toml`` wins over ``pyproject.toml``.
    Returns None when nothing is found. ``CONFSHIFT_CONFIG`` is checked
    first and is authoritative: if it names a missing file, None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        if current.parent == current:
            return None
        current = current.parent


def read_config_table(path: Path) -> dict[str, Any]:
    """Parse *path* and return the confshift settings table.

    For ``pyproject.toml`` that is ``[tool.confshift]``; for any other
    file it is the whole document.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        table = data.get("tool", {}).get("confshift", {})
        return table if isinstance(table, dict) else {}
    return data
