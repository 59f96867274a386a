"""Config file discovery and reading.

``postctl.toml`` is found by walking up from the starting directory, the
way git finds ``.git/``. ``POSTCTL_CONFIG`` pins a file explicitly, and
``--config`` overrides both.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "postctl.toml"
CONFIG_ENV_VAR = "POSTCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for postctl.toml.

    ``POSTCTL_CONFIG`` wins when set; a path that is not a file then
    means no config at all rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        click.ClickException: The file is not valid TOML. Reported by
            the CLI as a usage error, not a traceback.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
