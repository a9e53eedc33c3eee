"""Locate and load agentpack.toml.

The config lives either beside the payload (``agentpack.toml``) or inside
its ``.agentpack/`` directory, next to template overrides.  Lookup walks up
from the start directory the way git finds ``.git/``; ``AGENTPACK_CONFIG``
and ``--config`` name a file explicitly.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "agentpack.toml"
CONFIG_DIRNAME = ".agentpack"
CONFIG_ENV_VAR = "AGENTPACK_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def config_candidates(directory: Path) -> tuple[Path, Path]:
    """Config locations checked in *directory*, in priority order."""
    return directory / CONFIG_FILENAME, directory / CONFIG_DIRNAME / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    ``AGENTPACK_CONFIG`` wins over the walk-up search.

    Raises:
        FileNotFoundError: ``AGENTPACK_CONFIG`` names a file that does not exist.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path).expanduser()
        if not explicit.is_file():
            msg = f"{CONFIG_ENV_VAR} points to a missing file: {env_path}"
            raise FileNotFoundError(msg)
        return explicit

    for directory in _walk_up(start or Path.cwd()):
        for candidate in config_candidates(directory):
            if candidate.is_file():
                return candidate
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse the TOML at *path* into raw section tables.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))
