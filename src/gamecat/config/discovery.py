"""Locate and read ``gamecat.toml``.

A config file comes from the first of: the ``--config`` flag, the
``GAMECAT_CONFIG`` env var, or the nearest ``gamecat.toml`` at or above
the starting directory. A file named explicitly must exist; a walk-up
that finds nothing just means code defaults apply.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "gamecat.toml"
CONFIG_ENV_VAR = "GAMECAT_CONFIG"

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A named config file is missing, unreadable, or not valid TOML."""


class ConfigOrigin(StrEnum):
    """How the config file was chosen."""

    FLAG = "flag"
    ENV = "env"
    WALK_UP = "walk-up"


@dataclass(frozen=True)
class ConfigFile:
    """A located config file and the way it was found."""

    path: Path
    origin: ConfigOrigin

    def read(self) -> dict[str, Any]:
        """Parse the file into raw section tables.

        Raises:
            ConfigError: If the file cannot be read or is not valid TOML.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot read {self.path}: {exc.strerror or exc}"
            raise ConfigError(msg) from exc
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {self.path}: {exc}"
            raise ConfigError(msg) from exc
        logger.debug("Read config %s (%s): sections %s", self.path, self.origin, sorted(data))
        return data


def locate_config(
    explicit: str | Path | None = None,
    start: Path | None = None,
) -> ConfigFile | None:
    """Pick the config file for this invocation, or None to use defaults.

    Raises:
        ConfigError: If *explicit* or ``GAMECAT_CONFIG`` names a missing file.
    """
    if explicit:
        return _named(Path(explicit), ConfigOrigin.FLAG)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _named(Path(env_path), ConfigOrigin.ENV)
    found = _walk_up((start or Path.cwd()).resolve())
    if found is None:
        return None
    return ConfigFile(found, ConfigOrigin.WALK_UP)


def _named(path: Path, origin: ConfigOrigin) -> ConfigFile:
    if not path.is_file():
        via = "--config" if origin is ConfigOrigin.FLAG else CONFIG_ENV_VAR
        msg = f"Config file not found: {path} (from {via})"
        raise ConfigError(msg)
    return ConfigFile(path, origin)


def _walk_up(directory: Path) -> Path | None:
    for folder in (directory, *directory.parents):
        candidate = folder / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
