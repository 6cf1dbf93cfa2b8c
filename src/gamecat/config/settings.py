"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``GAMECAT_*`` prefix, ``__`` for nested sections
  3. TOML file: ``gamecat.toml`` chosen by :func:`locate_config`
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gamecat.config.discovery import ConfigError, ConfigOrigin, locate_config
from gamecat.config.models import OutputConfig, RegistryConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed already-parsed ``gamecat.toml`` tables to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Parsed TOML for the settings object under construction on this thread.
_tls = threading.local()


class GamecatSettings(BaseSettings):
    """Settings for one gamecat invocation.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        config_origin: How that file was chosen (flag, env, walk-up).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GAMECAT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    config_origin: ConfigOrigin | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML tables between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_data", None) or {}),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> GamecatSettings:
        """Construct settings for a CLI invocation.

        Uses the explicit *config_path* when given, otherwise
        ``GAMECAT_CONFIG`` or a walk-up from *start*. CLI flags override
        everything else.

        Raises:
            click.ClickException: If the chosen config file is missing or
                not valid TOML.
        """
        try:
            config = locate_config(config_path, start)
            data = config.read() if config is not None else {}
        except ConfigError as exc:
            import click

            raise click.ClickException(str(exc)) from exc

        _tls.toml_data = data
        try:
            return cls(
                config_path=config.path if config is not None else None,
                config_origin=config.origin if config is not None else None,
                **cli_flags,
            )
        finally:
            _tls.toml_data = None
