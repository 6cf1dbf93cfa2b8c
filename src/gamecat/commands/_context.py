"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy engine initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from gamecat.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from gamecat.config.settings import GamecatSettings
    from gamecat.domain.engine import ValidationEngine
    from gamecat.domain.variants import GameProfile
    from gamecat.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The engine is lazily
    built on first use so ``--help`` and ``--version`` never load plugins.
    """

    def __init__(self, settings: GamecatSettings) -> None:
        self.settings = settings
        self._engine: ValidationEngine | None = None

        # Configure structured logging
        from gamecat.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        if settings.config_path is not None:
            logger.debug("Using config %s (%s)", settings.config_path, settings.config_origin)

    @property
    def engine(self) -> ValidationEngine:
        """The validation engine (created lazily on first access).

        Raises:
            click.ClickException: If ``[registry] games`` names an unknown game.
        """
        if self._engine is None:
            from gamecat.domain.engine import ValidationEngine
            from gamecat.domain.errors import SchemaConfigurationError
            from gamecat.games import build_registry

            registry_config = self.settings.registry
            extra = self._plugin_profiles() if registry_config.load_plugins else []
            try:
                registry = build_registry(registry_config.games, extra_profiles=extra)
            except SchemaConfigurationError as exc:
                raise click.ClickException(f"Invalid [registry] configuration: {exc}") from exc
            self._engine = ValidationEngine(registry)
        return self._engine

    @staticmethod
    def _plugin_profiles() -> list[GameProfile]:
        from gamecat.games import builtin_profiles
        from gamecat.plugins.manager import PluginManager

        manager = PluginManager()
        names = manager.discover_and_load()
        if names:
            logger.debug("Loaded plugins: %s", ", ".join(names))
        return manager.collect_profiles(reserved=(p.game_id for p in builtin_profiles()))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            max_issues_shown=self.settings.output.max_issues_shown,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
