"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``gamecat.plugins`` group.
Capabilities: contributing GameProfiles to the schema registry.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable

import pluggy

from gamecat.domain.variants import GameProfile
from gamecat.plugins.hookspecs import PROJECT_NAME, GamecatHookSpec

ENTRY_POINT_GROUP = "gamecat.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and profile collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(GamecatHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load plugins registered under the ``gamecat.plugins`` entry point group.

        Returns a list of loaded plugin names.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_profiles(self, reserved: Iterable[str] = ()) -> list[GameProfile]:
        """Gather GameProfiles contributed by every registered plugin.

        Profiles whose game id is in *reserved* (the built-in games) or was
        already contributed by an earlier plugin are skipped with a warning,
        as are non-profile return values and plugins whose hook raises.
        """
        taken = set(reserved)
        profiles: list[GameProfile] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            for profile in self._plugin_profiles(plugin, plugin_name):
                if profile.game_id in taken:
                    logger.warning(
                        "Skipping game %r from plugin %s: already registered",
                        profile.game_id,
                        plugin_name,
                    )
                    continue
                taken.add(profile.game_id)
                profiles.append(profile)
                logger.debug("Plugin %s contributed game %s", plugin_name, profile.game_id)
        return profiles

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _plugin_profiles(plugin: object, plugin_name: str) -> list[GameProfile]:
        hook = getattr(plugin, "register_game_profiles", None)
        if hook is None:
            return []

        try:
            contributed = hook()
        except Exception:
            logger.warning(
                "Failed to collect game profiles from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return []

        if contributed is None:
            return []
        if not isinstance(contributed, (list, tuple)):
            logger.warning("Plugin %s returned a non-list of game profiles", plugin_name)
            return []

        profiles: list[GameProfile] = []
        for item in contributed:
            if isinstance(item, GameProfile):
                profiles.append(item)
            else:
                logger.warning(
                    "Skipping non-GameProfile %r from plugin %s",
                    item,
                    plugin_name,
                )
        return profiles

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
