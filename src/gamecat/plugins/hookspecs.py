"""Pluggy hook specifications for gamecat.

One setup-time hook lets installed plugins contribute additional game
profiles before the schema registry is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from gamecat.domain.variants import GameProfile

PROJECT_NAME = "gamecat"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class GamecatHookSpec:
    """Hook specifications for the gamecat plugin system."""

    @hookspec
    def register_game_profiles(self) -> list[GameProfile] | None:
        """Return additional GameProfiles to register alongside the built-ins."""
