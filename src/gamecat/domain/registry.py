"""SchemaRegistry: immutable mapping from game id to GameProfile.

Built once at process start and only read afterwards, so any number of
concurrent validations may share it without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from gamecat.domain.errors import SchemaConfigurationError
from gamecat.domain.variants import GameProfile


class SchemaRegistry:
    """Read-only lookup of game profiles."""

    def __init__(self, profiles: Iterable[GameProfile]) -> None:
        table: dict[str, GameProfile] = {}
        for profile in profiles:
            if profile.game_id in table:
                msg = f"Duplicate game profile {profile.game_id!r}"
                raise SchemaConfigurationError(msg)
            table[profile.game_id] = profile
        self._profiles: Mapping[str, GameProfile] = MappingProxyType(table)

    @property
    def profiles(self) -> Mapping[str, GameProfile]:
        return self._profiles

    @property
    def games(self) -> tuple[str, ...]:
        return tuple(self._profiles)

    def lookup(self, game_id: Any) -> GameProfile | None:
        """Return the profile for *game_id*, or None when unsupported."""
        if not isinstance(game_id, str):
            return None
        return self._profiles.get(game_id)

    def restricted_to(self, game_ids: Iterable[str]) -> SchemaRegistry:
        """Return a registry holding only *game_ids*.

        Raises:
            SchemaConfigurationError: If a requested game is not registered.
        """
        wanted = list(dict.fromkeys(game_ids))
        unknown = [g for g in wanted if g not in self._profiles]
        if unknown:
            msg = f"Unknown games {unknown}; registered: {list(self._profiles)}"
            raise SchemaConfigurationError(msg)
        return SchemaRegistry(self._profiles[g] for g in wanted)

    def __contains__(self, game_id: object) -> bool:
        return isinstance(game_id, str) and game_id in self._profiles

    def __iter__(self) -> Iterator[GameProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)
