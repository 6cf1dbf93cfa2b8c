"""Tests for SchemaRegistry."""

from __future__ import annotations

import pytest

from gamecat.domain.errors import SchemaConfigurationError
from gamecat.domain.fields import enum, field
from gamecat.domain.registry import SchemaRegistry
from gamecat.domain.variants import GameProfile, VariantSchema


def _profile(game_id: str) -> GameProfile:
    variant = VariantSchema("thing", base_fields=(field("type", enum("thing")),), data_fields=())
    return GameProfile(game_id, [variant])


class TestSchemaRegistry:
    def test_lookup(self) -> None:
        registry = SchemaRegistry([_profile("a"), _profile("b")])
        assert registry.lookup("a") is not None
        assert registry.lookup("c") is None
        assert registry.lookup(None) is None
        assert registry.games == ("a", "b")
        assert len(registry) == 2
        assert "b" in registry

    def test_duplicate_game_rejected(self) -> None:
        with pytest.raises(SchemaConfigurationError):
            SchemaRegistry([_profile("a"), _profile("a")])

    def test_restricted_to(self) -> None:
        registry = SchemaRegistry([_profile("a"), _profile("b")]).restricted_to(["b"])
        assert registry.games == ("b",)

    def test_restricted_to_unknown_game(self) -> None:
        with pytest.raises(SchemaConfigurationError, match="zelda"):
            SchemaRegistry([_profile("a")]).restricted_to(["zelda"])

    def test_iterates_profiles(self) -> None:
        registry = SchemaRegistry([_profile("a")])
        assert [p.game_id for p in registry] == ["a"]
