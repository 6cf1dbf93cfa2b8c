"""CatalogService: what the registry knows: games, variants, field docs."""

from __future__ import annotations

from gamecat.services.base import BaseService
from gamecat.services.result import (
    UNKNOWN_VARIANT,
    UNSUPPORTED_GAME,
    ServiceError,
    ServiceResult,
)


class CatalogService(BaseService):
    """Read-only views over the schema registry."""

    def list_games(self) -> ServiceResult:
        """List registered games with their discriminant values."""
        games = [
            {
                "game": profile.game_id,
                "discriminant": profile.discriminant_field,
                "types": list(profile.discriminants),
            }
            for profile in self._registry
        ]
        return ServiceResult(
            ok=True,
            op="list_games",
            data={"games": games, "count": len(games)},
        )

    def describe_variant(self, game: str, variant_type: str) -> ServiceResult:
        """Export the field tree and rule statements of one variant."""
        profile = self._registry.lookup(game)
        if profile is None:
            return ServiceResult(
                ok=False,
                op="describe_variant",
                error=ServiceError(
                    code=UNSUPPORTED_GAME,
                    message=f"Unsupported game: {game}",
                    detail={"available": list(self._registry.games)},
                ),
            )

        variant = profile.resolve(variant_type)
        if variant is None:
            return ServiceResult(
                ok=False,
                op="describe_variant",
                error=ServiceError(
                    code=UNKNOWN_VARIANT,
                    message=f"Unknown type {variant_type!r} for {game}",
                    detail={"game": game, "available": list(profile.discriminants)},
                ),
            )

        return ServiceResult(
            ok=True,
            op="describe_variant",
            data={"game": game, **variant.describe()},
        )
