"""BaseService: shared foundation for gamecat services.

Every service receives a :class:`ValidationEngine` at construction time;
the engine's registry decides which games and variants are available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gamecat.domain.engine import ValidationEngine
    from gamecat.domain.registry import SchemaRegistry


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def list_games(self) -> ServiceResult:
                for profile in self._registry:
                    ...
    """

    def __init__(self, engine: ValidationEngine) -> None:
        self._engine = engine

    @property
    def _registry(self) -> SchemaRegistry:
        return self._engine.registry
