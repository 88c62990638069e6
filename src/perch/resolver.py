"""Component resolver — logical view id to loadable unit.

Menu data is authored on the server and may name views the deployed
build does not have. Resolution therefore degrades instead of failing:

1. a small static table of high-traffic ids,
2. the view registry enumerated at startup (``views/<id>/index``),
3. the not-found unit, with a warning.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from perch.views import NOT_FOUND_VIEW, ViewUnit, discover_views

logger = logging.getLogger("perch.resolver")

# Views resolved without touching the registry
KNOWN_VIEWS: tuple[str, ...] = ("Dashboard", "Tools/Paste", "UserManagement")


class ComponentResolver:
    """Resolve logical component ids to :class:`ViewUnit` objects.

    Usage::

        resolver = ComponentResolver.from_directory("views")
        unit = resolver.resolve("Tools/Paste")

    ``resolve()`` never raises and always returns a unit.
    """

    __slots__ = ("_not_found", "_registry", "_static")

    def __init__(
        self,
        registry: Mapping[str, ViewUnit] | None = None,
        *,
        static: Mapping[str, ViewUnit] | None = None,
        not_found: ViewUnit = NOT_FOUND_VIEW,
    ) -> None:
        self._registry: dict[str, ViewUnit] = dict(registry or {})
        self._static: dict[str, ViewUnit] = dict(static or {})
        self._not_found = not_found

    @classmethod
    def from_directory(cls, views_dir: str | Path) -> ComponentResolver:
        """Build a resolver from a views tree on disk.

        The static table covers :data:`KNOWN_VIEWS` that exist on disk;
        ``NotFound/index.py``, when present, becomes the fallback unit.
        """
        registry = discover_views(views_dir)
        static = {
            logical_id: registry[logical_id] for logical_id in KNOWN_VIEWS if logical_id in registry
        }
        not_found = registry.get(NOT_FOUND_VIEW.name, NOT_FOUND_VIEW)
        return cls(registry, static=static, not_found=not_found)

    @property
    def not_found(self) -> ViewUnit:
        return self._not_found

    @property
    def known_ids(self) -> frozenset[str]:
        return frozenset(self._static) | frozenset(self._registry)

    def resolve(self, logical_id: str) -> ViewUnit:
        """Return the unit for *logical_id*, or the not-found unit."""
        unit = self._static.get(logical_id)
        if unit is not None:
            return unit

        unit = self._registry.get(logical_id)
        if unit is not None:
            return unit

        logger.warning("Unknown component %r, using %s instead", logical_id, self._not_found.name)
        return self._not_found
