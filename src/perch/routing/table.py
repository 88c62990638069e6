"""Route table manager — owns the menu-derived routes in the live router.

Installation is idempotent and reversal is exact: the manager records
precisely which top-level names it put into the router, and ``reset()``
removes those and nothing else. Other route owners (static base routes,
plugins) are never touched.

There is no lock around the state. The console runs on a single event
loop, and ``installed`` is the last thing ``install()`` writes, so a
racing second navigation at worst repeats a fetch and then finds the
table already installed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from perch.audit import emit_audit_event
from perch.errors import ConfigurationError
from perch.menus.types import MenuNode
from perch.routing.compiler import RouteCompiler
from perch.routing.route import RouteMeta, RouteNode
from perch.routing.router import Router
from perch.views import NOT_FOUND_VIEW, ViewUnit

logger = logging.getLogger("perch.routing")


@dataclass(slots=True)
class RouteTableState:
    """Process-wide installation state, one per console.

    Attributes:
        installed: True once the menu forest is live in the router.
        installed_names: Exactly the top-level names this manager added.
        menus: The menu forest the installed routes were compiled from.
    """

    installed: bool = False
    installed_names: set[str] = field(default_factory=set)
    menus: list[MenuNode] = field(default_factory=list)

    def clear(self) -> None:
        self.installed_names.clear()
        self.menus.clear()
        self.installed = False


def catch_all_route(
    name: str = "NotFoundCatchAll",
    path: str = "/{path_match:path}",
    component: ViewUnit = NOT_FOUND_VIEW,
) -> RouteNode:
    """The wildcard route every unmatched path lands on."""
    return RouteNode(path=path, name=name, component=component, meta=RouteMeta(title="Not Found"))


class RouteTableManager:
    """Install and remove the dynamic route forest.

    Usage::

        manager = RouteTableManager(router)
        manager.install(routes)   # no-op when already installed
        manager.reset()           # safe when nothing is installed
    """

    __slots__ = ("_catch_all", "_router", "_state")

    def __init__(
        self,
        router: Router,
        state: RouteTableState | None = None,
        *,
        catch_all: RouteNode | None = None,
    ) -> None:
        self._router = router
        self._state = state if state is not None else RouteTableState()
        self._catch_all = catch_all if catch_all is not None else catch_all_route()

    @property
    def state(self) -> RouteTableState:
        return self._state

    @property
    def installed(self) -> bool:
        return self._state.installed

    @property
    def installed_names(self) -> frozenset[str]:
        return frozenset(self._state.installed_names)

    @property
    def menus(self) -> list[MenuNode]:
        """Menus the current table was built from, for navigation chrome."""
        return list(self._state.menus)

    def set_menus(self, menus: Iterable[MenuNode]) -> None:
        self._state.menus = list(menus)

    def _add(self, route: RouteNode) -> bool:
        try:
            self._router.add_route(route)
        except ConfigurationError as exc:
            logger.warning("Skipping route %r: %s", route.name, exc)
            return False
        return True

    def install(self, forest: Iterable[RouteNode]) -> None:
        """Add every top-level route not already live, then the catch-all.

        Does nothing when the table is already installed.
        """
        state = self._state
        if state.installed:
            logger.debug("Route table already installed, skipping")
            return

        for route in forest:
            if not route.name:
                logger.warning("Skipping unnamed top-level route at %r", route.path)
                continue
            if self._router.has_route(route.name):
                continue
            if self._add(route):
                state.installed_names.add(route.name)

        # Registered last: lowest-priority match for anything unmatched
        name = self._catch_all.name or ""
        if not self._router.has_route(name) and self._add(self._catch_all):
            state.installed_names.add(name)

        state.installed = True
        logger.info("Installed %d route(s)", len(state.installed_names))
        emit_audit_event("routes.installed", names=state.installed_names)

    def reset(self) -> None:
        """Remove exactly the routes this manager installed and clear all state."""
        state = self._state
        removed = sorted(state.installed_names)
        for name in removed:
            self._router.remove_route(name)
        state.clear()
        if removed:
            logger.info("Removed %d route(s)", len(removed))
            emit_audit_event("routes.reset", names=removed)


@runtime_checkable
class RouteInstaller(Protocol):
    """What the navigation guard needs from the route table."""

    @property
    def installed(self) -> bool: ...

    def install_menus(self, menus: Iterable[MenuNode]) -> None: ...

    def reset(self) -> None: ...


class MenuRouteInstaller:
    """Compile a menu forest and hand the routes to the manager."""

    __slots__ = ("_compiler", "_manager")

    def __init__(self, compiler: RouteCompiler, manager: RouteTableManager) -> None:
        self._compiler = compiler
        self._manager = manager

    @property
    def installed(self) -> bool:
        return self._manager.installed

    @property
    def manager(self) -> RouteTableManager:
        return self._manager

    def install_menus(self, menus: Iterable[MenuNode]) -> None:
        if self._manager.installed:
            return
        menus = list(menus)
        routes = self._compiler.compile(menus)
        self._manager.set_menus(menus)
        self._manager.install(routes)

    def reset(self) -> None:
        self._manager.reset()
