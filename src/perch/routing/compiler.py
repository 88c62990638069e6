"""Route compiler — menu forest to route forest.

Top-level menu entries always render inside the shell layout, exactly
once. Anything nested below them is anchored by the pass-through
container so the router can compose absolute paths without repeating
the shell. The top-level/nested decision is an explicit
:class:`CompileContext`, not call-site position.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from perch.menus.types import MenuNode
from perch.resolver import ComponentResolver
from perch.routing.route import RouteMeta, RouteNode
from perch.routing.router import join_paths
from perch.views import PASS_THROUGH, SHELL_LAYOUT

logger = logging.getLogger("perch.compiler")

# Suffix of the implicit child synthesized for a childless top-level entry
CONTENT_SUFFIX = "-content"

# Decides whether a menu node (and its subtree) is compiled at all
PermissionFilter: TypeAlias = Callable[[MenuNode], bool]


def granted(codes: Iterable[str]) -> PermissionFilter:
    """Filter keeping nodes without a permission code or with one in *codes*."""
    allowed = frozenset(codes)

    def check(menu: MenuNode) -> bool:
        return menu.permission_code is None or menu.permission_code in allowed

    return check


@dataclass(frozen=True, slots=True)
class CompileContext:
    """Where a menu node sits in the tree being compiled.

    Attributes:
        is_top_level: True for roots of the menu forest.
        parent_path: Absolute path of the parent route (``""`` at the top).
    """

    is_top_level: bool = True
    parent_path: str = ""

    def nested(self, parent_path: str) -> CompileContext:
        return CompileContext(is_top_level=False, parent_path=parent_path)


def _meta(menu: MenuNode, full_path: str, *, icon: bool = True) -> RouteMeta:
    return RouteMeta(
        title=menu.name,
        icon=menu.icon if icon else None,
        permissions=(menu.permission_code,) if menu.permission_code else (),
        full_path=full_path,
    )


class RouteCompiler:
    """Compile menu forests into route forests.

    Usage::

        compiler = RouteCompiler(ComponentResolver.from_directory("views"))
        routes = compiler.compile(menus)

    The result depends only on the input forest, the resolver and the
    optional *permission_filter*. Without a filter every node is compiled;
    route permissions are then display metadata only.
    """

    __slots__ = ("_permits", "_resolver")

    def __init__(
        self,
        resolver: ComponentResolver,
        *,
        permission_filter: PermissionFilter | None = None,
    ) -> None:
        self._resolver = resolver
        self._permits = permission_filter

    def compile(self, forest: Iterable[MenuNode]) -> list[RouteNode]:
        routes: list[RouteNode] = []
        for menu in forest:
            route = self.compile_node(menu, CompileContext())
            if route is not None:
                routes.append(route)
        logger.debug("Compiled %d top-level route(s)", len(routes))
        return routes

    def compile_node(self, menu: MenuNode, context: CompileContext) -> RouteNode | None:
        """Compile one menu node (and its subtree); ``None`` if it is dropped."""
        if not menu.is_navigable:
            return None
        if self._permits is not None and not self._permits(menu):
            logger.debug("Menu %r filtered out by permission %r", menu.name, menu.permission_code)
            return None
        if context.is_top_level:
            return self._compile_top_level(menu)
        return self._compile_nested(menu, context)

    def _compile_children(self, menu: MenuNode, context: CompileContext) -> tuple[RouteNode, ...]:
        compiled = (self.compile_node(child, context) for child in menu.children)
        return tuple(route for route in compiled if route is not None)

    def _compile_top_level(self, menu: MenuNode) -> RouteNode:
        path = menu.path
        full_path = join_paths("/", path)
        children: tuple[RouteNode, ...] = ()

        if menu.children:
            children = self._compile_children(menu, CompileContext().nested(full_path))
        elif menu.component:
            children = (
                RouteNode(
                    path="",
                    name=f"{menu.name}{CONTENT_SUFFIX}",
                    component=self._resolver.resolve(menu.component),
                    meta=_meta(menu, full_path, icon=False),
                ),
            )

        return RouteNode(
            path=path,
            name=menu.name,
            component=SHELL_LAYOUT,
            meta=_meta(menu, full_path),
            children=children,
        )

    def _compile_nested(self, menu: MenuNode, context: CompileContext) -> RouteNode:
        full_path = join_paths(context.parent_path, menu.path)

        if menu.children:
            component = PASS_THROUGH
            children = self._compile_children(menu, context.nested(full_path))
        elif menu.component:
            component = self._resolver.resolve(menu.component)
            children = ()
        else:
            component = PASS_THROUGH
            children = ()

        return RouteNode(
            path=menu.path,
            name=menu.name,
            component=component,
            meta=_meta(menu, full_path),
            children=children,
        )


def compile_menus(forest: Iterable[MenuNode], resolver: ComponentResolver) -> list[RouteNode]:
    """Compile *forest* with *resolver*. Shorthand for ``RouteCompiler(resolver).compile``."""
    return RouteCompiler(resolver).compile(forest)
