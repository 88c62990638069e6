"""Route data: compiled route nodes, flattened records, matches and locations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode

from perch.views import ViewUnit


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/users``           (is_param=False)
    Param:     ``/{id}``            (is_param=True, param_name="id")
    Typed:     ``/{id:int}``        (is_param=True, param_name="id", param_type="int")
    Catch-all: ``/{rest:path}``     (is_param=True, param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class RouteMeta:
    """Display metadata carried by a route.

    Used for titles and breadcrumbs only; never consulted for access
    decisions.
    """

    title: str = ""
    icon: str | None = None
    permissions: tuple[str, ...] = ()
    full_path: str = ""


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A router-installable route, possibly with nested children.

    Top-level paths are absolute (a missing leading ``/`` is implied);
    child paths are relative to their parent unless they start with ``/``.
    An empty child path renders at the parent's own path.
    """

    path: str
    name: str | None = None
    component: ViewUnit | None = None
    meta: RouteMeta = field(default_factory=RouteMeta)
    children: tuple[RouteNode, ...] = ()
    redirect: str | None = None

    def walk(self) -> list[RouteNode]:
        """This node and every descendant, depth-first in source order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A route node paired with its absolute path and ancestry."""

    node: RouteNode
    path: str
    parent: RouteRecord | None = None

    @property
    def name(self) -> str | None:
        return self.node.name

    @property
    def chain(self) -> tuple[RouteNode, ...]:
        """Nodes from the top-level route down to this one."""
        if self.parent is None:
            return (self.node,)
        return (*self.parent.chain, self.node)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful path resolution."""

    record: RouteRecord
    params: dict[str, str]

    @property
    def matched(self) -> tuple[RouteNode, ...]:
        return self.record.chain

    @property
    def name(self) -> str | None:
        return self.record.name

    @property
    def component(self) -> ViewUnit | None:
        return self.record.node.component


@dataclass(frozen=True, slots=True)
class Location:
    """A navigation target: a path plus query parameters."""

    path: str
    query: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, target: str | Location) -> Location:
        """Parse ``"/path?key=value"``; locations pass through unchanged."""
        if isinstance(target, Location):
            return target
        path, _, query = target.partition("?")
        return cls(path=path or "/", query=dict(parse_qsl(query)))

    @property
    def full_path(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query, safe='/')}"

    def __str__(self) -> str:
        return self.full_path


@dataclass(frozen=True, slots=True)
class Redirect:
    """A hook's request to navigate somewhere else instead."""

    location: Location
    replace: bool = False

    @classmethod
    def to(cls, target: str | Location, *, replace: bool = False) -> Redirect:
        return cls(location=Location.parse(target), replace=replace)


@dataclass(frozen=True, slots=True)
class Navigation:
    """A settled navigation."""

    location: Location
    match: RouteMatch
    redirected_from: Location | None = None
    replace: bool = False
