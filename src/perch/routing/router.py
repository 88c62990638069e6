"""Live router with named, removable routes and trie-based path matching.

Unlike a build-once route table, routes here come and go while the
console runs: the route table manager adds the menu-derived forest after
login and removes it again on logout. The match trie is rebuilt lazily
after every change.

A route with children matches its own path, rendering its component
with an empty outlet, unless one of its children has an empty path. That
child then renders at the parent's path instead.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from perch.errors import ConfigurationError, NavigationError, RouteNotFound
from perch.routing.route import (
    Location,
    Navigation,
    PathSegment,
    Redirect,
    RouteMatch,
    RouteNode,
    RouteRecord,
)

logger = logging.getLogger("perch.routing")

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

# A pre-navigation hook: (to, from) -> None to allow, Redirect to divert
NavigationHook: TypeAlias = Callable[[Location, Location | None], Awaitable[Redirect | None]]


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/files/{rest:path}" -> [PathSegment("files"), PathSegment("{rest:path}", param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in route path {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def join_paths(parent: str, child: str) -> str:
    """Compose a child route path onto its parent's absolute path."""
    if child.startswith("/"):
        return child
    if not child:
        return parent or "/"
    return f"{parent.rstrip('/')}/{child}"


class _TrieNode:
    """A node in the match trie. Rebuilt from scratch on every change."""

    __slots__ = ("catch_all", "children", "param_child", "record")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all record (path converter), consumes the rest of the path
        self.catch_all: _CatchAllEdge | None = None
        # Record terminating at this node; first registration wins
        self.record: RouteRecord | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge."""

    param_name: str
    record: RouteRecord


def _insert(root: _TrieNode, record: RouteRecord) -> None:
    node = root
    for seg in parse_path(record.path):
        if seg.is_param and seg.param_type == "path":
            if node.catch_all is None:
                node.catch_all = _CatchAllEdge(param_name=seg.param_name or "path", record=record)
            return

        if seg.is_param:
            if node.param_child is None:
                pattern, _ = CONVERTERS[seg.param_type]
                node.param_child = _ParamEdge(
                    param_name=seg.param_name or "",
                    regex=re.compile(f"^{pattern}$"),
                    node=_TrieNode(),
                )
            node = node.param_child.node
        else:
            if seg.value not in node.children:
                node.children[seg.value] = _TrieNode()
            node = node.children[seg.value]

    if node.record is None:
        node.record = record


def _match(
    node: _TrieNode,
    parts: list[str],
    index: int,
    params: dict[str, str],
) -> tuple[RouteRecord, dict[str, str]] | None:
    """Recursively match path parts: static, then parameter, then catch-all."""
    if index == len(parts):
        if node.record is not None:
            return node.record, params
        return None

    part = parts[index]

    if part in node.children:
        result = _match(node.children[part], parts, index + 1, params)
        if result is not None:
            return result

    if node.param_child is not None:
        edge = node.param_child
        if edge.regex.match(part):
            result = _match(edge.node, parts, index + 1, {**params, edge.param_name: part})
            if result is not None:
                return result

    if node.catch_all is not None:
        remaining = "/".join(parts[index:])
        return node.catch_all.record, {**params, node.catch_all.param_name: remaining}

    return None


class Router:
    """The console's live router.

    Usage::

        router = Router([RouteNode("/login", name="Login", component=login_view)])
        router.before_each(guard)
        router.add_route(RouteNode("/tools", name="Tools", children=(...)))
        navigation = await router.navigate("/tools/paste")
        router.remove_route("Tools")

    Top-level routes are kept in registration order. Names must be
    unique across every installed node, nested ones included.

    When *fallback* names an installed route, navigation to a path
    nothing matches settles on that route instead of raising.
    """

    __slots__ = ("_current", "_fallback", "_hooks", "_max_redirects", "_routes", "_trie")

    def __init__(
        self,
        routes: Iterable[RouteNode] = (),
        *,
        max_redirects: int = 10,
        fallback: str | None = None,
    ) -> None:
        self._routes: list[RouteNode] = []
        self._hooks: list[NavigationHook] = []
        self._trie: _TrieNode | None = None
        self._current: Location | None = None
        self._max_redirects = max_redirects
        self._fallback = fallback
        for route in routes:
            self.add_route(route)

    # -- Route table ----------------------------------------------------------

    @property
    def routes(self) -> list[RouteNode]:
        """Top-level routes, in registration order."""
        return list(self._routes)

    @property
    def current(self) -> Location | None:
        """Location of the last settled navigation."""
        return self._current

    def names(self) -> set[str]:
        """Every route name currently installed, nested ones included."""
        return {node.name for route in self._routes for node in route.walk() if node.name}

    def has_route(self, name: str) -> bool:
        return name in self.names()

    def add_route(self, route: RouteNode) -> Callable[[], None]:
        """Install a top-level route (with its subtree).

        Raises ``ConfigurationError`` without touching the table when
        any name in the subtree is already installed or repeated, or a
        path is malformed. Returns a callable that removes the route.
        """
        names = [node.name for node in route.walk() if node.name]
        clashes = set(names) & self.names()
        if clashes or len(names) != len(set(names)):
            dupes = sorted(clashes or {n for n in names if names.count(n) > 1})
            msg = f"Route name(s) already in use: {', '.join(dupes)}"
            raise ConfigurationError(msg)
        for record in _flatten([route]):
            parse_path(record.path)

        self._routes.append(route)
        self._trie = None
        logger.debug("Added route %r at %s", route.name, route.path)

        def remove() -> None:
            if route in self._routes:
                self._routes.remove(route)
                self._trie = None

        return remove

    def remove_route(self, name: str) -> None:
        """Remove the top-level route called *name*. Unknown names are ignored."""
        for route in self._routes:
            if route.name == name:
                self._routes.remove(route)
                self._trie = None
                logger.debug("Removed route %r", name)
                return

    def get_routes(self) -> list[RouteRecord]:
        """Every route as a flattened record with its absolute path."""
        return _flatten(self._routes)

    def _compiled(self) -> _TrieNode:
        if self._trie is None:
            root = _TrieNode()
            for record in self.get_routes():
                node = record.node
                if node.redirect is None and any(not child.path for child in node.children):
                    continue
                _insert(root, record)
            self._trie = root
        return self._trie

    def resolve(self, target: str | Location) -> RouteMatch:
        """Match a path against the installed routes.

        Raises ``RouteNotFound`` if nothing matches.
        """
        path = Location.parse(target).path
        parts = [p for p in path.strip("/").split("/") if p]
        result = _match(self._compiled(), parts, 0, {})
        if result is None:
            raise RouteNotFound(path)
        record, params = result
        return RouteMatch(record=record, params=params)

    def _resolve_or_fallback(self, location: Location) -> RouteMatch:
        try:
            return self.resolve(location)
        except RouteNotFound:
            name = self._fallback
            record = next((r for r in self.get_routes() if name and r.node.name == name), None)
            if record is None:
                raise
            logger.warning("No route matches %s, falling back to %r", location.path, self._fallback)
            return RouteMatch(record=record, params={})

    # -- Navigation -----------------------------------------------------------

    def before_each(self, hook: NavigationHook) -> Callable[[], None]:
        """Register a pre-navigation hook. Returns a callable that unregisters it."""
        self._hooks.append(hook)

        def remove() -> None:
            if hook in self._hooks:
                self._hooks.remove(hook)

        return remove

    async def _run_hooks(self, to: Location) -> Redirect | None:
        for hook in self._hooks:
            outcome = await hook(to, self._current)
            if outcome is not None:
                return outcome
        return None

    async def navigate(self, target: str | Location) -> Navigation:
        """Navigate to *target*, running every hook first.

        Hook redirects and static route redirects are followed, each
        pass re-entering the hooks, up to ``max_redirects`` times.

        Raises ``RouteNotFound`` when the final target matches nothing
        and no fallback route is installed, and ``NavigationError`` when
        redirects do not settle.
        """
        to = Location.parse(target)
        redirected_from: Location | None = None
        replace = False

        for _ in range(self._max_redirects + 1):
            outcome = await self._run_hooks(to)
            if outcome is not None:
                logger.debug("Navigation to %s redirected to %s", to, outcome.location)
                redirected_from = redirected_from or to
                replace = replace or outcome.replace
                to = outcome.location
                continue

            match = self._resolve_or_fallback(to)
            if match.record.node.redirect is not None:
                redirected_from = redirected_from or to
                to = Location.parse(match.record.node.redirect)
                continue

            self._current = to
            return Navigation(
                location=to,
                match=match,
                redirected_from=redirected_from,
                replace=replace,
            )

        msg = f"Navigation to {redirected_from or to} exceeded {self._max_redirects} redirects"
        raise NavigationError(msg)


def _flatten(routes: Iterable[RouteNode]) -> list[RouteRecord]:
    records: list[RouteRecord] = []

    def visit(node: RouteNode, parent: RouteRecord | None) -> None:
        if parent is None:
            path = node.path if node.path.startswith("/") else f"/{node.path}"
        else:
            path = join_paths(parent.path, node.path)
        record = RouteRecord(node=node, path=path, parent=parent)
        records.append(record)
        for child in node.children:
            visit(child, record)

    for route in routes:
        visit(route, None)
    return records
