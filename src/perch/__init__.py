"""Perch: menu-driven route tables for administration consoles.

Compiles the server-provided, per-user menu tree into live routes,
installs them on the first authenticated navigation and removes them,
exactly, on logout.

Basic usage::

    from perch import Console, NavigationConfig, TokenStore

    tokens = TokenStore()
    console = Console(NavigationConfig(views_dir="views"), tokens=tokens)

    tokens.set(access_token)
    navigation = await console.navigate("/tools/paste")
    navigation.match.component.load()

    await console.logout()
"""

__version__ = "0.1.0"
__all__ = [
    "ComponentResolver",
    "ConfigurationError",
    "Console",
    "Location",
    "MenuClient",
    "MenuNode",
    "MenuResponse",
    "Navigation",
    "NavigationConfig",
    "NavigationError",
    "NavigationGuard",
    "PerchError",
    "Redirect",
    "RouteCompiler",
    "RouteNode",
    "RouteNotFound",
    "RouteTableManager",
    "Router",
    "TokenStore",
    "ViewUnit",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Console":
        from perch.app import Console

        return Console

    if name == "NavigationConfig":
        from perch.config import NavigationConfig

        return NavigationConfig

    if name == "TokenStore":
        from perch.auth import TokenStore

        return TokenStore

    if name == "NavigationGuard":
        from perch.guard import NavigationGuard

        return NavigationGuard

    if name in ("MenuClient", "MenuNode", "MenuResponse"):
        from perch import menus as _menus

        return getattr(_menus, name)

    if name == "ComponentResolver":
        from perch.resolver import ComponentResolver

        return ComponentResolver

    if name == "ViewUnit":
        from perch.views import ViewUnit

        return ViewUnit

    if name == "RouteCompiler":
        from perch.routing.compiler import RouteCompiler

        return RouteCompiler

    if name == "RouteTableManager":
        from perch.routing.table import RouteTableManager

        return RouteTableManager

    if name == "Router":
        from perch.routing.router import Router

        return Router

    if name in ("Location", "Navigation", "Redirect", "RouteNode"):
        from perch.routing import route as _route

        return getattr(_route, name)

    if name in (
        "ConfigurationError",
        "NavigationError",
        "PerchError",
        "RouteNotFound",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
