"""Console composition root.

Builds and wires the single router, route table, resolver and guard a
console process uses. Nothing in perch keeps these as module globals;
everything hangs off a :class:`Console` instance.
"""

import logging
from pathlib import Path
from typing import Any

from perch.auth import LogoutAPI, TokenStore
from perch.auth import logout as _logout
from perch.config import NavigationConfig
from perch.guard import GuardState, NavigationGuard
from perch.menus.api import MenuAPI, MenuClient
from perch.resolver import ComponentResolver
from perch.routing.compiler import PermissionFilter, RouteCompiler
from perch.routing.route import Location, Navigation, RouteMeta, RouteNode
from perch.routing.router import Router
from perch.routing.table import (
    MenuRouteInstaller,
    RouteTableManager,
    RouteTableState,
    catch_all_route,
)
from perch.views import SHELL_LAYOUT

logger = logging.getLogger("perch")


def base_routes(config: NavigationConfig, resolver: ComponentResolver) -> list[RouteNode]:
    """Static routes available before any menu is installed."""
    return [
        RouteNode(path="/", redirect=config.landing_path),
        RouteNode(
            path="/",
            name="Root",
            component=SHELL_LAYOUT,
            children=(
                RouteNode(
                    path=config.landing_path.lstrip("/"),
                    name="Dashboard",
                    component=resolver.resolve("Dashboard"),
                    meta=RouteMeta(title="Dashboard", full_path=config.landing_path),
                ),
            ),
        ),
        RouteNode(
            path=config.login_path,
            name="Login",
            component=resolver.resolve("Login"),
            meta=RouteMeta(title="Login"),
        ),
        RouteNode(
            path=config.register_path,
            name="Register",
            component=resolver.resolve("Register"),
            meta=RouteMeta(title="Register"),
        ),
        RouteNode(
            path=config.not_found_path,
            name=config.not_found_name,
            component=resolver.not_found,
            meta=RouteMeta(title="Not Found"),
        ),
    ]


class Console:
    """The administration console's navigation core.

    Usage::

        tokens = TokenStore()
        console = Console(
            NavigationConfig(views_dir="views"),
            tokens=tokens,
            client=MenuClient("https://console.example/api", tokens),
        )
        tokens.set(access_token)
        navigation = await console.navigate("/tools/paste")
        await console.logout()

    *client* must provide ``fetch_user_menus()``; ``logout()`` also
    needs a ``logout()`` coroutine on it. When omitted, a
    :class:`MenuClient` is built from ``config.api_base_url``.

    Route permissions are display metadata unless *permission_filter*
    is given, e.g. ``granted(user.permission_codes)``.
    """

    __slots__ = (
        "_client",
        "_guard",
        "_installer",
        "_manager",
        "_remove_guard",
        "_resolver",
        "_router",
        "config",
        "tokens",
    )

    def __init__(
        self,
        config: NavigationConfig | None = None,
        *,
        tokens: TokenStore | None = None,
        client: MenuAPI | None = None,
        resolver: ComponentResolver | None = None,
        state: RouteTableState | None = None,
        permission_filter: PermissionFilter | None = None,
    ) -> None:
        self.config: NavigationConfig = config or NavigationConfig()
        self.tokens: TokenStore = tokens if tokens is not None else TokenStore()
        self._resolver = resolver if resolver is not None else _default_resolver(self.config)
        self._client: Any = client
        if self._client is None:
            self._client = MenuClient(
                self.config.api_base_url,
                self.tokens,
                timeout=self.config.api_timeout,
            )

        self._router = Router(
            base_routes(self.config, self._resolver),
            max_redirects=self.config.max_redirects,
            fallback=self.config.not_found_name,
        )
        self._manager = RouteTableManager(
            self._router,
            state,
            catch_all=catch_all_route(
                self.config.catch_all_name,
                self.config.catch_all_path,
                self._resolver.not_found,
            ),
        )
        self._installer = MenuRouteInstaller(
            RouteCompiler(self._resolver, permission_filter=permission_filter),
            self._manager,
        )
        self._guard = NavigationGuard(self.tokens, self._client, self._installer, self.config)
        self._remove_guard = self._router.before_each(self._guard)

    @property
    def router(self) -> Router:
        return self._router

    @property
    def route_table(self) -> RouteTableManager:
        return self._manager

    @property
    def resolver(self) -> ComponentResolver:
        return self._resolver

    @property
    def state(self) -> GuardState:
        return self._guard.state

    async def navigate(self, target: str | Location) -> Navigation:
        return await self._router.navigate(target)

    async def reset_router(self) -> None:
        """Remove every menu-derived route and forget the menus."""
        self._installer.reset()

    async def logout(self) -> Any:
        """Log out: server call, then token and route reset regardless of outcome."""
        client: LogoutAPI = self._client
        return await _logout(client, self.reset_router, self.tokens)

    async def aclose(self) -> None:
        self._remove_guard()
        aclose = getattr(self._client, "aclose", None)
        if aclose is not None:
            await aclose()


def _default_resolver(config: NavigationConfig) -> ComponentResolver:
    if config.views_dir is not None and Path(config.views_dir).is_dir():
        return ComponentResolver.from_directory(config.views_dir)
    logger.debug("No views directory at %r, every component resolves to NotFound", config.views_dir)
    return ComponentResolver()
