"""Navigation guard — the pre-navigation state machine.

Evaluated before every navigation; there is no background task. The
state is derived each time from the auth predicate and the installer's
flag::

    UNAUTHENTICATED --login--> AUTHENTICATED_PENDING_INSTALL
        --(first navigation: fetch, compile, install)--> AUTHENTICATED_INSTALLED
    any --logout/reset--> UNAUTHENTICATED

A failed menu fetch never blocks navigation. The dynamic routes stay
uninstalled and the next navigation tries again.
"""

import logging
from enum import Enum

from perch.audit import emit_audit_event
from perch.auth import AuthState
from perch.config import NavigationConfig
from perch.menus.api import MenuAPI
from perch.routing.route import Location, Redirect
from perch.routing.table import RouteInstaller

logger = logging.getLogger("perch.guard")


class GuardState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_PENDING_INSTALL = "authenticated_pending_install"
    AUTHENTICATED_INSTALLED = "authenticated_installed"


class NavigationGuard:
    """Pre-navigation hook deciding install, redirect or allow.

    Usage::

        guard = NavigationGuard(tokens, menu_client, installer, config)
        router.before_each(guard)

    Returns ``None`` to allow a navigation or a :class:`Redirect`.
    """

    __slots__ = ("_auth", "_config", "_installer", "_menus")

    def __init__(
        self,
        auth: AuthState,
        menus: MenuAPI,
        installer: RouteInstaller,
        config: NavigationConfig | None = None,
    ) -> None:
        self._auth = auth
        self._menus = menus
        self._installer = installer
        self._config = config or NavigationConfig()

    @property
    def state(self) -> GuardState:
        if not self._auth.is_logged_in():
            return GuardState.UNAUTHENTICATED
        if not self._installer.installed:
            return GuardState.AUTHENTICATED_PENDING_INSTALL
        return GuardState.AUTHENTICATED_INSTALLED

    def is_public(self, location: Location) -> bool:
        return location.path in self._config.public_paths

    async def _install(self, to: Location) -> bool:
        """Fetch, compile and install the menu routes. False on any failure."""
        try:
            response = await self._menus.fetch_user_menus()
            if not response.ok:
                logger.error(
                    "Menu fetch rejected: code=%s message=%r", response.code, response.message
                )
                emit_audit_event(
                    "guard.install.failed", path=to.path, details={"code": response.code}
                )
                return False
            self._installer.install_menus(response.data or [])
        except Exception as exc:
            logger.exception("Failed to initialise dynamic routes")
            emit_audit_event("guard.install.failed", path=to.path, error=exc)
            return False
        return True

    async def __call__(self, to: Location, from_: Location | None = None) -> Redirect | None:
        cfg = self._config

        if self.state is GuardState.AUTHENTICATED_PENDING_INSTALL and await self._install(to):
            if to.path == "/":
                return Redirect.to(cfg.landing_path, replace=True)
            # Re-dispatch the original target so the new routes match it
            return Redirect(location=to, replace=True)

        logged_in = self._auth.is_logged_in()
        if not logged_in and not self.is_public(to):
            logger.debug("Unauthenticated navigation to %s, redirecting to login", to)
            return Redirect(
                location=Location(
                    path=cfg.login_path,
                    query={cfg.redirect_query_key: to.full_path},
                )
            )

        if logged_in and to.path in cfg.auth_paths:
            return Redirect.to(cfg.landing_path)

        return None
