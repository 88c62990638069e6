"""Auth state and the logout flow.

The route table never outlives the session: ``logout()`` resets the
router whether or not the server acknowledged the logout, and only then
lets an API failure propagate.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from perch.audit import emit_audit_event

logger = logging.getLogger("perch.auth")


@runtime_checkable
class AuthState(Protocol):
    """Synchronous, process-wide login predicate."""

    def is_logged_in(self) -> bool: ...


@runtime_checkable
class LogoutAPI(Protocol):
    async def logout(self) -> Any: ...


class TokenStore:
    """In-memory bearer token holder.

    A token's presence is what "logged in" means to the console; expiry
    is signalled by the API layer calling :meth:`clear`.
    """

    __slots__ = ("_token",)

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    @property
    def token(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None

    def is_logged_in(self) -> bool:
        return self._token is not None


async def logout(
    api: LogoutAPI,
    reset_router: Callable[[], Awaitable[None]],
    tokens: TokenStore | None = None,
) -> Any:
    """End the session: call the API, then always drop token and routes.

    Re-raises the API's exception after the local reset has completed.
    """
    try:
        result = await api.logout()
    except Exception as exc:
        logger.warning("Logout call failed, resetting routes anyway: %s", exc)
        emit_audit_event("auth.logout.failed", error=exc)
        if tokens is not None:
            tokens.clear()
        await reset_router()
        raise

    if tokens is not None:
        tokens.clear()
    await reset_router()
    emit_audit_event("auth.logout.success")
    return result
