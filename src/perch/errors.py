"""Perch exception hierarchy.

Shared across the router, compiler, route table and guard so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when the router or console is wired incorrectly.

    Typically a duplicate route name or an invalid route path.
    """


class NavigationError(PerchError):
    """Raised when a navigation cannot settle (e.g. a redirect loop)."""


@dataclass(frozen=True, slots=True)
class RouteNotFound(PerchError):  # noqa: N818 (mirrors the 404 it stands for)
    """No route matched the navigation target."""

    path: str
    status: int = 404

    def __str__(self) -> str:
        return f"{self.status}: No route matches {self.path!r}"


class MenuFetchError(PerchError):
    """The menu API could not be reached or returned an unreadable body.

    Business-level failures (``code != 200``) are *not* raised; they
    come back as a ``MenuResponse`` and the guard decides.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
