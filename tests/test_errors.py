"""Tests for perch.errors — exception hierarchy and messages."""

from perch.errors import (
    ConfigurationError,
    MenuFetchError,
    NavigationError,
    PerchError,
    RouteNotFound,
)


class TestHierarchy:
    def test_all_are_perch_errors(self) -> None:
        for exc in (ConfigurationError, MenuFetchError, NavigationError, RouteNotFound):
            assert issubclass(exc, PerchError)


class TestMessages:
    def test_route_not_found(self) -> None:
        err = RouteNotFound("/missing")
        assert err.status == 404
        assert str(err) == "404: No route matches '/missing'"

    def test_menu_fetch_error_status(self) -> None:
        err = MenuFetchError("boom", status=503)
        assert str(err) == "boom"
        assert err.status == 503
        assert MenuFetchError("x").status is None
