"""Tests for perch.config — NavigationConfig defaults and immutability."""

import dataclasses

import pytest

from perch.config import NavigationConfig


class TestNavigationConfig:
    def test_defaults(self) -> None:
        config = NavigationConfig()
        assert config.login_path == "/login"
        assert config.landing_path == "/dashboard"
        assert config.public_paths == frozenset({"/login", "/register", "/404"})
        assert config.catch_all_name == "NotFoundCatchAll"
        assert config.max_redirects == 10

    def test_auth_paths(self) -> None:
        config = NavigationConfig(login_path="/signin", register_path="/signup")
        assert config.auth_paths == frozenset({"/signin", "/signup"})

    def test_frozen(self) -> None:
        config = NavigationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.landing_path = "/home"  # type: ignore[misc]
