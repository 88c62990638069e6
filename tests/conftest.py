"""Shared fixtures: a resolver with a handful of known views."""

import pytest

from perch.resolver import ComponentResolver
from perch.views import ViewUnit


@pytest.fixture
def resolver() -> ComponentResolver:
    return ComponentResolver(
        {
            "Tools/Paste": ViewUnit(name="Tools/Paste", loader=lambda: "paste-view"),
            "UserManagement": ViewUnit(name="UserManagement", loader=lambda: "users-view"),
            "Login": ViewUnit(name="Login", loader=lambda: "login-view"),
            "Register": ViewUnit(name="Register", loader=lambda: "register-view"),
        },
        static={"Dashboard": ViewUnit(name="Dashboard", loader=lambda: "dashboard-view")},
    )
