"""Test utilities for perch consoles.

Scripted stand-ins for the menu API plus small builders, so tests can
drive a :class:`~perch.app.Console` without HTTP::

    from perch.testing import StubMenuAPI, menu

    api = StubMenuAPI([menu("Tools", "tools", children=[menu("Paste", "paste", "Tools/Paste")])])
"""

from collections.abc import Iterable, Sequence
from typing import Any

from perch.menus.types import MenuNode, MenuResponse


def menu(
    name: str,
    path: str = "",
    component: str | None = None,
    *,
    children: Iterable[MenuNode] = (),
    id: Any = None,
    icon: str | None = None,
    permission_code: str | None = None,
) -> MenuNode:
    """Build a :class:`MenuNode` positionally; ``id`` defaults to ``name``."""
    return MenuNode(
        id=name if id is None else id,
        name=name,
        path=path,
        component=component,
        icon=icon,
        permission_code=permission_code,
        children=tuple(children),
    )


class StubMenuAPI:
    """Scripted menu API.

    Each call to :meth:`fetch_user_menus` consumes the next scripted
    outcome; the last one repeats. An outcome is a menu list (success),
    a :class:`MenuResponse`, or an exception instance to raise.
    """

    def __init__(self, *outcomes: Sequence[MenuNode] | MenuResponse | BaseException) -> None:
        self._outcomes = list(outcomes) or [[]]
        self.fetch_calls = 0
        self.logout_calls = 0
        self.logout_error: BaseException | None = None

    async def fetch_user_menus(self) -> MenuResponse:
        index = min(self.fetch_calls, len(self._outcomes) - 1)
        self.fetch_calls += 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, MenuResponse):
            return outcome
        return MenuResponse(code=200, message="ok", data=list(outcome))

    async def logout(self) -> dict[str, Any]:
        self.logout_calls += 1
        if self.logout_error is not None:
            raise self.logout_error
        return {"code": 200, "message": "ok", "data": None}
