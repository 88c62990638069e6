"""Menu data as delivered by the menu API.

Frozen dataclasses parsed once from the JSON envelope. Nothing here
validates navigability; the route compiler decides what to drop.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

# Business code the menu API uses for success
SUCCESS_CODE = 200


@dataclass(frozen=True, slots=True)
class MenuNode:
    """One entry of the per-user menu tree.

    Attributes:
        id: Opaque identifier assigned by the server.
        name: Display label and logical route name.
        path: Route segment, or ``""`` for a pure container.
        component: Logical view id (``"Tools/Paste"``), or ``None``
            for a structural node.
        icon: Display hint, opaque to perch.
        permission_code: Authorization hint, opaque to perch.
        children: Ordered child nodes.
    """

    id: Any
    name: str
    path: str = ""
    component: str | None = None
    icon: str | None = None
    permission_code: str | None = None
    children: tuple[MenuNode, ...] = ()

    @property
    def is_navigable(self) -> bool:
        """A node encodes something only if it has a path or children."""
        return bool(self.path) or bool(self.children)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MenuNode:
        """Build a node (and its subtree) from the API's camelCase JSON."""
        children = data.get("children") or ()
        return cls(
            id=data.get("id"),
            name=str(data.get("name") or ""),
            path=data.get("path") or "",
            component=data.get("component") or None,
            icon=data.get("icon"),
            permission_code=data.get("permissionCode") or None,
            children=tuple(cls.from_dict(child) for child in children),
        )


def parse_menu_forest(items: Iterable[Mapping[str, Any]]) -> list[MenuNode]:
    """Parse a JSON list of menu objects, preserving order."""
    return [MenuNode.from_dict(item) for item in items]


@dataclass(frozen=True, slots=True)
class MenuResponse:
    """The ``{code, message, data}`` envelope returned by the menu API."""

    code: int
    message: str = ""
    data: list[MenuNode] | None = None

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE and self.data is not None

    @classmethod
    def from_payload(cls, payload: Any) -> MenuResponse:
        """Parse a decoded JSON body.

        Any shape other than an object with an integer ``code`` yields a
        failed response rather than raising.
        """
        if not isinstance(payload, Mapping):
            return cls(code=-1, message="Malformed menu response")
        code = payload.get("code")
        if not isinstance(code, int):
            return cls(code=-1, message="Malformed menu response")
        raw = payload.get("data")
        data = parse_menu_forest(raw) if isinstance(raw, list) else None
        return cls(code=code, message=str(payload.get("message") or ""), data=data)
