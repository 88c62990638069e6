"""Menus — the server-authored menu forest and the client that fetches it."""

from perch.menus.api import MenuAPI, MenuClient
from perch.menus.types import MenuNode, MenuResponse, parse_menu_forest

__all__ = [
    "MenuAPI",
    "MenuClient",
    "MenuNode",
    "MenuResponse",
    "parse_menu_forest",
]
