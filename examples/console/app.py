"""Console — menu-driven routes across a login/logout cycle.

Runs offline: the menu API is replaced by a stub that serves
``menus.json``, and views are discovered from ``views/``.

Demonstrates:
- ``Console`` wiring (router, route table, guard)
- first authenticated navigation installing the menu routes
- unknown components degrading to the NotFound view
- logout removing every menu-derived route

Run:
    python app.py
"""

import asyncio
import json
import logging
from pathlib import Path

from perch import Console, NavigationConfig, TokenStore
from perch.menus.types import MenuResponse
from perch.testing import StubMenuAPI

HERE = Path(__file__).parent
VIEWS_DIR = HERE / "views"
MENUS_FILE = HERE / "menus.json"


def load_menus() -> MenuResponse:
    return MenuResponse.from_payload(json.loads(MENUS_FILE.read_text(encoding="utf-8")))


def create_console() -> Console:
    return Console(
        NavigationConfig(views_dir=VIEWS_DIR),
        tokens=TokenStore(),
        client=StubMenuAPI(load_menus()),
    )


async def main() -> None:
    console = create_console()

    for target in ("/tools/paste", "/login"):
        navigation = await console.navigate(target)
        print(f"{target:<16} -> {navigation.location.full_path}")

    console.tokens.set("demo-token")
    for target in ("/", "/tools/paste", "/tools/shorten", "/users", "/login", "/nope"):
        navigation = await console.navigate(target)
        print(f"{target:<16} -> {navigation.location.full_path:<16} {navigation.match.name}: {navigation.match.component.load()}")

    await console.logout()
    navigation = await console.navigate("/users")
    print(f"{'/users':<16} -> {navigation.location.full_path} (after logout)")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
