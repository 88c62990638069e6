"""``perch routes`` — compile a menu dump and list the resulting routes."""

import argparse
import json
import sys
from pathlib import Path

from perch.errors import PerchError
from perch.menus.types import MenuNode, MenuResponse, parse_menu_forest
from perch.resolver import ComponentResolver
from perch.routing.compiler import RouteCompiler
from perch.routing.router import Router


def _load_menus(path: Path) -> list[MenuNode]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        return parse_menu_forest(payload)
    response = MenuResponse.from_payload(payload)
    if not response.ok:
        msg = f"menu response not successful (code={response.code}): {response.message}"
        raise ValueError(msg)
    return response.data or []


def run_routes(args: argparse.Namespace) -> None:
    """Print a NAME / PATH / COMPONENT table for the compiled forest."""
    try:
        menus = _load_menus(Path(args.menus))
        resolver = (
            ComponentResolver.from_directory(args.views) if args.views else ComponentResolver()
        )
        router = Router(RouteCompiler(resolver).compile(menus))
    except (OSError, ValueError, PerchError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    records = router.get_routes()
    if not records:
        print("No routes compiled.")
        return

    rows = [
        (
            record.name or "-",
            record.path,
            record.node.component.name if record.node.component else "-",
        )
        for record in records
    ]

    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_name}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("NAME", "PATH", "COMPONENT"))
    sep_len = max_name + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
