"""Perch CLI — inspect how a menu dump compiles into routes.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: menu-driven route tables for admin consoles.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Compile a menu dump and list routes")
    routes_parser.add_argument(
        "menus",
        help="JSON file: a menu list or a {code, message, data} envelope",
    )
    routes_parser.add_argument(
        "--views",
        default=None,
        help="Views directory used to resolve components",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    else:
        parser.print_help()
        sys.exit(1)
