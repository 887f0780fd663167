"""deeplink CLI — inspect links, list the route table, build share URLs.

Entry point registered as ``deeplink`` in ``pyproject.toml``::

    [project.scripts]
    deeplink = "deeplink.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``deeplink`` command."""
    parser = argparse.ArgumentParser(
        prog="deeplink",
        description="deeplink — parse, gate, and dispatch app deep links.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning)",
    )
    parser.add_argument(
        "--routes",
        dest="routes_from",
        default=None,
        help="Import string for a custom route table (e.g. myapp.links:registry)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- deeplink inspect ---------------------------------------------------
    inspect_parser = subparsers.add_parser(
        "inspect", help="Show parse result, policy, and target for a URL"
    )
    inspect_parser.add_argument("url", help="Incoming URL or bare path")
    inspect_parser.add_argument(
        "--dispatch",
        action="store_true",
        help="Run the full engine against a recording navigator",
    )
    inspect_parser.add_argument(
        "--authenticated",
        action="store_true",
        help="Simulate a signed-in session when dispatching",
    )

    # -- deeplink routes ----------------------------------------------------
    subparsers.add_parser("routes", help="List the route table")

    # -- deeplink share -----------------------------------------------------
    share_parser = subparsers.add_parser("share", help="Print the public share URL for an entity")
    share_parser.add_argument("kind", help="profile, post, event, story, ticket, chat, or room")
    share_parser.add_argument("id", help="Entity id or username")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "inspect":
        from deeplink.cli._inspect import run_inspect

        run_inspect(args)
    elif args.command == "routes":
        from deeplink.cli._routes import run_routes

        run_routes(args)
    elif args.command == "share":
        from deeplink.cli._share import run_share

        run_share(args)
