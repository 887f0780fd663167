"""``deeplink routes`` — list the route table in match order."""

import argparse

from deeplink.cli._resolve import registry_from_args


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of AUTH, PATTERN, DESTINATION, and LABEL."""
    registry = registry_from_args(args)
    routes = registry.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(e.auth, e.url_pattern, e.router_path, e.label) for e in routes]

    # Column widths, at least as wide as the headers
    w_auth = max(4, *(len(r[0]) for r in rows))
    w_pattern = max(7, *(len(r[1]) for r in rows))
    w_dest = max(11, *(len(r[2]) for r in rows))

    fmt = f"{{:<{w_auth}}}  {{:<{w_pattern}}}  {{:<{w_dest}}}  {{}}"
    print(fmt.format("AUTH", "PATTERN", "DESTINATION", "LABEL"))
    sep_len = w_auth + w_pattern + w_dest + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 100))
    for row in rows:
        print(fmt.format(*row))
