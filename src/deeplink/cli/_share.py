"""``deeplink share`` — print the public share URL for an entity."""

import argparse
import sys

from deeplink.errors import UnsupportedShareKind
from deeplink.sharing.builder import build_share_url


def run_share(args: argparse.Namespace) -> None:
    try:
        print(build_share_url(args.kind, args.id))
    except (UnsupportedShareKind, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
