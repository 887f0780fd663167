"""``deeplink inspect`` — show how a URL is parsed, classified, and resolved.

With ``--dispatch`` the URL also runs through a full ``LinkEngine`` wired
to a recording navigator, and the navigator calls and any pending link
are printed.
"""

import argparse
import json

from deeplink.cli._resolve import registry_from_args
from deeplink.engine import LinkEngine
from deeplink.navigation.scheduler import ManualScheduler


class _RecordingNavigator:
    __slots__ = ("calls",)

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def push(self, path: str) -> None:
        self.calls.append(("push", path))

    def replace(self, path: str) -> None:
        self.calls.append(("replace", path))


class _StaticAuth:
    __slots__ = ("authenticated",)

    def __init__(self, authenticated: bool) -> None:
        self.authenticated = authenticated

    def is_authenticated(self) -> bool:
        return self.authenticated


def run_inspect(args: argparse.Namespace) -> None:
    registry = registry_from_args(args)
    navigator = _RecordingNavigator()
    engine = LinkEngine(
        navigator,
        _StaticAuth(args.authenticated),
        registry=registry,
        scheduler=ManualScheduler(),
    )

    url = args.url.strip()
    parsed = engine.parse(url)

    print("-- Parse Result --")
    if parsed is None:
        print("FAILED TO PARSE")
    else:
        print(f"Path:          {parsed.path}")
        print(f"Router Path:   {parsed.router_path}")
        print(f"Params:        {json.dumps(dict(parsed.params), sort_keys=True)}")
        print(f"Requires Auth: {parsed.requires_auth}")

        policy = engine.policy(parsed.path, parsed.params)
        print()
        print("-- Route Policy --")
        print(f"Public:        {policy.is_public}")
        print(f"Requires Auth: {policy.requires_auth}")
        print(f"Matched:       {policy.matched_entry.label if policy.matched_entry else 'NONE'}")

        target = engine.resolve(parsed)
        print()
        print("-- Navigation Target --")
        print(f"Path:          {target.path}")
        print(f"Valid:         {target.valid}")
        if target.reason:
            print(f"Reason:        {target.reason}")

    if not args.dispatch:
        return

    outcome = engine.handle_deep_link(url)
    print()
    print("-- Dispatch --")
    print(f"Outcome:       {outcome}")
    for method, path in navigator.calls:
        print(f"Navigator:     {method} {path}")
    pending = engine.pending_link
    print(f"Pending Link:  {f'{pending.path} ({pending.original_url})' if pending else 'None'}")
