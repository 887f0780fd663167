"""deeplink — deep link routing and navigation for the app client.

Takes any incoming URI (OS link dispatch, notification taps, share-sheet
opens), decides what it means, enforces the sign-in precondition, and
navigates exactly once.

Basic usage::

    from deeplink import LinkEngine

    engine = LinkEngine(navigator, auth)
    engine.handle_deep_link("https://dvntlive.app/p/abc123?ref=push")

    # From the auth layer, once, after login or session restore:
    engine.replay_pending_link()

Outbound links::

    from deeplink import Sharer
    Sharer(share_sheet).share_profile("mikevocalz", "Mike")
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ConfigurationError",
    "DeepLinkError",
    "DispatchOutcome",
    "LinkConfig",
    "LinkEngine",
    "NavigationOutcome",
    "NavigationTarget",
    "ParsedLink",
    "RouteEntry",
    "RoutePolicy",
    "RouteRegistry",
    "RouterState",
    "ShareKind",
    "ShareResult",
    "Sharer",
    "build_router_path",
    "build_share_url",
    "match_route",
    "parse_incoming_url",
    "route_policy",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import deeplink`` fast while providing a clean top-level API.
    """
    if name in ("LinkEngine", "DispatchOutcome"):
        from deeplink import engine as _engine

        return getattr(_engine, name)

    if name == "LinkConfig":
        from deeplink.config import LinkConfig

        return LinkConfig

    if name in ("ParsedLink", "parse_incoming_url"):
        from deeplink.links import parser as _parser

        return getattr(_parser, name)

    if name in ("RouteRegistry", "RoutePolicy", "build_router_path", "match_route", "route_policy"):
        from deeplink.routing import registry as _registry

        return getattr(_registry, name)

    if name == "RouteEntry":
        from deeplink.routing.route import RouteEntry

        return RouteEntry

    if name == "NavigationTarget":
        from deeplink.navigation.target import NavigationTarget

        return NavigationTarget

    if name == "NavigationOutcome":
        from deeplink.navigation.executor import NavigationOutcome

        return NavigationOutcome

    if name == "RouterState":
        from deeplink.state import RouterState

        return RouterState

    if name in ("ShareKind", "ShareResult", "Sharer", "build_share_url"):
        from deeplink import sharing as _sharing

        return getattr(_sharing, name)

    if name in ("ConfigurationError", "DeepLinkError"):
        from deeplink import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
