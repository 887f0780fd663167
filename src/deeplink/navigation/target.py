"""Navigation target resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from deeplink.config import LinkConfig
from deeplink.links.parser import ParsedLink
from deeplink.routing.registry import RouteRegistry, build_router_path


@dataclass(frozen=True, slots=True)
class NavigationTarget:
    """Final in-app destination for a parsed link.

    ``valid`` is False when no route matched; ``path`` is then the
    fallback destination and ``reason`` says why.
    """

    path: str
    valid: bool
    params: Mapping[str, str] = field(default_factory=dict)
    reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


def resolve_navigation_target(
    parsed: ParsedLink,
    registry: RouteRegistry,
    config: LinkConfig,
) -> NavigationTarget:
    """Build the destination for *parsed*, or the fallback if it matches nothing."""
    match = registry.match(parsed.path, parsed.params)
    if match is None:
        return NavigationTarget(
            path=config.fallback_path,
            valid=False,
            reason=f"No route match for: {parsed.path}",
        )
    params = {**parsed.params, **match.params}
    return NavigationTarget(
        path=build_router_path(match.entry.router_path, params),
        valid=True,
        params=params,
    )
