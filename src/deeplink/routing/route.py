"""RouteEntry, RouteMatch, and PathSegment frozen dataclasses."""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from deeplink.validation import ParamsValidator

RouteAuth: TypeAlias = Literal["public", "auth-required"]

ROUTE_AUTH_VALUES: frozenset[str] = frozenset({"public", "auth-required"})


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/settings``  (is_capture=False)
    Capture: ``/:username`` (is_capture=True, name="username")
    """

    value: str
    is_capture: bool = False
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A declarative mapping from an external URL pattern to an in-app destination.

    Defined at process start and never mutated. Declaration order inside a
    ``RouteRegistry`` decides which entry wins when several match.
    """

    url_pattern: str
    router_path: str
    auth: RouteAuth
    label: str
    params_validator: ParamsValidator | None = None

    @property
    def requires_auth(self) -> bool:
        return self.auth == "auth-required"

    @property
    def is_public(self) -> bool:
        return self.auth == "public"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    entry: RouteEntry
    params: dict[str, str]
