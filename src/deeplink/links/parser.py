"""Incoming URI parsing.

Turns any supported URI form into a canonical path plus a flat params
mapping, and classifies it against the route registry:

- private app scheme: ``dvnt://p/abc123?ref=push``
- universal links: ``https://dvntlive.app/u/mike`` (and ``www.``, and dev hosts)
- dev-tool URIs: ``exp://192.168.1.1:8081/--/u/mike``
- bare paths: ``settings/blocked``

Hosts other than the production domain, its ``www.`` alias, and local/dev
hosts are rejected. Parsing never raises: every failure is ``None``.
"""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import urlsplit

from deeplink._internal.paths import normalize_path
from deeplink.config import LinkConfig
from deeplink.links.query import parse_query
from deeplink.routing.registry import RouteRegistry, build_router_path

logger = logging.getLogger("deeplink.parser")


@dataclass(frozen=True, slots=True)
class ParsedLink:
    """A successfully parsed inbound link. Immutable.

    ``params`` holds query params with route captures layered on top
    (captures win), both percent-decoded. It is a read-only view, since
    the same link may sit in the pending slot while other code reads it.
    ``router_path`` is the destination template with params substituted,
    or the literal ``path`` when no route matched.
    """

    original_url: str
    path: str
    params: Mapping[str, str]
    router_path: str
    requires_auth: bool
    timestamp: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


class LinkParser:
    """Parses raw inbound URIs against one config and one route registry."""

    __slots__ = ("_clock", "_config", "_registry")

    def __init__(
        self,
        config: LinkConfig,
        registry: RouteRegistry,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._registry = registry
        self._clock = clock

    def parse(self, url: object) -> ParsedLink | None:
        """Parse *url*, returning ``None`` for anything not navigable."""
        if not isinstance(url, str) or not url.strip():
            return None
        try:
            return self._parse(url)
        except Exception:
            logger.exception("Failed to parse URL %r", url)
            return None

    def _parse(self, url: str) -> ParsedLink | None:
        split = self._split(url.strip())
        if split is None:
            return None
        raw_path, query_string = split

        path = normalize_path(raw_path)
        if path == "/":
            return None

        query = parse_query(query_string)
        match = self._registry.match(path, query)
        if match is None:
            requires_auth = True
            params = dict(query)
            router_path = path
        else:
            requires_auth = match.entry.requires_auth
            params = {**query, **match.params}
            router_path = build_router_path(match.entry.router_path, params)

        return ParsedLink(
            original_url=url,
            path=path,
            params=params,
            router_path=router_path,
            requires_auth=requires_auth,
            timestamp=self._clock(),
        )

    def _split(self, url: str) -> tuple[str, str] | None:
        """Return ``(path, raw_query)`` for *url*, or None if the form is rejected."""
        cfg = self._config
        lowered = url.lower()

        if lowered.startswith(f"{cfg.scheme}://"):
            rest = url[len(cfg.scheme) + 3 :].partition("#")[0]
            path_part, _, query = rest.partition("?")
            return "/" + path_part.lstrip("/"), query

        if lowered.startswith(("https://", "http://")):
            parts = urlsplit(url)
            host = parts.hostname or ""
            if not cfg.is_allowed_host(host):
                logger.info("Rejected link from unknown host %r", host)
                return None
            return parts.path, parts.query

        if lowered.startswith(f"{cfg.dev_scheme}://"):
            parts = urlsplit(url)
            path = parts.path
            marker = cfg.dev_path_marker
            if marker in path:
                path = "/" + path.split(marker, 1)[1]
            return path, parts.query

        if "://" in url.partition("?")[0]:
            logger.info("Rejected link with unsupported scheme %r", url.split("://", 1)[0])
            return None

        # Bare path
        path_part, _, query = url.partition("#")[0].partition("?")
        return path_part, query


def parse_incoming_url(
    url: str,
    *,
    config: LinkConfig | None = None,
    registry: RouteRegistry | None = None,
) -> ParsedLink | None:
    """Parse *url* with the given config and registry, or the defaults."""
    if registry is None:
        from deeplink.routing.table import default_registry

        registry = default_registry()
    return LinkParser(config or LinkConfig(), registry).parse(url)
