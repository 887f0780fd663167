"""Ordered route registry with first-match-wins segment matching.

Entries are registered during setup and compiled into an immutable
tuple of pre-parsed patterns. Matching walks that tuple in declaration
order; the first entry whose pattern matches *and* whose params validator
accepts the extracted parameters wins. A validator rejection skips the
entry rather than failing the match, so a looser entry further down can
still catch the path.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote

from deeplink._internal.paths import normalize_path, split_path
from deeplink.errors import ConfigurationError
from deeplink.routing.route import ROUTE_AUTH_VALUES, PathSegment, RouteEntry, RouteMatch

logger = logging.getLogger("deeplink.routing")

CAPTURE_MARKER = ":"


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern string into segments.

    Examples::

        "/settings"          -> (PathSegment("settings"),)
        "/u/:username"       -> (PathSegment("u"), PathSegment(":username", True, "username"))
        "/comments/replies/:commentId"

    Raises ``ConfigurationError`` for brace or angle-bracket captures,
    empty capture names, and capture names used twice.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(pattern):
        if (part.startswith("{") and part.endswith("}")) or (
            part.startswith("<") and part.endswith(">")
        ):
            msg = (
                f"Route pattern {pattern!r} uses {part!r}. "
                f"Captures are written as ':name' segments, e.g. '/u/:username'."
            )
            raise ConfigurationError(msg)
        if part.startswith(CAPTURE_MARKER):
            name = part[len(CAPTURE_MARKER) :]
            if not name:
                raise ConfigurationError(f"Route pattern {pattern!r} has an unnamed capture.")
            if name in seen:
                raise ConfigurationError(
                    f"Route pattern {pattern!r} captures {name!r} more than once."
                )
            seen.add(name)
            segments.append(PathSegment(value=part, is_capture=True, name=name))
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


def build_router_path(template: str, params: Mapping[str, str]) -> str:
    """Substitute captures in a destination template with parameter values.

    Substitution is per segment: a segment is replaced only when it is
    exactly ``:name`` and *name* is present in *params*, so ``:id`` never
    rewrites part of ``:idSuffix``. Values are percent-encoded so each one
    stays a single segment. Unknown captures are left as-is::

        build_router_path("/(protected)/post/:id", {"id": "abc123"})
        # "/(protected)/post/abc123"
    """
    parts = template.split("/")
    for i, part in enumerate(parts):
        if part.startswith(CAPTURE_MARKER):
            name = part[len(CAPTURE_MARKER) :]
            if name in params:
                parts[i] = quote(params[name], safe="")
    return "/".join(parts)


@dataclass(frozen=True, slots=True)
class _CompiledEntry:
    entry: RouteEntry
    segments: tuple[PathSegment, ...]

    def match_parts(self, parts: list[str]) -> dict[str, str] | None:
        """Return decoded captured params if *parts* fits this pattern, else None.

        Segments are split before decoding, so an encoded ``%2F`` stays
        inside its capture.
        """
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for seg, part in zip(self.segments, parts, strict=True):
            if seg.is_capture:
                params[seg.name or ""] = unquote(part)
            elif seg.value.lower() != part.lower():
                return None
        return params


@dataclass(frozen=True, slots=True)
class RoutePolicy:
    """Auth classification of a path.

    Unmatched paths are fail-closed: ``requires_auth=True`` and
    ``matched_entry=None``.
    """

    is_public: bool
    requires_auth: bool
    matched_entry: RouteEntry | None


class RouteRegistry:
    """Ordered route table.

    Usage::

        registry = RouteRegistry()
        registry.add(RouteEntry("/u/:username", "/(protected)/profile/:username",
                                "auth-required", "User Profile"))
        registry.compile()
        match = registry.match("/u/mikevocalz")
    """

    __slots__ = ("_compiled", "_entries", "_lock")

    def __init__(self, entries: tuple[RouteEntry, ...] | list[RouteEntry] = ()) -> None:
        self._entries: list[RouteEntry] = []
        self._compiled: tuple[_CompiledEntry, ...] | None = None
        self._lock = threading.Lock()
        for entry in entries:
            self.add(entry)

    def add(self, entry: RouteEntry) -> None:
        """Append an entry. Must be called before compile()."""
        if self._compiled is not None:
            raise ConfigurationError("Cannot add routes after the registry is compiled.")
        if entry.auth not in ROUTE_AUTH_VALUES:
            raise ConfigurationError(
                f"Route {entry.url_pattern!r} has auth={entry.auth!r}; "
                f"expected 'public' or 'auth-required'."
            )
        if not entry.router_path.startswith("/"):
            raise ConfigurationError(
                f"Route {entry.url_pattern!r} destination {entry.router_path!r} must start with '/'."
            )
        # Validate eagerly so bad patterns fail at registration
        parse_pattern(entry.url_pattern)
        self._entries.append(entry)

    def compile(self) -> None:
        """Freeze the registry. No more entries can be added.

        Safe to call more than once; the first caller compiles.
        """
        if self._compiled is not None:
            return
        with self._lock:
            if self._compiled is None:
                self._compiled = tuple(
                    _CompiledEntry(entry=e, segments=parse_pattern(e.url_pattern))
                    for e in self._entries
                )

    @property
    def routes(self) -> tuple[RouteEntry, ...]:
        """All entries in declaration order."""
        return tuple(self._entries)

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self._entries)

    def match(self, path: str, query: Mapping[str, str] | None = None) -> RouteMatch | None:
        """Match *path* against the table in declaration order.

        Validators see the captured params merged over *query* (captures
        win on name clashes). A validator that rejects, or raises, skips
        its entry. Returns ``None`` when nothing matches.
        """
        self.compile()
        assert self._compiled is not None
        parts = split_path(normalize_path(path))

        for compiled in self._compiled:
            params = compiled.match_parts(parts)
            if params is None:
                continue
            entry = compiled.entry
            if entry.params_validator is not None and not self._accepts(
                entry, path, {**(query or {}), **params}
            ):
                continue
            return RouteMatch(entry=entry, params=params)

        return None

    @staticmethod
    def _accepts(entry: RouteEntry, path: str, params: dict[str, str]) -> bool:
        validator = entry.params_validator
        assert validator is not None
        try:
            verdict = validator(params)
        except Exception:
            logger.exception("Params validator for %s raised; skipping route", entry.url_pattern)
            return False
        if not verdict:
            logger.debug(
                "Route %s rejected params for %s: %s",
                entry.url_pattern,
                path,
                getattr(verdict, "errors", verdict),
            )
            return False
        return True

    def policy(self, path: str, query: Mapping[str, str] | None = None) -> RoutePolicy:
        """Classify *path* as public or auth-required (fail-closed on no match)."""
        match = self.match(path, query)
        if match is None:
            return RoutePolicy(is_public=False, requires_auth=True, matched_entry=None)
        return RoutePolicy(
            is_public=match.entry.is_public,
            requires_auth=match.entry.requires_auth,
            matched_entry=match.entry,
        )


def match_route(
    path: str,
    query: Mapping[str, str] | None = None,
    *,
    registry: RouteRegistry | None = None,
) -> RouteMatch | None:
    """Match *path* against *registry*, or the default route table."""
    if registry is None:
        from deeplink.routing.table import default_registry

        registry = default_registry()
    return registry.match(path, query)


def route_policy(
    path: str,
    query: Mapping[str, str] | None = None,
    *,
    registry: RouteRegistry | None = None,
) -> RoutePolicy:
    """Classify *path* against *registry*, or the default route table."""
    if registry is None:
        from deeplink.routing.table import default_registry

        registry = default_registry()
    return registry.policy(path, query)
