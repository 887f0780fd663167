"""Navigation executor — one navigator call per link, never an exception.

Resolves the destination, suppresses duplicate deliveries of the same
path inside the debounce window, and picks replace vs. push: auth-flow
destinations replace history so "back" cannot return into them.

If the navigator raises, one replace-to-fallback is attempted; if that
raises too, the error is logged and swallowed.
"""

import logging
from enum import StrEnum

from deeplink.config import LinkConfig
from deeplink.links.parser import ParsedLink
from deeplink.navigation.protocol import Navigator
from deeplink.navigation.target import NavigationTarget, resolve_navigation_target
from deeplink.routing.registry import RouteRegistry
from deeplink.state import NavigationDebounce

logger = logging.getLogger("deeplink.navigation")


class NavigationOutcome(StrEnum):
    PUSHED = "pushed"
    REPLACED = "replaced"
    DEBOUNCED = "debounced"
    FELL_BACK = "fell-back"
    FAILED = "failed"


class NavigationExecutor:
    """Performs the actual navigation for parsed links."""

    __slots__ = ("_config", "_debounce", "_navigator", "_registry")

    def __init__(
        self,
        navigator: Navigator,
        registry: RouteRegistry,
        config: LinkConfig,
        debounce: NavigationDebounce,
    ) -> None:
        self._navigator = navigator
        self._registry = registry
        self._config = config
        self._debounce = debounce

    def resolve(self, parsed: ParsedLink) -> NavigationTarget:
        return resolve_navigation_target(parsed, self._registry, self._config)

    def is_auth_destination(self, path: str) -> bool:
        prefix = self._config.auth_route_prefix
        return path == prefix or path.startswith(prefix + "/")

    def navigate_once(self, parsed: ParsedLink) -> NavigationOutcome:
        target = self.resolve(parsed)

        if not self._debounce.should_navigate(target.path):
            logger.debug("Duplicate navigation prevented: %s", target.path)
            return NavigationOutcome.DEBOUNCED

        if not target.valid:
            logger.warning("Invalid route, navigating to fallback: %s", target.reason)

        logger.info("Navigating to %s", target.path)
        try:
            if self.is_auth_destination(target.path):
                self._navigator.replace(target.path)
                return NavigationOutcome.REPLACED
            self._navigator.push(target.path)
            return NavigationOutcome.PUSHED
        except Exception:
            logger.warning("Navigation to %s failed; falling back", target.path, exc_info=True)

        try:
            self._navigator.replace(self._config.fallback_path)
        except Exception:
            logger.exception("Fallback navigation to %s failed", self._config.fallback_path)
            return NavigationOutcome.FAILED
        return NavigationOutcome.FELL_BACK
