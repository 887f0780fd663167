"""Link engine — the single ingestion point for inbound deep links.

Every externally delivered URL goes through ``handle_deep_link`` exactly
once::

    engine = LinkEngine(navigator, auth)
    engine.handle_deep_link("https://dvntlive.app/u/mikevocalz")

    # After a successful login or session restore:
    engine.replay_pending_link()

Dispatch order for one URL:

    1. replay check -- seen within the window? drop
    2. parse        -- not navigable? drop
    3. record URL in the replay log (before auth, so a retry is suppressed
       even while the link waits in the pending slot)
    4. read auth state
    5. auth required and signed out -> store as pending (last wins)
    6. otherwise navigate

Nothing in this module raises into the host application.
"""

import logging
import time
from collections.abc import Callable, Mapping
from enum import StrEnum

from deeplink.config import LinkConfig
from deeplink.links.parser import LinkParser, ParsedLink
from deeplink.navigation.executor import NavigationExecutor, NavigationOutcome
from deeplink.navigation.protocol import AuthProvider, Navigator, Scheduler
from deeplink.navigation.scheduler import ThreadingScheduler
from deeplink.navigation.target import NavigationTarget
from deeplink.routing.registry import RoutePolicy, RouteRegistry
from deeplink.state import RouterState

logger = logging.getLogger("deeplink.engine")


class DispatchOutcome(StrEnum):
    """Terminal state of one ``handle_deep_link`` call."""

    DROPPED_DUPLICATE = "dropped-duplicate"
    DROPPED_UNPARSEABLE = "dropped-unparseable"
    DEFERRED = "deferred"
    DISPATCHED = "dispatched"


class LinkEngine:
    """Parses, gates, and dispatches inbound links against injected collaborators.

    Thread safety:
        Shared state lives on ``RouterState``, whose members make each
        check-then-act step atomic. The engine itself holds no other
        mutable state.
    """

    __slots__ = ("_auth", "_config", "_executor", "_parser", "_registry", "_scheduler", "state")

    def __init__(
        self,
        navigator: Navigator,
        auth: AuthProvider,
        *,
        config: LinkConfig | None = None,
        registry: RouteRegistry | None = None,
        scheduler: Scheduler | None = None,
        state: RouterState | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or LinkConfig()
        if registry is None:
            from deeplink.routing.table import default_registry

            registry = default_registry()
        registry.compile()
        self._registry = registry
        self._auth = auth
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()
        self.state = state or RouterState.from_config(self._config, clock=clock)
        self._parser = LinkParser(self._config, registry)
        self._executor = NavigationExecutor(
            navigator, registry, self._config, self.state.debounce
        )

    @property
    def config(self) -> LinkConfig:
        return self._config

    @property
    def registry(self) -> RouteRegistry:
        return self._registry

    @property
    def pending_link(self) -> ParsedLink | None:
        """The link waiting for login, if any."""
        return self.state.pending.peek()

    # -- Read-only helpers ------------------------------------------------

    def parse(self, url: str) -> ParsedLink | None:
        return self._parser.parse(url)

    def policy(self, path: str, query: Mapping[str, str] | None = None) -> RoutePolicy:
        return self._registry.policy(path, query)

    def resolve(self, parsed: ParsedLink) -> NavigationTarget:
        return self._executor.resolve(parsed)

    # -- Dispatch -----------------------------------------------------------

    def handle_deep_link(self, url: str) -> DispatchOutcome:
        """Process one externally delivered URL."""
        if not isinstance(url, str):
            logger.debug("Ignoring non-string link %r", url)
            return DispatchOutcome.DROPPED_UNPARSEABLE

        replay_log = self.state.replay_log
        if replay_log.is_replay(url):
            logger.debug("Replay detected, skipping %r", url)
            return DispatchOutcome.DROPPED_DUPLICATE

        parsed = self._parser.parse(url)
        if parsed is None:
            logger.debug("Could not parse %r", url)
            return DispatchOutcome.DROPPED_UNPARSEABLE

        if not replay_log.mark_handled(url):
            # Another delivery of the same URL got there first
            logger.debug("Replay detected, skipping %r", url)
            return DispatchOutcome.DROPPED_DUPLICATE

        logger.info("Handling deep link %s %s", parsed.path, dict(parsed.params))

        if parsed.requires_auth and not self._is_authenticated():
            displaced = self.state.pending.set(parsed)
            if displaced is not None:
                logger.info("Pending link %s replaced by %s", displaced.path, parsed.path)
            logger.info("Auth required, saving %s as pending link", parsed.path)
            return DispatchOutcome.DEFERRED

        self._executor.navigate_once(parsed)
        return DispatchOutcome.DISPATCHED

    def navigate_once(self, parsed: ParsedLink) -> NavigationOutcome:
        return self._executor.navigate_once(parsed)

    def replay_pending_link(self) -> bool:
        """Consume the pending link and schedule its navigation.

        Call once after a successful login or session restore. Returns
        True if a link was scheduled, False if nothing was pending.
        """
        pending = self.state.pending.take()
        if pending is None:
            return False

        logger.info("Replaying pending link %s", pending.path)
        self._scheduler.call_later(
            self._config.replay_settle_seconds, lambda: self._fire_replay(pending)
        )
        return True

    def _fire_replay(self, link: ParsedLink) -> None:
        if (
            self._config.recheck_auth_on_replay
            and link.requires_auth
            and not self._is_authenticated()
        ):
            if self.state.pending.restore(link):
                logger.info("Signed out before replay of %s; link kept pending", link.path)
            else:
                logger.info("Signed out before replay of %s; newer pending link kept", link.path)
            return
        self._executor.navigate_once(link)

    def _is_authenticated(self) -> bool:
        try:
            return bool(self._auth.is_authenticated())
        except Exception:
            logger.exception("Auth provider failed; treating session as signed out")
            return False
