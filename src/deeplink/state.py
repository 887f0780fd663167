"""Router state — replay log, pending link slot, navigation debounce.

All three are fields of one ``RouterState`` constructed at startup and
passed into the engine, so tests get fresh state per instance.

Free-threading safety:
    - Each object guards its check-then-act sequence with its own Lock
    - ``ParsedLink`` values are frozen dataclasses (safe to share)
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from deeplink.config import LinkConfig
from deeplink.links.parser import ParsedLink


class ReplayLog:
    """Bounded, time-evicted record of recently dispatched raw URLs."""

    __slots__ = ("_clock", "_entries", "_lock", "_max_entries", "_window")

    def __init__(
        self,
        window_seconds: float,
        max_entries: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # url -> handled_at, oldest first
        self._entries: OrderedDict[str, float] = OrderedDict()

    def _evict(self, now: float) -> None:
        while self._entries:
            url, handled_at = next(iter(self._entries.items()))
            if now - handled_at < self._window:
                break
            del self._entries[url]

    def is_replay(self, url: str) -> bool:
        """Whether *url* was handled within the dedup window."""
        now = self._clock()
        with self._lock:
            self._evict(now)
            return url in self._entries

    def mark_handled(self, url: str) -> bool:
        """Record *url* as handled.

        Returns False if another caller recorded it first within the
        window, so the check and the insert happen as one step.
        """
        now = self._clock()
        with self._lock:
            self._evict(now)
            if url in self._entries:
                return False
            self._entries[url] = now
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return True

    def __len__(self) -> int:
        with self._lock:
            self._evict(self._clock())
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class PendingLinkSlot:
    """Holds at most one link deferred until authentication.

    Last wins: ``set`` overwrites whatever is waiting.
    """

    __slots__ = ("_link", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._link: ParsedLink | None = None

    def set(self, link: ParsedLink) -> ParsedLink | None:
        """Store *link*, returning the link it displaced (if any)."""
        with self._lock:
            previous, self._link = self._link, link
            return previous

    def take(self) -> ParsedLink | None:
        """Read and clear the slot."""
        with self._lock:
            link, self._link = self._link, None
            return link

    def restore(self, link: ParsedLink) -> bool:
        """Put *link* back only if nothing newer arrived meanwhile."""
        with self._lock:
            if self._link is not None:
                return False
            self._link = link
            return True

    def peek(self) -> ParsedLink | None:
        with self._lock:
            return self._link


class NavigationDebounce:
    """Suppresses a repeat navigation to the same path inside a short window."""

    __slots__ = ("_clock", "_last_at", "_last_path", "_lock", "_window")

    def __init__(
        self,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_path = ""
        self._last_at = float("-inf")

    def should_navigate(self, path: str) -> bool:
        """Return False for a duplicate; otherwise record *path* and return True."""
        now = self._clock()
        with self._lock:
            if path == self._last_path and now - self._last_at < self._window:
                return False
            self._last_path = path
            self._last_at = now
            return True

    @property
    def last_path(self) -> str:
        with self._lock:
            return self._last_path


@dataclass(slots=True)
class RouterState:
    """The engine's process-wide mutable state, bundled in one object."""

    replay_log: ReplayLog
    pending: PendingLinkSlot
    debounce: NavigationDebounce

    @classmethod
    def from_config(
        cls,
        config: LinkConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> "RouterState":
        return cls(
            replay_log=ReplayLog(
                config.replay_window_seconds, config.replay_max_entries, clock=clock
            ),
            pending=PendingLinkSlot(),
            debounce=NavigationDebounce(config.navigation_debounce_seconds, clock=clock),
        )
