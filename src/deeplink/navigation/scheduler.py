"""Fire-and-forget delay schedulers.

``ThreadingScheduler`` is the default for synchronous hosts,
``AnyioScheduler`` runs delays inside an anyio task group for async
hosts, and ``ManualScheduler`` only runs callbacks when told to (tests,
the CLI).
"""

import logging
import threading
from collections.abc import Callable

import anyio
from anyio.abc import TaskGroup

logger = logging.getLogger("deeplink.navigation")


class ThreadingScheduler:
    """Runs each callback on a daemon ``threading.Timer``."""

    __slots__ = ()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()


class AnyioScheduler:
    """Schedules callbacks as tasks in a running anyio task group.

    Usage::

        async with anyio.create_task_group() as tg:
            engine = LinkEngine(navigator, auth, scheduler=AnyioScheduler(tg))
            ...
    """

    __slots__ = ("_task_group",)

    def __init__(self, task_group: TaskGroup) -> None:
        self._task_group = task_group

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._task_group.start_soon(self._fire, delay, callback)

    @staticmethod
    async def _fire(delay: float, callback: Callable[[], None]) -> None:
        await anyio.sleep(delay)
        try:
            callback()
        except Exception:
            # A failing callback must not cancel the host's task group
            logger.exception("Scheduled callback %r failed", callback)


class ManualScheduler:
    """Collects callbacks and runs them when time is advanced explicitly."""

    __slots__ = ("_now", "_pending")

    def __init__(self) -> None:
        self._now = 0.0
        # (due_at, callback) in scheduling order
        self._pending: list[tuple[float, Callable[[], None]]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append((self._now + delay, callback))

    @property
    def pending(self) -> int:
        """Number of callbacks not yet run."""
        return len(self._pending)

    def advance(self, seconds: float) -> int:
        """Move time forward and run every callback now due. Returns how many ran."""
        self._now += seconds
        due = [item for item in self._pending if item[0] <= self._now]
        self._pending = [item for item in self._pending if item[0] > self._now]
        for _, callback in sorted(due, key=lambda item: item[0]):
            callback()
        return len(due)

    def run_all(self) -> int:
        """Run every pending callback regardless of its delay."""
        if not self._pending:
            return 0
        return self.advance(max(due_at for due_at, _ in self._pending) - self._now)
