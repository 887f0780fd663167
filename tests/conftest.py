"""Shared fakes for deeplink tests."""

import pytest

from deeplink.config import LinkConfig
from deeplink.engine import LinkEngine
from deeplink.navigation.scheduler import ManualScheduler


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNavigator:
    """Records navigator calls; optionally raises on chosen methods."""

    def __init__(self, fail_push: bool = False, fail_replace: bool = False) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_push = fail_push
        self.fail_replace = fail_replace

    def push(self, path: str) -> None:
        self.calls.append(("push", path))
        if self.fail_push:
            raise RuntimeError("push failed")

    def replace(self, path: str) -> None:
        self.calls.append(("replace", path))
        if self.fail_replace:
            raise RuntimeError("replace failed")


class FakeAuth:
    def __init__(self, authenticated: bool = False) -> None:
        self.authenticated = authenticated

    def is_authenticated(self) -> bool:
        return self.authenticated


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def engine(
    navigator: RecordingNavigator,
    auth: FakeAuth,
    scheduler: ManualScheduler,
    clock: FakeClock,
) -> LinkEngine:
    return LinkEngine(navigator, auth, config=LinkConfig(), scheduler=scheduler, clock=clock)
