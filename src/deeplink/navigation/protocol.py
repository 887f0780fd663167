"""Collaborator protocols supplied by the host application.

The engine depends only on these shapes, never on a UI framework::

    class ExpoNavigator:
        def push(self, path: str) -> None: ...
        def replace(self, path: str) -> None: ...

No base class required. The engine checks the shape, not the lineage.
"""

from collections.abc import Callable
from typing import Protocol


class Navigator(Protocol):
    """Issues navigation calls against the host's navigation stack."""

    def push(self, path: str) -> None: ...

    def replace(self, path: str) -> None: ...


class AuthProvider(Protocol):
    """Reports the current session state."""

    def is_authenticated(self) -> bool: ...


class Scheduler(Protocol):
    """Runs *callback* once after *delay* seconds without blocking the caller."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...
