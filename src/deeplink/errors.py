"""Deep link exception hierarchy.

Shared across the registry, parser, engine, and sharing modules so every
module raises and catches the same types. Only setup-time problems raise;
the runtime dispatch path converts failures into outcomes.
"""


class DeepLinkError(Exception):
    """Base for all deeplink-specific errors."""


class ConfigurationError(DeepLinkError):
    """Raised when engine configuration or the route table is invalid.

    Typically raised by ``LinkConfig`` construction or
    ``RouteRegistry.compile()`` at startup.
    """


class UnsupportedShareKind(DeepLinkError):  # noqa: N818
    """Raised when an outbound link is requested for an unknown entity kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Cannot build a share link for kind {kind!r}.")
