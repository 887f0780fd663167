"""Link engine configuration.

One ``LinkConfig`` is shared by the parser, the executor, and the sharer,
so the domain accepted inbound is always the domain emitted outbound.
"""

from dataclasses import dataclass

from deeplink.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LinkConfig:
    """Link engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LinkConfig(domain="staging.dvntlive.app", replay_window_seconds=2.0)
    """

    # Inbound URI forms
    domain: str = "dvntlive.app"
    scheme: str = "dvnt"
    dev_scheme: str = "exp"
    dev_path_marker: str = "/--/"  # Dev-tool URIs embed the app path after this marker
    dev_hosts: tuple[str, ...] = ("localhost", "127.0.0.1", "10.0.2.2")
    dev_host_suffixes: tuple[str, ...] = (".exp.direct", ".expo.dev", ".expo.io")

    # Destinations
    fallback_path: str = "/(protected)/(tabs)"  # Authenticated home
    auth_route_prefix: str = "/(auth)"  # Destinations under this prefix replace history

    # Timing
    navigation_debounce_seconds: float = 0.5
    replay_settle_seconds: float = 0.3
    replay_window_seconds: float = 5.0
    replay_max_entries: int = 100

    # Re-read the auth provider when a delayed pending replay actually fires
    recheck_auth_on_replay: bool = True

    def __post_init__(self) -> None:
        if not self.domain:
            raise ConfigurationError("LinkConfig.domain must not be empty.")
        if not self.scheme or "://" in self.scheme:
            raise ConfigurationError(
                f"LinkConfig.scheme must be a bare scheme name like 'dvnt', got {self.scheme!r}."
            )
        if not self.fallback_path.startswith("/"):
            raise ConfigurationError(
                f"LinkConfig.fallback_path must start with '/', got {self.fallback_path!r}."
            )
        for name in (
            "navigation_debounce_seconds",
            "replay_settle_seconds",
            "replay_window_seconds",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"LinkConfig.{name} must not be negative.")
        if self.replay_max_entries < 1:
            raise ConfigurationError("LinkConfig.replay_max_entries must be at least 1.")

    @property
    def www_domain(self) -> str:
        return f"www.{self.domain}"

    @property
    def web_base_url(self) -> str:
        """Public HTTPS origin used for every outbound link."""
        return f"https://{self.domain}"

    @property
    def allowed_hosts(self) -> frozenset[str]:
        """Exact hosts accepted for HTTP(S) universal links."""
        return frozenset({self.domain, self.www_domain})

    def is_allowed_host(self, host: str) -> bool:
        """Whether *host* may drive navigation.

        The production domain, its ``www.`` alias, and ``dev_hosts`` match
        exactly; tunnel hosts match by ``dev_host_suffixes``.
        """
        host = host.lower().rstrip(".")
        if host in self.allowed_hosts or host in self.dev_hosts:
            return True
        return host.endswith(self.dev_host_suffixes)
