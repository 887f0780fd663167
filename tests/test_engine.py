"""Tests for deeplink.engine — dispatch ordering, dedup, auth deferral, replay."""

import pytest

from deeplink.config import LinkConfig
from deeplink.engine import DispatchOutcome, LinkEngine
from deeplink.navigation.scheduler import ManualScheduler
from deeplink.routing.registry import RouteRegistry
from deeplink.routing.route import RouteEntry

from conftest import FakeAuth, FakeClock, RecordingNavigator


class TestHandleDeepLink:
    def test_dispatches_when_authenticated(
        self, engine: LinkEngine, navigator: RecordingNavigator, auth: FakeAuth
    ) -> None:
        auth.authenticated = True
        assert engine.handle_deep_link("https://dvntlive.app/u/mikevocalz") is DispatchOutcome.DISPATCHED
        assert navigator.calls == [("push", "/(protected)/profile/mikevocalz")]

    def test_duplicate_url_navigates_once(
        self, engine: LinkEngine, navigator: RecordingNavigator, auth: FakeAuth
    ) -> None:
        auth.authenticated = True
        url = "dvnt://p/abc123?ref=push"
        assert engine.handle_deep_link(url) is DispatchOutcome.DISPATCHED
        assert engine.handle_deep_link(url) is DispatchOutcome.DROPPED_DUPLICATE
        assert len(navigator.calls) == 1

    def test_duplicate_allowed_after_window(
        self,
        engine: LinkEngine,
        navigator: RecordingNavigator,
        auth: FakeAuth,
        clock: FakeClock,
    ) -> None:
        auth.authenticated = True
        engine.handle_deep_link("dvnt://p/1")
        clock.advance(engine.config.replay_window_seconds + 1)
        assert engine.handle_deep_link("dvnt://p/1") is DispatchOutcome.DISPATCHED
        assert len(navigator.calls) == 2

    @pytest.mark.parametrize(
        "url",
        ["https://evil.example.com/u/mikevocalz", "https://dvntlive.app/", "", "ftp://x/y"],
    )
    def test_unparseable_dropped(
        self, engine: LinkEngine, navigator: RecordingNavigator, url: str
    ) -> None:
        assert engine.handle_deep_link(url) is DispatchOutcome.DROPPED_UNPARSEABLE
        assert navigator.calls == []
        assert engine.pending_link is None

    def test_unparseable_not_recorded(self, engine: LinkEngine) -> None:
        engine.handle_deep_link("https://evil.example.com/u/x")
        assert engine.state.replay_log.is_replay("https://evil.example.com/u/x") is False

    def test_non_string_dropped(self, engine: LinkEngine) -> None:
        assert engine.handle_deep_link(["dvnt://p/1"]) is DispatchOutcome.DROPPED_UNPARSEABLE  # type: ignore[arg-type]

    def test_public_route_navigates_while_signed_out(
        self, engine: LinkEngine, navigator: RecordingNavigator
    ) -> None:
        assert engine.handle_deep_link("https://dvntlive.app/auth/reset?token=abc123") is DispatchOutcome.DISPATCHED
        assert navigator.calls == [("replace", "/(auth)/reset-password")]

    def test_unmatched_route_is_gated(self, engine: LinkEngine, navigator: RecordingNavigator) -> None:
        assert engine.handle_deep_link("/unknown-route") is DispatchOutcome.DEFERRED
        assert navigator.calls == []

    def test_unmatched_route_falls_back_when_signed_in(
        self, engine: LinkEngine, navigator: RecordingNavigator, auth: FakeAuth
    ) -> None:
        auth.authenticated = True
        engine.handle_deep_link("/unknown-route")
        assert navigator.calls == [("push", "/(protected)/(tabs)")]

    def test_failing_auth_provider_is_treated_as_signed_out(
        self, navigator: RecordingNavigator, scheduler: ManualScheduler
    ) -> None:
        class BrokenAuth:
            def is_authenticated(self) -> bool:
                raise RuntimeError("session store unavailable")

        engine = LinkEngine(navigator, BrokenAuth(), scheduler=scheduler)
        assert engine.handle_deep_link("dvnt://p/1") is DispatchOutcome.DEFERRED
        assert navigator.calls == []

    def test_navigator_errors_never_escape(self, auth: FakeAuth, scheduler: ManualScheduler) -> None:
        auth.authenticated = True
        nav = RecordingNavigator(fail_push=True, fail_replace=True)
        engine = LinkEngine(nav, auth, scheduler=scheduler)
        assert engine.handle_deep_link("dvnt://p/1") is DispatchOutcome.DISPATCHED


class TestAuthDeferral:
    def test_deferred_then_replayed_once(
        self,
        engine: LinkEngine,
        navigator: RecordingNavigator,
        auth: FakeAuth,
        scheduler: ManualScheduler,
    ) -> None:
        assert engine.handle_deep_link("https://dvntlive.app/u/mikevocalz") is DispatchOutcome.DEFERRED
        assert navigator.calls == []
        assert engine.pending_link is not None
        assert engine.pending_link.path == "/u/mikevocalz"

        auth.authenticated = True
        assert engine.replay_pending_link() is True
        assert engine.pending_link is None
        # Nothing happens until the settle delay elapses
        assert navigator.calls == []
        scheduler.advance(0.2)
        assert navigator.calls == []
        scheduler.advance(0.2)
        assert navigator.calls == [("push", "/(protected)/profile/mikevocalz")]

        assert engine.replay_pending_link() is False
        scheduler.run_all()
        assert len(navigator.calls) == 1

    def test_replay_with_nothing_pending(
        self, engine: LinkEngine, navigator: RecordingNavigator, scheduler: ManualScheduler
    ) -> None:
        assert engine.replay_pending_link() is False
        assert scheduler.pending == 0
        assert navigator.calls == []

    def test_retry_suppressed_while_pending(
        self, engine: LinkEngine, scheduler: ManualScheduler, auth: FakeAuth, navigator: RecordingNavigator
    ) -> None:
        url = "dvnt://chat/42"
        assert engine.handle_deep_link(url) is DispatchOutcome.DEFERRED
        assert engine.handle_deep_link(url) is DispatchOutcome.DROPPED_DUPLICATE

        auth.authenticated = True
        engine.replay_pending_link()
        scheduler.run_all()
        assert navigator.calls == [("push", "/(protected)/chat/42")]

    def test_last_pending_wins(
        self,
        engine: LinkEngine,
        navigator: RecordingNavigator,
        auth: FakeAuth,
        scheduler: ManualScheduler,
    ) -> None:
        engine.handle_deep_link("dvnt://p/first")
        engine.handle_deep_link("dvnt://e/second")
        assert engine.pending_link is not None
        assert engine.pending_link.path == "/e/second"

        auth.authenticated = True
        engine.replay_pending_link()
        scheduler.run_all()
        assert navigator.calls == [("push", "/(protected)/events/second")]

    def test_signed_out_before_replay_fires_keeps_link(
        self,
        engine: LinkEngine,
        navigator: RecordingNavigator,
        auth: FakeAuth,
        scheduler: ManualScheduler,
    ) -> None:
        engine.handle_deep_link("dvnt://story/15")
        auth.authenticated = True
        engine.replay_pending_link()
        auth.authenticated = False
        scheduler.run_all()

        assert navigator.calls == []
        assert engine.pending_link is not None
        assert engine.pending_link.path == "/story/15"

        auth.authenticated = True
        engine.replay_pending_link()
        scheduler.run_all()
        assert navigator.calls == [("push", "/(protected)/story/15")]

    def test_newer_pending_link_not_overwritten_by_stale_replay(
        self,
        engine: LinkEngine,
        navigator: RecordingNavigator,
        auth: FakeAuth,
        scheduler: ManualScheduler,
    ) -> None:
        engine.handle_deep_link("dvnt://p/old")
        auth.authenticated = True
        engine.replay_pending_link()
        auth.authenticated = False
        engine.handle_deep_link("dvnt://p/new")
        scheduler.run_all()

        assert navigator.calls == []
        assert engine.pending_link is not None
        assert engine.pending_link.path == "/p/new"

    def test_recheck_can_be_disabled(
        self, navigator: RecordingNavigator, auth: FakeAuth, scheduler: ManualScheduler
    ) -> None:
        engine = LinkEngine(
            navigator, auth, config=LinkConfig(recheck_auth_on_replay=False), scheduler=scheduler
        )
        engine.handle_deep_link("dvnt://p/1")
        engine.replay_pending_link()
        scheduler.run_all()
        assert navigator.calls == [("push", "/(protected)/post/1")]


class TestEngineWiring:
    def test_custom_registry(self, navigator: RecordingNavigator, scheduler: ManualScheduler) -> None:
        registry = RouteRegistry([RouteEntry("/promo/:code", "/(public)/promo/:code", "public", "Promo")])
        engine = LinkEngine(navigator, FakeAuth(), registry=registry, scheduler=scheduler)

        assert engine.handle_deep_link("dvnt://promo/SUMMER") is DispatchOutcome.DISPATCHED
        assert navigator.calls == [("push", "/(public)/promo/SUMMER")]
        assert engine.registry is registry

    def test_policy_and_resolve_helpers(self, engine: LinkEngine) -> None:
        parsed = engine.parse("settings/blocked")
        assert parsed is not None
        policy = engine.policy(parsed.path)
        assert policy.requires_auth is True
        assert policy.matched_entry is not None
        assert policy.matched_entry.label == "Blocked Accounts"
        assert engine.resolve(parsed).path == "/settings/blocked"

    def test_engines_do_not_share_state(
        self, navigator: RecordingNavigator, auth: FakeAuth, scheduler: ManualScheduler
    ) -> None:
        auth.authenticated = True
        first = LinkEngine(navigator, auth, scheduler=scheduler)
        second = LinkEngine(navigator, auth, scheduler=scheduler)
        first.handle_deep_link("dvnt://p/1")
        assert second.handle_deep_link("dvnt://p/1") is DispatchOutcome.DISPATCHED
