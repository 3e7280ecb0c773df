"""Tests for namespace scopes and log subscriptions."""

from __future__ import annotations

from kmet.models.core.logs import LogsTarget
from kmet.models.state.dashboard_state import (
    AllNamespaces,
    DashboardState,
    LogSubscription,
    NamedNamespace,
    candidate_scopes,
    namespace_scope,
)


class TestNamespaceScope:
    """Tests for namespace scope helpers."""

    def test_all_scope_queries_every_namespace(self) -> None:
        scope = AllNamespaces()
        assert scope.label == "all"
        assert scope.provider_value == ""

    def test_named_scope(self) -> None:
        scope = NamedNamespace("staging")
        assert scope.label == "staging"
        assert scope.provider_value == "staging"

    def test_namespace_scope_mapping(self) -> None:
        assert namespace_scope("all") == AllNamespaces()
        assert namespace_scope("") == AllNamespaces()
        assert namespace_scope(" default ") == NamedNamespace("default")

    def test_candidates_put_all_first_and_dedupe(self) -> None:
        scopes = candidate_scopes(["default", "kube-system", "default", ""])
        assert scopes == (
            AllNamespaces(),
            NamedNamespace("default"),
            NamedNamespace("kube-system"),
        )

    def test_candidates_never_empty(self) -> None:
        assert candidate_scopes([]) == (NamedNamespace("default"),)


class TestLogSubscription:
    """Tests for the log buffer and scroll window."""

    def _subscription(self, max_lines: int = 100) -> LogSubscription:
        return LogSubscription(
            sub_id=1, target=LogsTarget(namespace="default", name="api"), max_lines=max_lines
        )

    def test_buffer_is_bounded(self) -> None:
        sub = self._subscription(max_lines=10)
        for i in range(25):
            sub.append(f"line {i}")
        assert len(sub.lines) == 10
        assert sub.lines[0] == "line 15"

    def test_window_follows_tail(self) -> None:
        sub = self._subscription()
        for i in range(20):
            sub.append(f"line {i}")
        assert sub.window(3) == ["line 17", "line 18", "line 19"]

    def test_scroll_up_pauses_follow(self) -> None:
        sub = self._subscription()
        for i in range(20):
            sub.append(f"line {i}")
        sub.scroll(5, page=3)
        assert sub.follow is False
        assert sub.window(3) == ["line 12", "line 13", "line 14"]
        sub.append("line 20")
        assert sub.window(3) == ["line 12", "line 13", "line 14"]

    def test_scroll_is_clamped(self) -> None:
        sub = self._subscription()
        for i in range(5):
            sub.append(f"line {i}")
        sub.scroll(100, page=3)
        assert sub.window(3) == ["line 0", "line 1", "line 2"]
        sub.scroll(-100, page=3)
        assert sub.follow is True
        assert sub.window(3) == ["line 2", "line 3", "line 4"]

    def test_paused_window_keeps_page_height_while_evicting(self) -> None:
        sub = self._subscription(max_lines=10)
        for i in range(10):
            sub.append(f"l{i}")
        sub.scroll_to_top(page=3)
        assert sub.window(3) == ["l0", "l1", "l2"]
        for i in range(10, 13):
            sub.append(f"l{i}")
        assert sub.follow is False
        assert sub.window(3) == ["l3", "l4", "l5"]
        assert sub.scroll_offset == 7

    def test_paused_window_fills_then_evicts(self) -> None:
        sub = self._subscription(max_lines=6)
        for i in range(4):
            sub.append(f"l{i}")
        sub.scroll(1, page=2)
        assert sub.window(2) == ["l1", "l2"]
        for i in range(4, 9):
            sub.append(f"l{i}")
        assert len(sub.window(2)) == 2
        assert sub.window(2) == ["l4", "l5"]

    def test_scroll_to_top_and_bottom(self) -> None:
        sub = self._subscription()
        for i in range(10):
            sub.append(f"line {i}")
        sub.scroll_to_top(page=4)
        assert sub.window(4)[0] == "line 0"
        sub.scroll_to_bottom()
        assert sub.window(4)[-1] == "line 9"


class TestDashboardState:
    """Tests for DashboardState defaults."""

    def test_defaults(self) -> None:
        state = DashboardState()
        assert state.namespace == NamedNamespace("default")
        assert state.row_count == 0
        assert state.active_log_subscription is None
        assert state.panes.logs_open is False
