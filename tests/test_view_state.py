"""
Tests for per-item view state.

Overrides are keyed by item, visible to the very next projection, and never
leak to sibling items or into the payload.
"""

import copy

from src.projection import ViewMode
from src.view_state import DisplayItem, ViewStateController


def make_item(payload, key="m1:0", mode=ViewMode.CHART_BAR, percent=False, title=None):
    return DisplayItem(
        key=key, payload=payload, title=title, suggested_mode=mode, suggested_percent=percent
    )


class TestEffectiveMode:
    """Tests for ViewStateController.effective_mode."""

    def test_suggested_mode(self, flat_payload):
        controller = ViewStateController()
        item = make_item(flat_payload, mode=ViewMode.TABLE)
        assert controller.effective_mode(item) is ViewMode.TABLE

    def test_override_wins(self, flat_payload):
        controller = ViewStateController()
        item = make_item(flat_payload, mode=ViewMode.TABLE)
        assert controller.set_mode(item, ViewMode.TEXT) is ViewMode.TEXT
        assert controller.effective_mode(item) is ViewMode.TEXT

    def test_pie_suggested_on_matrix(self, matrix_payload):
        controller = ViewStateController()
        item = make_item(matrix_payload, mode=ViewMode.CHART_PIE)
        assert controller.effective_mode(item) is ViewMode.CHART_BAR

    def test_pie_selected_on_matrix(self, matrix_payload):
        controller = ViewStateController()
        item = make_item(matrix_payload)
        assert controller.set_mode(item, "chart-pie") is ViewMode.CHART_BAR
        assert controller.projection(item).mode is ViewMode.CHART_BAR

    def test_pie_not_offered_for_matrix(self, matrix_payload, flat_payload):
        controller = ViewStateController()
        assert ViewMode.CHART_PIE not in controller.available_modes(make_item(matrix_payload))
        assert ViewMode.CHART_PIE in controller.available_modes(make_item(flat_payload))


class TestEffectivePercent:
    """Tests for the percent toggle."""

    def test_suggested_percent_needs_pct_keys(self, flat_payload):
        controller = ViewStateController()
        item = make_item(flat_payload, percent=True)
        assert controller.effective_percent(item) is False

    def test_toggle_without_pct_keys_is_noop(self, matrix_payload):
        controller = ViewStateController()
        item = make_item(matrix_payload)
        assert not controller.can_toggle_percent(item)
        assert controller.toggle_percent(item) is False
        assert controller.effective_percent(item) is False
        assert controller.projection(item).percent is False

    def test_suggested_percent(self, flat_pct_payload):
        controller = ViewStateController()
        item = make_item(flat_pct_payload, percent=True)
        assert controller.effective_percent(item) is True

    def test_toggle(self, flat_pct_payload):
        controller = ViewStateController()
        item = make_item(flat_pct_payload, mode=ViewMode.TABLE)
        assert controller.toggle_percent(item) is True
        assert controller.projection(item).rows == ("a", "b")
        assert controller.toggle_percent(item) is False
        assert controller.projection(item).rows == ("a", "b", "total")


class TestIsolation:
    """Item overrides stay with their item."""

    def test_sibling_items_independent(self, matrix_pct_payload):
        controller = ViewStateController()
        first = make_item(matrix_pct_payload, key="m2:0")
        second = make_item(matrix_pct_payload, key="m2:1")

        controller.set_mode(first, ViewMode.TEXT)
        controller.toggle_percent(first)

        assert controller.effective_mode(second) is ViewMode.CHART_BAR
        assert controller.effective_percent(second) is False

    def test_payload_untouched(self, matrix_pct_payload):
        before = copy.deepcopy(matrix_pct_payload)
        controller = ViewStateController()
        item = make_item(matrix_pct_payload)
        controller.set_mode(item, ViewMode.TABLE)
        controller.toggle_percent(item)
        controller.projection(item)
        assert matrix_pct_payload == before

    def test_forget_and_clear(self, flat_pct_payload):
        controller = ViewStateController()
        item = make_item(flat_pct_payload)
        controller.set_mode(item, ViewMode.TEXT)
        controller.forget(item.key)
        assert controller.effective_mode(item) is ViewMode.CHART_BAR

        controller.toggle_percent(item)
        controller.clear()
        assert controller.effective_percent(item) is False


class TestView:
    """Tests for ViewStateController.view."""

    def test_view_follows_state(self, flat_payload, policy):
        controller = ViewStateController()
        item = make_item(flat_payload, title="Répartition")
        assert controller.view(item, policy).figure is not None

        controller.set_mode(item, ViewMode.TEXT)
        assert controller.view(item, policy).lines == ("a: 5", "b: 3", "total: 8")

    def test_unrecognized_item(self, policy):
        controller = ViewStateController()
        item = make_item({"a": {}, "b": 5})
        assert not item.classification.is_recognized
        assert controller.view(item, policy).is_empty
