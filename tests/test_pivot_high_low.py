"""Tests for levelwatch.levels.pivot_high_low — bucketing around price."""

from levelwatch.levels.pivot_high_low import (
    partition_pivot_points,
    pivot_high_low_levels,
    pivot_high_low_value,
)
from levelwatch.models.levels import LevelKind
from levelwatch.validity import SENTINEL


def points(*values):
    return {"processedPivotPoints": [{"value": v, "count": 1, "difference": 0.1} for v in values]}


# ── Partition ──────────────────────────────────────────────────────

class TestPartition:
    def test_split_around_price(self):
        part = partition_pivot_points(points(100, 90, 80), 95)
        assert [lv.y for lv in part.resistance] == [100]
        assert [lv.y for lv in part.support] == [90, 80]

    def test_res1_is_nearest_above(self):
        part = partition_pivot_points(points(130, 100, 110), 95)
        assert [(lv.key, lv.y) for lv in part.resistance] == [("Res1", 100), ("Res2", 110), ("Res3", 130)]

    def test_sup1_is_nearest_below(self):
        part = partition_pivot_points(points(70, 90, 80), 95)
        assert [(lv.key, lv.y) for lv in part.support] == [("Sup1", 90), ("Sup2", 80), ("Sup3", 70)]

    def test_value_at_price_is_resistance(self):
        part = partition_pivot_points(points(95, 94), 95)
        assert [lv.y for lv in part.resistance] == [95]
        assert part.resistance[0].kind == LevelKind.RESISTANCE

    def test_string_values_and_bad_points(self, pivot_hl_payload):
        payload = {"processedPivotPoints": [
            *pivot_hl_payload["processedPivotPoints"],
            {"value": SENTINEL},
            {"value": "n/a"},
            "garbage",
        ]}
        part = partition_pivot_points(payload, 2000.0)
        assert [lv.y for lv in part.resistance] == [2010.5, 2030.0]
        assert [lv.y for lv in part.support] == [1990.0, 1975.25]

    def test_text_format(self, pivot_hl_payload):
        part = partition_pivot_points(pivot_hl_payload, 2000.0)
        assert part.resistance[0].text == "2010.5 (Count: 3, Diff: 1.2)"
        assert part.resistance[0].count == 3

    def test_counts(self, pivot_hl_payload):
        counts = partition_pivot_points(pivot_hl_payload, 2000.0).counts()
        assert (counts.resistance, counts.support) == (2, 2)

    def test_missing_payload(self):
        for payload in (None, {}, {"processedPivotPoints": None}, []):
            part = partition_pivot_points(payload, 100.0)
            assert part.resistance == [] and part.support == []


# ── Display order ──────────────────────────────────────────────────

class TestDisplay:
    def test_farthest_resistance_first(self, pivot_hl_payload):
        rows = pivot_high_low_levels(pivot_hl_payload, 2000.0)
        assert [lv.key for lv in rows] == ["Res2", "Res1", "CurrentPrice", "Sup1", "Sup2"]
        assert [lv.y for lv in rows] == [2030.0, 2010.5, 2000.0, 1990.0, 1975.25]

    def test_current_price_marker(self, pivot_hl_payload):
        rows = pivot_high_low_levels(pivot_hl_payload, 2000.0)
        assert rows[2].kind == LevelKind.CURRENT_PRICE
        assert rows[2].text == "Cu. Price=2000.00000"

    def test_gap_before_first_support(self, pivot_hl_payload):
        rows = pivot_high_low_levels(pivot_hl_payload, 2000.0)
        assert [lv.gap_before for lv in rows] == [False, False, False, True, False]

    def test_no_price_returns_unclassified_in_input_order(self, pivot_hl_payload):
        rows = pivot_high_low_levels(pivot_hl_payload, 0)
        assert [lv.key for lv in rows] == ["Point1", "Point2", "Point3", "Point4"]
        assert [lv.y for lv in rows] == [2010.5, 2030.0, 1990.0, 1975.25]
        assert all(lv.kind == LevelKind.UNCLASSIFIED for lv in rows)

    def test_idempotent(self, pivot_hl_payload):
        assert pivot_high_low_levels(pivot_hl_payload, 2000.0) == pivot_high_low_levels(pivot_hl_payload, 2000.0)


# ── Sub-key lookup ─────────────────────────────────────────────────

class TestValue:
    def test_res_and_sup(self, pivot_hl_payload):
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Res1").y == 2010.5
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Res2").y == 2030.0
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Sup2").y == 1975.25

    def test_out_of_range(self, pivot_hl_payload):
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Res3") is None
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Sup0") is None
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "Level1") is None

    def test_current_price(self, pivot_hl_payload):
        assert pivot_high_low_value(pivot_hl_payload, 2000.0, "CurrentPrice").y == 2000.0
        assert pivot_high_low_value(pivot_hl_payload, 0, "CurrentPrice") is None

    def test_no_price_has_no_res_sup(self, pivot_hl_payload):
        assert pivot_high_low_value(pivot_hl_payload, 0, "Res1") is None
        assert pivot_high_low_value(pivot_hl_payload, 0, "Point2").y == 2030.0
