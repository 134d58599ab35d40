"""Tests for levelwatch.levels.srv2 — support/resistance ranking."""

from levelwatch.levels.srv2 import Side, partition_srv2, srv2_levels, srv2_value
from levelwatch.models.levels import LevelKind
from levelwatch.validity import SENTINEL


class TestPartition:
    def test_basic_pair(self):
        payload = {"labels": [{"y": 10, "text": "Support"}, {"y": 20, "text": "Resistance"}]}
        part = partition_srv2(payload, 15)
        assert [lv.y for lv in part.support] == [10]
        assert [lv.y for lv in part.resistance] == [20]

    def test_ranking_order(self, srv2_payload):
        part = partition_srv2(srv2_payload, 2000.0)
        assert [lv.y for lv in part.support] == [1990.0, 1985.0, 1970.0]
        assert [lv.y for lv in part.resistance] == [2015.0, 2040.0]
        assert [lv.key for lv in part.support] == ["Level1", "Level2", "Level3"]

    def test_missing_text_defaults_by_price(self, srv2_payload):
        part = partition_srv2(srv2_payload, 2000.0)
        assert part.support[1].text == "Support"
        assert part.resistance[1].text == "Resistance"

    def test_support_text_above_price_dropped(self):
        payload = {"labels": [{"y": 30, "text": "Support"}, {"y": 40}]}
        part = partition_srv2(payload, 20)
        assert part.support == []
        assert [lv.y for lv in part.resistance] == [40]

    def test_resistance_text_below_price_is_support(self):
        payload = {"labels": [{"y": 10, "text": "Resistance"}]}
        part = partition_srv2(payload, 20)
        assert [lv.y for lv in part.support] == [10]
        assert part.support[0].text == "Resistance"

    def test_deterministic_ids(self, srv2_payload):
        first = partition_srv2(srv2_payload, 2000.0)
        second = partition_srv2(srv2_payload, 2000.0)
        assert [lv.id for lv in first.support] == ["a", "label-4", "label-2"]
        assert first == second

    def test_bad_labels_skipped(self):
        payload = {"labels": [None, {"y": "12"}, {"y": SENTINEL}, {"y": True}, {"text": "Support"}, {"y": 5}]}
        part = partition_srv2(payload, 10)
        assert [lv.y for lv in part.support] == [5]
        assert part.resistance == []

    def test_missing_labels(self):
        for payload in (None, {}, {"labels": "x"}):
            part = partition_srv2(payload, 10)
            assert part.support == [] and part.resistance == []


class TestDisplay:
    def test_marker_only_on_resistance_side(self):
        payload = {"labels": [{"y": 10, "text": "Support"}, {"y": 20, "text": "Resistance"}]}
        res = srv2_levels(payload, 15, Side.RESISTANCE)
        sup = srv2_levels(payload, 15, Side.SUPPORT)
        assert [lv.kind for lv in res] == [LevelKind.RESISTANCE, LevelKind.CURRENT_PRICE]
        assert all(lv.kind != LevelKind.CURRENT_PRICE for lv in sup)

    def test_resistance_rows_highest_first(self, srv2_payload):
        rows = srv2_levels(srv2_payload, 2000.0, Side.RESISTANCE)
        assert [lv.y for lv in rows] == [2040.0, 2015.0, 2000.0]

    def test_no_marker_when_price_equals_support(self):
        payload = {"labels": [{"y": 15, "text": "Support"}, {"y": 20}]}
        rows = srv2_levels(payload, 15, Side.RESISTANCE)
        assert [lv.kind for lv in rows] == [LevelKind.RESISTANCE]

    def test_no_marker_without_labels(self):
        for payload in (SENTINEL, {"labels": []}, {"labels": [{"y": SENTINEL}]}):
            assert srv2_levels(payload, 15, Side.RESISTANCE) == []
            assert srv2_value(payload, 15, Side.RESISTANCE, "CurrentPrice") is None

    def test_no_marker_without_price(self):
        payload = {"labels": [{"y": 20}]}
        rows = srv2_levels(payload, 0, Side.RESISTANCE)
        assert all(lv.kind != LevelKind.CURRENT_PRICE for lv in rows)

    def test_empty(self):
        assert srv2_levels(None, 10, Side.SUPPORT) == []


class TestValue:
    def test_level_lookup(self):
        payload = {"labels": [{"y": 10, "text": "Support"}, {"y": 20, "text": "Resistance"}]}
        assert srv2_value(payload, 15, Side.SUPPORT, "Level1").y == 10
        assert srv2_value(payload, 15, Side.RESISTANCE, "Level1").y == 20
        assert srv2_value(payload, 15, Side.SUPPORT, "Level2") is None

    def test_current_price_lookup(self):
        payload = {"labels": [{"y": 10, "text": "Support"}, {"y": 20, "text": "Resistance"}]}
        assert srv2_value(payload, 15, Side.RESISTANCE, "CurrentPrice").text == "Cu. Price=15.00000"
        assert srv2_value(payload, 15, Side.SUPPORT, "CurrentPrice") is None

    def test_unknown_sub_key(self, srv2_payload):
        assert srv2_value(srv2_payload, 2000.0, Side.SUPPORT, "Res1") is None
        assert srv2_value(srv2_payload, 2000.0, Side.SUPPORT, "Level0") is None
