"""Tests for quantity resolution, the reference language and writes."""

from __future__ import annotations

import math

import pytest

from floorquant.consolidation import RangeView, consolidate_for_display
from floorquant.errors import (
    BuildingLockedError,
    InvalidMetricError,
    InvalidQuantityError,
    ReferenceSyntaxError,
    UnknownFloorError,
)
from floorquant.geometry.resolver import derive_floors
from floorquant.models.building import (
    Building,
    BuildingMeta,
    Floor,
    FloorClass,
    FloorCount,
    FloorTrade,
    Heights,
    TradeData,
    TradeGroup,
)
from floorquant.quantity import (
    Metric,
    TradeKind,
    check_metric,
    get_quantity_by_reference,
    get_quantity_from_floor,
    group_floor_id,
    parse_reference,
    summarize_trades,
    write_group_quantity,
    write_quantity,
    write_range_quantity,
)
from floorquant.quantity.writer import range_default_id, range_values


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_building(ground: int = 14, basement: int = 2, ph: int = 2, **meta) -> Building:
    building = Building(
        id="b1",
        name="101동",
        meta=BuildingMeta(
            floor_count=FloorCount(basement=basement, ground=ground, ph=ph),
            heights=Heights(floor1=3050, standard=2850),
            **meta,
        ),
    )
    return building.model_copy(update={"floors": derive_floors(building)})


def _make_trade(floor_id: str, group: TradeGroup = TradeGroup.APARTMENT, **trades) -> FloorTrade:
    return FloorTrade(
        id=f"t-{floor_id}-{group.value}",
        floor_id=floor_id,
        building_id="b1",
        trade_group=group,
        trades=TradeData.model_validate(trades),
    )


def _with_trades(building: Building, *trades: FloorTrade) -> Building:
    return building.model_copy(update={"floor_trades": [*building.floor_trades, *trades]})


def _range(building: Building) -> RangeView:
    return next(v for v in consolidate_for_display(building.floors) if isinstance(v, RangeView))


def _concrete(building: Building, label: str) -> float:
    return get_quantity_from_floor(building, label, TradeKind.CONCRETE)


# ---------------------------------------------------------------------------
# Trade/metric table
# ---------------------------------------------------------------------------


class TestMetrics:
    def test_default_metric(self):
        assert check_metric("rebar") == (TradeKind.REBAR, Metric.TON)

    def test_invalid_pair_rejected(self):
        with pytest.raises(InvalidMetricError):
            check_metric(TradeKind.REBAR, Metric.AREA_M2)

    def test_unknown_trade_rejected(self):
        with pytest.raises(InvalidMetricError):
            check_metric("steel")

    def test_resolve_rejects_invalid_pair(self):
        with pytest.raises(InvalidMetricError):
            get_quantity_from_floor(_make_building(), "1F", "concrete", "ton")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolveQuantity:
    def test_reads_floor_record(self):
        building = _with_trades(_make_building(), _make_trade("b1-7F", concrete={"volumeM3": 42.5}))
        assert _concrete(building, "7F") == pytest.approx(42.5)

    def test_missing_floor_trade_and_metric_are_zero(self):
        building = _with_trades(_make_building(), _make_trade("b1-7F", rebar={"ton": 3}))
        assert _concrete(building, "7F") == 0
        assert _concrete(building, "8F") == 0
        assert _concrete(building, "99F") == 0

    def test_negative_and_nan_clamped(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-3F", concrete={"volumeM3": -5}),
            _make_trade("b1-4F", concrete={"volumeM3": float("nan")}),
        )
        for label in ("3F", "4F"):
            value = _concrete(building, label)
            assert value == 0
            assert math.isfinite(value)

    def test_penthouse_display_label(self):
        building = _with_trades(_make_building(), _make_trade("b1-PH1", formwork={"areaM2": 80}))
        assert get_quantity_from_floor(building, "옥탑1", "formwork") == pytest.approx(80)

    def test_apartment_record_preferred(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-2F", TradeGroup.FOUNDATION, concrete={"volumeM3": 1}),
            _make_trade("b1-2F", TradeGroup.APARTMENT, concrete={"volumeM3": 9}),
        )
        assert _concrete(building, "2F") == pytest.approx(9)

    def test_legacy_range_record(self):
        floors = [
            Floor(id="b1-1F", floor_label="1F", floor_number=1, floor_class=FloorClass.SETTING),
            Floor(id="b1-r", floor_label="2~14F 기준층", floor_number=2),
        ]
        building = Building(id="b1", floors=floors, floor_trades=[
            _make_trade("b1-r", concrete={"volumeM3": 100}),
            _make_trade("b1-r-6F", concrete={"volumeM3": 60}),
        ])
        assert _concrete(building, "5F") == pytest.approx(100)
        assert _concrete(building, "6F") == pytest.approx(60)
        assert get_quantity_from_floor(building, "9F", "concrete", range_floor_id="b1-r") == pytest.approx(100)


# ---------------------------------------------------------------------------
# Reference language
# ---------------------------------------------------------------------------


class TestReference:
    def test_foundation_rebar_ratio(self):
        building = _with_trades(
            _make_building(),
            _make_trade(group_floor_id("기초"), TradeGroup.FOUNDATION, rebar={"ton": 10}),
        )
        assert get_quantity_by_reference(building, "F7*0.45") == pytest.approx(4.5)

    def test_additive(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-4F", strip_clean={"areaM2": 12.5}),
            _make_trade("b1-6F", strip_clean={"areaM2": 7.25}),
        )
        total = get_quantity_by_reference(building, "E14+E16")
        assert total == pytest.approx(
            get_quantity_by_reference(building, "E14") + get_quantity_by_reference(building, "E16")
        )
        assert total == pytest.approx(19.75)

    def test_blinding_sums_group(self):
        building = _with_trades(
            _make_building(),
            _make_trade("group-버림", TradeGroup.BLINDING, concrete={"volumeM3": 30}),
            _make_trade("b1-B1", TradeGroup.BLINDING, concrete={"volumeM3": 5}),
        )
        assert get_quantity_by_reference(building, "G6") == pytest.approx(35)

    def test_basement_rows(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-B2", rebar={"ton": 4}),
            _make_trade("b1-B1", rebar={"ton": 6}),
        )
        assert get_quantity_by_reference(building, "F8") == pytest.approx(4)
        assert get_quantity_by_reference(building, "F9*0.5") == pytest.approx(3)

    def test_floor_one_row_uses_setting_floor(self):
        building = _with_trades(_make_building(), _make_trade("b1-1F", al_form={"areaM2": 55}))
        assert get_quantity_by_reference(building, "C11") == pytest.approx(55)

    def test_floor_two_row_falls_back_to_any_class(self):
        building = _with_trades(_make_building(), _make_trade("b1-2F", gang_form={"areaM2": 21}))
        assert get_quantity_by_reference(building, "B12") == pytest.approx(21)

    def test_penthouse_rows(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-PH2", concrete={"volumeM3": 14}),
        )
        assert get_quantity_by_reference(building, "G27") == pytest.approx(14)
        assert get_quantity_by_reference(building, "G28") == 0

    @pytest.mark.parametrize("reference", ["", None, "X5", "F7*", "F7+", "f7", "F7*abc", "7F"])
    def test_malformed_is_zero(self, reference):
        assert get_quantity_by_reference(_make_building(), reference) == 0

    def test_strict_mode_raises(self):
        with pytest.raises(ReferenceSyntaxError) as excinfo:
            get_quantity_by_reference(_make_building(), "F7**2", strict=True)
        assert excinfo.value.reference == "F7**2"

    def test_parse_reference(self):
        terms = parse_reference("F8*0.45+G11")
        assert [(t.trade, t.row, t.ratio) for t in terms] == [
            (TradeKind.REBAR, 8, 0.45),
            (TradeKind.CONCRETE, 11, 1.0),
        ]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class TestWriteQuantity:
    def test_write_individual_floor(self):
        result = write_quantity(_make_building(), "b1-1F", "아파트", "concrete", 42)
        assert _concrete(result.building, "1F") == pytest.approx(42)
        assert [r.floor_id for r in result.written] == ["b1-1F"]

    def test_sibling_keeps_range_value(self):
        """Writing one floor of a range does not leak into untouched siblings."""
        building = _make_building()
        building = write_range_quantity(building, _range(building), "아파트", "concrete", 100).building
        building = write_quantity(building, "b1-7F", "아파트", "concrete", 50).building
        assert _concrete(building, "7F") == pytest.approx(50)
        assert _concrete(building, "5F") == pytest.approx(100)

    def test_legacy_range_member_write(self):
        floors = [
            Floor(id="b1-1F", floor_label="1F", floor_number=1, floor_class=FloorClass.SETTING),
            Floor(id="b1-r", floor_label="2~14F", floor_number=2),
        ]
        building = Building(id="b1", floors=floors, floor_trades=[
            _make_trade("b1-r", concrete={"volumeM3": 100}),
        ])
        result = write_quantity(building, "b1-r-7F", "아파트", "concrete", 50)
        assert _concrete(result.building, "7F") == pytest.approx(50)
        assert _concrete(result.building, "5F") == pytest.approx(100)
        assert len(result.written) == 13

    def test_existing_sibling_untouched(self):
        building = _with_trades(_make_building(), _make_trade("b1-4F", concrete={"volumeM3": 7}))
        result = write_quantity(building, "b1-6F", "아파트", "concrete", 9)
        assert _concrete(result.building, "4F") == pytest.approx(7)
        assert "b1-4F" not in [r.floor_id for r in result.written]

    def test_range_write_materializes_only_missing(self):
        building = _with_trades(_make_building(), _make_trade("b1-4F", concrete={"volumeM3": 7}))
        view = _range(building)
        result = write_range_quantity(building, view, "아파트", "concrete", 100)
        assert _concrete(result.building, "2F") == pytest.approx(100)
        assert _concrete(result.building, "13F") == pytest.approx(100)
        assert _concrete(result.building, "4F") == pytest.approx(7)

    def test_range_write_keeps_lowest_member_record(self):
        building = write_quantity(_make_building(), "b1-2F", "아파트", "concrete", 30).building
        view = _range(building)
        result = write_range_quantity(building, view, "아파트", "concrete", 100)
        assert _concrete(result.building, "2F") == pytest.approx(30)
        assert [r.floor_id for r in result.written] == ["range-2F"]
        values = range_values(result.building, view, TradeGroup.APARTMENT)
        assert values.concrete.volume_m3 == pytest.approx(100)

    def test_lowest_member_is_not_the_range_value(self):
        building = _with_trades(_make_building(), _make_trade("b1-2F", concrete={"volumeM3": 30}))
        result = write_quantity(building, "b1-9F", "아파트", "concrete", 5)
        assert _concrete(result.building, "4F") == 0
        assert _concrete(result.building, "2F") == pytest.approx(30)

    def test_range_default_feeds_new_siblings(self):
        building = _with_trades(_make_building(), _make_trade("range-2F", concrete={"volumeM3": 80}))
        result = write_quantity(building, "b1-9F", "아파트", "concrete", 5)
        assert _concrete(result.building, "4F") == pytest.approx(80)
        assert range_default_id(_range(building)) == "range-2F"

    def test_other_trades_copied_with_range_values(self):
        building = _make_building()
        building = write_range_quantity(building, _range(building), "아파트", "rebar", 3).building
        building = write_quantity(building, "b1-8F", "아파트", "concrete", 50).building
        assert get_quantity_from_floor(building, "8F", "rebar") == pytest.approx(3)

    def test_group_write(self):
        result = write_group_quantity(_make_building(), "기초", "rebar", 10)
        assert result.written[0].floor_id == "group-기초"
        assert get_quantity_by_reference(result.building, "F7") == pytest.approx(10)

    def test_none_clears(self):
        building = write_quantity(_make_building(), "b1-1F", "아파트", "concrete", 42).building
        building = write_quantity(building, "b1-1F", "아파트", "concrete", None).building
        assert _concrete(building, "1F") == 0

    @pytest.mark.parametrize("value", [-1, float("inf"), float("nan"), "abc"])
    def test_invalid_values_rejected(self, value):
        with pytest.raises(InvalidQuantityError):
            write_quantity(_make_building(), "b1-1F", "아파트", "concrete", value)

    def test_locked_building_rejected(self):
        building = _make_building(is_data_input_locked=True)
        with pytest.raises(BuildingLockedError) as excinfo:
            write_quantity(building, "b1-1F", "아파트", "concrete", 1)
        assert excinfo.value.building_id == "b1"
        assert building.floor_trades == []

    def test_unknown_floor_rejected(self):
        with pytest.raises(UnknownFloorError):
            write_quantity(_make_building(), "b1-99F", "아파트", "concrete", 1)

    def test_input_building_unchanged(self):
        building = _make_building()
        write_quantity(building, "b1-7F", "아파트", "concrete", 5)
        assert building.floor_trades == []


class TestSummary:
    def test_per_trade_totals(self):
        building = _with_trades(
            _make_building(),
            _make_trade("b1-1F", concrete={"volumeM3": 10}, rebar={"ton": 1}),
            _make_trade("b1-2F", concrete={"volumeM3": 5}),
            _make_trade("group-기초", TradeGroup.FOUNDATION, concrete={"volumeM3": 100}),
        )
        totals = summarize_trades(building)
        assert totals[TradeKind.CONCRETE] == pytest.approx(115)
        assert totals[TradeKind.REBAR] == pytest.approx(1)
        assert summarize_trades(building, "아파트")[TradeKind.CONCRETE] == pytest.approx(15)

    def test_range_default_left_out(self):
        building = _make_building(ground=4)
        building = write_range_quantity(building, _range(building), "아파트", "rebar", 2).building
        # 2F and 3F carry the value; the range default is not a floor
        assert summarize_trades(building)[TradeKind.REBAR] == pytest.approx(4)
