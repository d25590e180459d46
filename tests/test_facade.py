"""Tests for the FloorEngine facade."""

from __future__ import annotations

from typing import Any

import pytest

from floorquant import FloorEngine
from floorquant.consolidation import Placeholder, RangeView
from floorquant.errors import BuildingLockedError, RegenerationAbortedError
from floorquant.models.building import (
    Building,
    BuildingMeta,
    FloorClass,
    FloorCount,
    Heights,
    UnitTypePattern,
)
from floorquant.models.process import ProcessItem
from floorquant.persistence import InMemoryRecordStore, LockScope
from floorquant.settings import EngineSettings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _FailingTradeStore(InMemoryRecordStore):
    def put(self, kind: str, record_id: str, payload: dict[str, Any]) -> None:
        if kind == "floor_trades":
            raise ConnectionError("trade table unavailable")
        super().put(kind, record_id, payload)


def _make_engine(store=None, **settings) -> FloorEngine:
    options = {"cell_debounce_seconds": 60, "form_autosave_seconds": 60, "log_level": "INFO"}
    options.update(settings)
    return FloorEngine(EngineSettings(**options), store=store)


def _make_building(engine: FloorEngine, ground: int = 5, **counts) -> Building:
    core_count = counts.pop("core_count", 1)
    building = Building(
        id="b1",
        name="101동",
        meta=BuildingMeta(
            core_count=core_count,
            floor_count=FloorCount(ground=ground, **counts),
            heights=Heights(floor1=3050, standard=2850),
        ),
    )
    return building.model_copy(update={"floors": engine.derive_floors(building)})


@pytest.fixture
def engine():
    engine = _make_engine()
    yield engine
    engine.adapter._cells.cancel()
    engine.adapter._forms.cancel()


# ---------------------------------------------------------------------------
# Classification through the facade
# ---------------------------------------------------------------------------


class TestFacadeClassification:
    def test_cascade_written_immediately(self, engine):
        building = _make_building(engine)
        building = engine.apply_classification(building, "b1-3F", FloorClass.SETTING)

        classes = [f.floor_class for f in building.floors]
        # 1F stays a setting floor; the old top floor falls inside the standard band
        assert classes == [
            FloorClass.SETTING, FloorClass.GENERAL, FloorClass.SETTING,
            FloorClass.STANDARD, FloorClass.STANDARD,
        ]
        assert set(engine.store.records("floors")) == {"b1-2F", "b1-3F", "b1-5F"}
        assert not engine.adapter.has_pending()

    def test_height_edit_debounced(self, engine):
        building = _make_building(engine)
        building = engine.update_floor_height(building, "b1-5F", 3000)

        assert building.floor_by_id("b1-5F").height == 3000
        assert engine.adapter.pending_keys == ["floors:b1-5F"]
        assert engine.store.records("floors") == {}

        engine.flush_pending_writes()
        assert engine.store.get("floors", "b1-5F")["height"] == 3000

    def test_range_classification(self, engine):
        building = _make_building(engine, ground=8)
        view = next(v for v in engine.consolidate_for_display(building) if isinstance(v, RangeView))
        building = engine.apply_range_classification(building, view, "일반층")
        assert all(building.floor_by_id(fid).floor_class == FloorClass.GENERAL for fid in view.member_ids)
        assert set(engine.store.records("floors")) == set(view.member_ids)

    def test_basic_info_lock(self, engine):
        building = engine.lock(_make_building(engine), LockScope.BASIC_INFO, user_id="kim")
        with pytest.raises(BuildingLockedError):
            engine.apply_classification(building, "b1-3F", "셋팅층")
        with pytest.raises(BuildingLockedError):
            engine.update_floor_height(building, "b1-3F", 3000)
        assert engine.store.get("buildings", "b1")["meta"]["isBasicInfoLocked"] is True


# ---------------------------------------------------------------------------
# Quantities through the facade
# ---------------------------------------------------------------------------


class TestFacadeQuantities:
    def test_write_then_resolve(self, engine):
        building = _make_building(engine)
        building = engine.write_quantity(building, "b1-1F", "아파트", "concrete", 42)
        assert engine.resolve_quantity(building, "1F", "concrete") == pytest.approx(42)
        assert len(engine.adapter.pending_keys) == 1

        assert engine.flush_pending_writes() == 1
        assert len(engine.store.records("floor_trades")) == 1

    def test_range_fan_out_scheduled(self, engine):
        building = _make_building(engine, ground=8)
        building = engine.write_quantity(building, "b1-4F", "아파트", "rebar", 2)
        # 2F..7F form the range; every member gets a record
        assert len(engine.adapter.pending_keys) == 6
        assert engine.resolve_quantity(building, "5F", "rebar") == 0
        assert engine.resolve_quantity(building, "4F", "rebar") == pytest.approx(2)

    def test_group_row_and_reference(self, engine):
        building = engine.write_group_quantity(_make_building(engine), "기초", "rebar", 10)
        assert engine.quantity_by_reference(building, "F7*0.45") == pytest.approx(4.5)

    def test_data_input_lock(self, engine):
        building = engine.lock(_make_building(engine), "data_input")
        with pytest.raises(BuildingLockedError):
            engine.write_quantity(building, "b1-1F", "아파트", "concrete", 1)
        building = engine.unlock(building, "data_input")
        building = engine.write_quantity(building, "b1-1F", "아파트", "concrete", 1)
        assert engine.summarize_trades(building)["concrete"] == pytest.approx(1)


# ---------------------------------------------------------------------------
# Display, labor and regeneration
# ---------------------------------------------------------------------------


class TestFacadeMisc:
    def test_two_core_spine(self, engine):
        building = _make_building(engine, ground=14, core_count=2, core_ground_floors=[14, 10])
        views = engine.consolidate_for_display(building, core=2)
        assert [v.floor_number for v in views if isinstance(v, Placeholder)] == [11, 12, 13, 14]
        assert engine.resolve_quantity(building, "코어2-12F", "concrete") == 0
        assert len(engine.display_grid(building)) == 14

    def test_daily_workers_use_configured_cap(self):
        engine = _make_engine(pump_car_max=3)
        item = ProcessItem(
            id="pour", work_item="타설", daily_productivity=130,
            equipment_calculation_base=400, equipment_workers_per_unit=6,
        )
        assert engine.estimate_daily_workers(item, 5000) == 18

    def test_building_labor(self, engine):
        building = engine.write_quantity(_make_building(engine), "b1-1F", "아파트", "rebar", 8)
        report = engine.estimate_building_labor(building)
        assert report.workers["rebar"] == 10
        assert engine.estimate_project_labor([building, building]).workers["rebar"] == 20

    def test_count_units(self, engine):
        building = _make_building(engine, ground=10)
        building.meta.unit_type_pattern = [UnitTypePattern.model_validate({"from": 1, "to": 4, "type": "84A"})]
        assert engine.count_units(building) == 40

    def test_meta_edit_without_structure_change(self, engine):
        building = _make_building(engine)
        meta = building.meta.model_copy(update={"pump_car_count": 3})
        updated = engine.update_building_meta(building, meta)
        assert updated.floors == building.floors
        assert engine.adapter.pending_keys == ["buildings:b1"]

    def test_meta_edit_regenerates(self, engine):
        building = _make_building(engine)
        building = engine.write_quantity(building, "b1-1F", "아파트", "concrete", 5)
        meta = building.meta.model_copy(update={"floor_count": FloorCount(ground=8)})
        updated = engine.update_building_meta(building, meta)
        assert len(updated.floors) == 8
        assert engine.resolve_quantity(updated, "1F", "concrete") == pytest.approx(5)
        assert not engine.adapter.has_pending()
        assert len(engine.store.records("floors")) == 8

    def test_regeneration_aborts_on_failed_flush(self):
        engine = _make_engine(store=_FailingTradeStore())
        building = _make_building(engine)
        building = engine.write_quantity(building, "b1-1F", "아파트", "concrete", 5)
        with pytest.raises(RegenerationAbortedError):
            engine.regenerate_floors(building)
        engine.adapter._cells.cancel()
