"""Tests for core geometry: labels, default classes, derived floors, units."""

from __future__ import annotations

import pytest

from floorquant.geometry import labels
from floorquant.geometry.heights import ground_height, heights_changed, structure_changed
from floorquant.geometry.resolver import (
    count_units,
    default_classes,
    derive_floors,
    display_spine,
    floor_id,
    resolve_cores,
)
from floorquant.models.building import (
    Building,
    BuildingMeta,
    Floor,
    FloorClass,
    FloorCount,
    Heights,
    LevelType,
    UnitTypePattern,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_meta(**counts) -> BuildingMeta:
    core_count = counts.pop("core_count", 1)
    heights = counts.pop("heights", Heights(standard=2850))
    return BuildingMeta(core_count=core_count, floor_count=FloorCount(**counts), heights=heights)


def _make_building(**counts) -> Building:
    return Building(id="b1", name="101동", meta=_make_meta(**counts))


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


class TestLabels:
    def test_canonical_label_strips_core_and_maps_penthouse(self):
        assert labels.canonical_label("코어2-옥탑1") == "PH1"
        assert labels.canonical_label("코어1-13F") == "13F"
        assert labels.canonical_label("B2") == "B2"

    def test_display_label(self):
        assert labels.display_label("PH2") == "옥탑2"
        assert labels.display_label("코어1-PH1") == "코어1-옥탑1"
        assert labels.display_label("2~14F 기준층") == "2~14F"

    def test_numbers(self):
        assert labels.ground_number("코어1-13F") == 13
        assert labels.ground_number("B1") is None
        assert labels.basement_number("B2") == 2
        assert labels.penthouse_number("옥탑3") == 3

    def test_range_span(self):
        assert labels.range_span("코어1-2~14F 기준층") == (2, 14)
        assert labels.range_span("7F") is None

    def test_individual_floor_id(self):
        assert labels.individual_floor_id("b1-r", 7) == "b1-r-7F"

    def test_qualify(self):
        assert labels.qualify("7F", 2, True) == "코어2-7F"
        assert labels.qualify("7F", 2, False) == "7F"
        assert labels.qualify("7F", None, True) == "7F"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestModels:
    def test_camel_case_record_validates(self):
        floor = Floor.model_validate({
            "id": "b1-c2-5F",
            "buildingId": "b1",
            "floorLabel": "코어2-5F",
            "floorNumber": 5,
            "levelType": "지상",
            "floorClass": "기준층",
        })
        assert floor.core == 2
        assert floor.floor_class == FloorClass.STANDARD
        assert floor.to_record()["floorLabel"] == "코어2-5F"

    def test_legacy_penthouse_class_normalized(self):
        floor = Floor(id="p", floor_label="PH1", floor_class="PH층")
        assert floor.floor_class == FloorClass.PENTHOUSE
        assert floor.is_penthouse
        assert not floor.is_ground

    def test_range_record(self):
        floor = Floor(id="r", floor_label="2~14F 기준층")
        assert floor.is_range

    def test_scalar_penthouse_height(self):
        assert Heights(ph=2650).ph == [2650.0]
        assert Heights(ph=None).ph == []

    def test_unit_type_pattern_aliases(self):
        pattern = UnitTypePattern.model_validate({"from": 1, "to": 4, "type": "84A", "coreNumber": 2})
        assert pattern.from_floor == 1
        assert pattern.to_floor == 4
        assert pattern.core_number == 2


# ---------------------------------------------------------------------------
# Default classification and heights
# ---------------------------------------------------------------------------


class TestDefaultClasses:
    def test_single_floor_is_setting(self):
        assert default_classes(1, Heights(standard=2850)) == {1: FloorClass.SETTING}

    def test_floor_one_differs(self):
        classes = default_classes(14, Heights(floor1=3050, standard=2850))
        assert classes[1] == FloorClass.SETTING
        assert all(classes[n] == FloorClass.STANDARD for n in range(2, 14))
        assert classes[14] == FloorClass.TOP

    def test_highest_differing_floor_wins(self):
        heights = Heights(floor1=3000, floor3=3100, standard=2850)
        classes = default_classes(10, heights)
        assert classes[1] == FloorClass.GENERAL
        assert classes[2] == FloorClass.GENERAL
        assert classes[3] == FloorClass.SETTING
        assert classes[4] == FloorClass.STANDARD
        assert classes[10] == FloorClass.TOP

    def test_no_setting_floor(self):
        classes = default_classes(5, Heights(standard=2850))
        assert classes == {
            1: FloorClass.GENERAL,
            2: FloorClass.STANDARD,
            3: FloorClass.STANDARD,
            4: FloorClass.STANDARD,
            5: FloorClass.TOP,
        }

    def test_no_ground_floors(self):
        assert default_classes(0, Heights()) == {}

    def test_ground_height_fallbacks(self):
        heights = Heights(floor1=3050, standard=2850, top=3000)
        assert ground_height(heights, 1, FloorClass.SETTING) == 3050
        assert ground_height(heights, 9, FloorClass.TOP) == 3000
        assert ground_height(heights, 7, FloorClass.STANDARD) == 2850


# ---------------------------------------------------------------------------
# Derived floors
# ---------------------------------------------------------------------------


class TestDeriveFloors:
    def test_single_core(self):
        heights = Heights(basement2=3500, basement1=3400, standard=2850, ph=[2650])
        building = _make_building(basement=2, ground=3, ph=1, heights=heights)
        floors = derive_floors(building)

        assert [f.id for f in floors] == ["b1-B2", "b1-B1", "b1-1F", "b1-2F", "b1-3F", "b1-PH1"]
        assert [f.floor_number for f in floors] == [-2, -1, 1, 2, 3, 1001]
        assert floors[0].height == 3500
        assert floors[0].level_type == LevelType.BASEMENT
        assert floors[-1].floor_class == FloorClass.PENTHOUSE
        assert floors[-1].height == 2650
        assert [f.floor_class for f in floors[2:5]] == [
            FloorClass.GENERAL, FloorClass.STANDARD, FloorClass.TOP,
        ]
        assert all(f.core is None for f in floors)

    def test_multi_core_per_core_ground(self):
        building = _make_building(core_count=2, basement=1, ground=14, core_ground_floors=[14, 10])
        floors = derive_floors(building)

        assert len(floors) == 1 + 14 + 10
        assert floors[0].id == "b1-B1"
        assert floors[0].core is None
        core2 = [f for f in floors if f.core == 2]
        assert len(core2) == 10
        assert core2[-1].id == "b1-c2-10F"
        assert core2[-1].floor_label == "코어2-10F"

    def test_ids_are_deterministic(self):
        building = _make_building(core_count=2, ground=5, core_ground_floors=[5, 4])
        assert [f.id for f in derive_floors(building)] == [f.id for f in derive_floors(building)]

    def test_missing_per_core_entry_falls_back(self):
        geometries = resolve_cores(_make_meta(core_count=2, ground=12, core_ground_floors=[14]))
        assert [g.ground for g in geometries] == [14, 12]

    def test_single_core_ignores_arrays(self):
        geometries = resolve_cores(_make_meta(core_count=1, ground=8, core_ground_floors=[20]))
        assert geometries[0].ground == 8

    def test_floor_id_shape(self):
        geometry = resolve_cores(_make_meta(core_count=2, ground=2, core_ground_floors=[2, 2]))[1]
        assert floor_id("b9", geometry.descriptors[0]) == "b9-c2-1F"


# ---------------------------------------------------------------------------
# Display spine
# ---------------------------------------------------------------------------


class TestDisplaySpine:
    def test_spine_spans_tallest_core(self):
        building = _make_building(core_count=2, ground=14, core_ground_floors=[14, 10])
        assert display_spine(building) == 14

    def test_spine_extends_to_taller_second_core(self):
        building = _make_building(core_count=2, ground=10, core_ground_floors=[10, 12])
        assert display_spine(building) == 12

    def test_spine_extends_to_actual_records(self):
        building = _make_building(core_count=2, ground=14, core_ground_floors=[14, 10])
        extra = Floor(id="b1-c2-16F", floor_label="코어2-16F", floor_number=16)
        floors = derive_floors(building) + [extra]
        assert display_spine(building, floors) == 16

    def test_spine_reads_range_records(self):
        building = _make_building(ground=3)
        floors = [Floor(id="r", floor_label="2~18F 기준층")]
        assert display_spine(building, floors) == 18


# ---------------------------------------------------------------------------
# Units and change detection
# ---------------------------------------------------------------------------


class TestCountUnits:
    def test_single_core_with_pilotis(self):
        meta = _make_meta(ground=10, pilotis_count=2)
        meta.unit_type_pattern = [UnitTypePattern(from_floor=1, to_floor=4, unit_type="84A")]
        assert count_units(meta) == 38

    def test_per_core_pilotis(self):
        meta = _make_meta(
            core_count=2,
            ground=10,
            core_ground_floors=[10, 8],
            core_pilotis_counts=[2, 1],
            core_pilotis_heights=[1, 2],
        )
        meta.unit_type_pattern = [
            UnitTypePattern(from_floor=1, to_floor=2, unit_type="59A", core_number=1),
            UnitTypePattern(from_floor=1, to_floor=2, unit_type="84B", core_number=2),
        ]
        assert count_units(meta) == 20 + 16 - 4

    def test_never_negative(self):
        meta = _make_meta(ground=1, pilotis_count=50)
        meta.unit_type_pattern = [UnitTypePattern(from_floor=1, to_floor=1)]
        assert count_units(meta) == 0


class TestChangeDetection:
    def test_height_edit_is_structural(self):
        old = _make_meta(ground=10)
        new = old.model_copy(update={"heights": Heights(standard=2900)})
        assert heights_changed(old.heights, new.heights)
        assert structure_changed(old, new)

    def test_penthouse_heights_compared(self):
        assert heights_changed(Heights(ph=[2650]), Heights(ph=[2650, 2700]))

    def test_pump_cars_not_structural(self):
        old = _make_meta(ground=10)
        new = old.model_copy(update={"pump_car_count": 3})
        assert not structure_changed(old, new)

    @pytest.mark.parametrize("field,value", [("core_count", 2)])
    def test_core_count_is_structural(self, field, value):
        old = _make_meta(ground=10)
        assert structure_changed(old, old.model_copy(update={field: value}))
