"""Embedded process-module data: the standard frame-work schedule sheet.

Each item reads its quantity from the quantity sheet through a reference
(``"G11"`` = concrete of floor 1).  Cycle variants of the 셋팅층, 기준층 and
PH층 modules share the same work items.
"""

from __future__ import annotations

from typing import Any

from floorquant.models.process import ProcessCategory, ProcessItem, ProcessModule

CYCLES = ("5일 사이클", "6일 사이클", "7일 사이클", "8일 사이클")
STANDARD_PROCESS = "표준공정"

_PUMP_CAR = "콘크리트 펌프차"

# Fixed one-day layout marking that opens every floor
_MARKING: dict[str, Any] = {
    "work_item": "1.먹매김(1일)",
    "calculation_basis": "일수고정",
    "direct_work_days": 1,
}

BLINDING_ITEMS: list[dict[str, Any]] = [
    {"id": "blinding-formwork", "work_item": "1.버림틀설치", "unit": "㎡",
     "quantity_reference": "D6", "daily_productivity": 10,
     "calculation_basis": "일수고정", "direct_work_days": 1},
    {"id": "blinding-concrete", "work_item": "2.버림타설", "unit": "㎥",
     "quantity_reference": "G6", "daily_productivity": 130,
     "calculation_basis": "장비대수*4명 /버림부분", "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 650, "equipment_workers_per_unit": 4,
     "indirect_days": 1, "indirect_work_item": "양생"},
]

FOUNDATION_ITEMS: list[dict[str, Any]] = [
    {"id": "foundation-marking", **_MARKING, "work_item": "3.먹매김"},
    {"id": "foundation-rebar", "work_item": "4.기초철근조립", "unit": "ton",
     "quantity_reference": "F7", "daily_productivity": 1.1,
     "calculation_basis": "일수고정", "direct_work_days": 6,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "foundation-cutwork", "work_item": "5.끊어치기 작업", "unit": "㎡",
     "quantity_reference": "D7", "daily_productivity": 10,
     "calculation_basis": "일수고정", "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "foundation-concrete", "work_item": "6.기초타설", "unit": "㎥",
     "quantity_reference": "G7", "daily_productivity": 130,
     "calculation_basis": "장비대수*5명 /기초부분", "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 650, "equipment_workers_per_unit": 5,
     "indirect_days": 3, "indirect_work_item": "양생"},
]

BASEMENT_ITEMS: list[dict[str, Any]] = [
    # B2
    {"id": "basement-marking-b2", **_MARKING, "floor_label": "B2"},
    {"id": "basement-wall-rebar-b2", "work_item": "2.옹벽철근조립", "unit": "ton",
     "quantity_reference": "F8*0.45", "daily_productivity": 0.8, "direct_work_days": 5,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B2"},
    {"id": "basement-formwork-b2", "work_item": "3.지하2층거푸집설치", "unit": "㎡",
     "quantity_reference": "D8*0.95", "daily_productivity": 11, "direct_work_days": 17,
     "indirect_days": 1, "indirect_work_item": "보강/검측", "floor_label": "B2"},
    {"id": "basement-slab-rebar-b2", "work_item": "4.보슬라브철근조립", "unit": "ton",
     "quantity_reference": "F8*0.55", "daily_productivity": 0.8, "direct_work_days": 5,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B2"},
    {"id": "basement-finish-b2", "work_item": "5.마감작업", "unit": "㎡",
     "quantity_reference": "D8*0.05", "daily_productivity": 11, "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B2"},
    {"id": "basement-concrete-b2", "work_item": "6.타설", "unit": "㎥",
     "quantity_reference": "G8", "daily_productivity": 130, "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 500, "equipment_workers_per_unit": 5,
     "indirect_days": 3, "indirect_work_item": "양생", "floor_label": "B2"},
    {"id": "basement-stripclean-b2", "work_item": "*거푸집해체정리", "unit": "㎡",
     "quantity_reference": "D8", "daily_productivity": 50, "direct_work_days": 0,
     "indirect_days": 16, "floor_label": "B2"},
    # B1
    {"id": "basement-marking-b1", **_MARKING, "work_item": "7.먹매김(1일)", "floor_label": "B1"},
    {"id": "basement-wall-rebar-b1", "work_item": "8.벽 철근조립", "unit": "ton",
     "quantity_reference": "F9*0.45", "daily_productivity": 0.7, "direct_work_days": 5,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B1"},
    {"id": "basement-formwork-b1", "work_item": "9.지하1층 거푸집 설치", "unit": "㎡",
     "quantity_reference": "D9*0.9", "daily_productivity": 9, "direct_work_days": 19,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B1"},
    {"id": "basement-slab-rebar-b1", "work_item": "10.보슬라브 철근조립", "unit": "ton",
     "quantity_reference": "F9*0.55", "daily_productivity": 0.7, "direct_work_days": 5,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B1"},
    {"id": "basement-finish-1st", "work_item": "11.1차 마감작업", "unit": "㎡",
     "quantity_reference": "D9*0.05", "daily_productivity": 10, "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B1"},
    {"id": "basement-concrete-1st", "work_item": "12.1차 타설", "unit": "㎥",
     "quantity_reference": "G9*0.6", "daily_productivity": 130, "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 500, "equipment_workers_per_unit": 5,
     "indirect_days": 3, "indirect_work_item": "양생", "floor_label": "B1"},
    {"id": "basement-finish-2nd", "work_item": "12.2차 마감작업", "unit": "㎡",
     "quantity_reference": "D9*0.05", "daily_productivity": 10, "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측", "floor_label": "B1"},
    {"id": "basement-concrete-2nd", "work_item": "13.2차 타설", "unit": "㎥",
     "quantity_reference": "G9*0.4", "daily_productivity": 130, "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 500, "equipment_workers_per_unit": 5,
     "indirect_days": 3, "indirect_work_item": "양생", "floor_label": "B1"},
    {"id": "basement-stripclean-b1", "work_item": "*거푸집해체정리", "unit": "㎡",
     "quantity_reference": "D9", "daily_productivity": 50, "direct_work_days": 0,
     "indirect_days": 22, "floor_label": "B1"},
]

SETTING_ITEMS: list[dict[str, Any]] = [
    {"id": "setting-marking", **_MARKING},
    {"id": "setting-gangform", "work_item": "2.갱폼설치", "unit": "㎡",
     "quantity_reference": "B11", "daily_productivity": 30, "direct_work_days": 2,
     "indirect_days": 6, "indirect_work_item": "앵커/안전발판"},
    {"id": "setting-wall-rebar", "work_item": "3.옹벽철근 조립", "unit": "ton",
     "quantity_reference": "F11*0.5", "daily_productivity": 0.8, "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "setting-alform", "work_item": "4.알폼조립", "unit": "㎡",
     "quantity_reference": "C11", "daily_productivity": 30, "direct_work_days": 4,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "setting-slab-rebar", "work_item": "5.슬라브철근 조립", "unit": "ton",
     "quantity_reference": "F11*0.5", "daily_productivity": 0.9, "direct_work_days": 2,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "setting-concrete", "work_item": "6.타설", "unit": "㎥",
     "quantity_reference": "G11", "daily_productivity": 130, "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 400, "equipment_workers_per_unit": 6,
     "indirect_days": 2, "indirect_work_item": "양생"},
]

STANDARD_ITEMS: list[dict[str, Any]] = [
    {"id": "standard-marking", **_MARKING, "indirect_work_item": "검측"},
    {"id": "standard-gangform", "work_item": "2.갱폼설치", "unit": "㎡",
     "quantity_reference": "B14", "daily_productivity": 60, "direct_work_days": 1,
     "indirect_days": 1, "indirect_work_item": "보강/검측"},
    {"id": "standard-wall-rebar", "work_item": "3.옹벽철근 조립", "unit": "ton",
     "quantity_reference": "F14*0.5", "daily_productivity": 0.8, "direct_work_days": 1,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "standard-alform", "work_item": "4.알폼조립", "unit": "㎡",
     "quantity_reference": "C14*0.55", "daily_productivity": 60, "direct_work_days": 1,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "standard-slab-rebar", "work_item": "5.슬라브철근 조립", "unit": "ton",
     "quantity_reference": "F14*0.5", "daily_productivity": 0.9, "direct_work_days": 1,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "standard-concrete", "work_item": "6.타설", "unit": "㎥",
     "quantity_reference": "G14", "daily_productivity": 130, "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 320, "equipment_workers_per_unit": 6,
     "indirect_days": 2, "indirect_work_item": "양생"},
]

PENTHOUSE_ITEMS: list[dict[str, Any]] = [
    {"id": "ph-marking", **_MARKING},
    {"id": "ph-wall-rebar", "work_item": "3.옹벽철근 조립", "unit": "ton",
     "quantity_reference": "F26*0.5", "daily_productivity": 0.7, "direct_work_days": 1,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "ph-euroform", "work_item": "4.유로폼 설치", "unit": "㎡",
     "quantity_reference": "D26", "daily_productivity": 9, "direct_work_days": 6,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "ph-slab-rebar", "work_item": "5.슬라브철근 조립", "unit": "ton",
     "quantity_reference": "F26*0.5", "daily_productivity": 0.6, "direct_work_days": 1,
     "indirect_days": 0.5, "indirect_work_item": "검측"},
    {"id": "ph-concrete", "work_item": "6.타설", "unit": "㎥",
     "quantity_reference": "G26", "daily_productivity": 130,
     "calculation_basis": "장비대수*4명 /최상층", "equipment_name": _PUMP_CAR,
     "equipment_calculation_base": 230, "equipment_workers_per_unit": 4,
     "indirect_days": 2, "indirect_work_item": "양생"},
]

# Process type used when a building has not chosen one
DEFAULT_PROCESS_TYPES: dict[ProcessCategory, str] = {
    ProcessCategory.BLINDING: STANDARD_PROCESS,
    ProcessCategory.FOUNDATION: STANDARD_PROCESS,
    ProcessCategory.BASEMENT: STANDARD_PROCESS,
    ProcessCategory.SETTING: STANDARD_PROCESS,
    ProcessCategory.STANDARD: "6일 사이클",
    ProcessCategory.PH: "6일 사이클",
    ProcessCategory.PENTHOUSE: STANDARD_PROCESS,
}

# Categories planned per building, in schedule order
PLAN_CATEGORIES: tuple[ProcessCategory, ...] = (
    ProcessCategory.BLINDING,
    ProcessCategory.FOUNDATION,
    ProcessCategory.BASEMENT,
    ProcessCategory.SETTING,
    ProcessCategory.STANDARD,
    ProcessCategory.PENTHOUSE,
)

# Whole-building crew estimate: per-worker daily output by trade
DASHBOARD_PRODUCTIVITY: dict[str, float] = {
    "gangForm": 10,
    "alForm": 10,
    "formwork": 11,
    "rebar": 0.8,
}

# Concrete crews follow pump cars
DASHBOARD_CONCRETE: dict[str, float] = {
    "equipment_calculation_base": 400,
    "equipment_workers_per_unit": 6,
}


def _module(module_id: str, category: ProcessCategory, name: str,
            items: list[dict[str, Any]], suffix: str = "") -> ProcessModule:
    built = tuple(
        ProcessItem(**{**item, "id": f"{item['id']}{suffix}"}) for item in items
    )
    return ProcessModule(id=module_id, name=name, category=category, items=built)


def _cycle_modules(prefix: str, category: ProcessCategory,
                   items: list[dict[str, Any]]) -> list[ProcessModule]:
    modules = []
    for cycle in CYCLES:
        days = cycle[0]
        modules.append(_module(f"{prefix}-{days}day", category, cycle, items, f"-{days}day"))
    return modules


PROCESS_MODULES: tuple[ProcessModule, ...] = (
    _module("blinding-standard", ProcessCategory.BLINDING, STANDARD_PROCESS, BLINDING_ITEMS),
    _module("foundation-standard", ProcessCategory.FOUNDATION, STANDARD_PROCESS, FOUNDATION_ITEMS),
    _module("basement-standard", ProcessCategory.BASEMENT, STANDARD_PROCESS, BASEMENT_ITEMS),
    _module("setting-standard", ProcessCategory.SETTING, STANDARD_PROCESS, SETTING_ITEMS),
    *_cycle_modules("setting", ProcessCategory.SETTING, SETTING_ITEMS),
    *_cycle_modules("standard", ProcessCategory.STANDARD, STANDARD_ITEMS),
    _module("ph-standard", ProcessCategory.PENTHOUSE, STANDARD_PROCESS, PENTHOUSE_ITEMS),
    *_cycle_modules("ph", ProcessCategory.PH, PENTHOUSE_ITEMS),
)
