"""LaborEstimator — quantities to daily crews and work days."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from floorquant.config import DEFAULT_PUMP_CAR_COUNT
from floorquant.geometry import labels
from floorquant.labor.calculation import (
    calculate_daily_input_workers,
    calculate_daily_input_workers_by_equipment,
    calculate_equipment_count,
    calculate_total_workers,
    calculate_work_days_with_rounding,
)
from floorquant.labor.modules import get_process_module
from floorquant.labor.report import LaborReport
from floorquant.labor.seed_data import (
    DASHBOARD_CONCRETE,
    DASHBOARD_PRODUCTIVITY,
    PLAN_CATEGORIES,
)
from floorquant.models.building import Building, FloorTrade, TradeGroup, clamp_quantity
from floorquant.models.process import ProcessCategory, ProcessItem, ProcessModule
from floorquant.quantity.metrics import TradeKind, read_metric
from floorquant.quantity.reference import get_quantity_by_reference
from floorquant.quantity.resolver import pick_trade

logger = logging.getLogger(__name__)


def pump_car_count(building: Building | None) -> int:
    if building is not None and building.meta.pump_car_count:
        return building.meta.pump_car_count
    return DEFAULT_PUMP_CAR_COUNT


def estimate_daily_workers(
    item: ProcessItem,
    total_quantity: float,
    max_equipment_units: int | None = None,
) -> int:
    """Daily crew a work item needs for ``total_quantity``.

    Equipment-driven items staff ``workers_per_unit`` people per pump car,
    with ``ceil(min(cap, quantity / base))`` cars; other items need
    ``ceil(quantity / daily_productivity)`` workers.  Never decreases as the
    quantity grows.
    """
    quantity = clamp_quantity(total_quantity)
    if item.uses_equipment:
        cap = item.max_equipment_units or max_equipment_units or DEFAULT_PUMP_CAR_COUNT
        count = calculate_equipment_count(quantity, item.equipment_calculation_base, cap)
        return calculate_daily_input_workers_by_equipment(count, item.equipment_workers_per_unit)
    return calculate_total_workers(quantity, item.daily_productivity)


def item_work_days(building: Building, item: ProcessItem) -> float:
    """Direct work days of one item on one building.

    A fixed day count wins; otherwise the duration follows the pump-car
    crew or the productivity crew for the referenced quantity.
    """
    if item.direct_work_days is not None:
        return item.direct_work_days
    if not item.quantity_reference or item.daily_productivity <= 0:
        return 0
    quantity = get_quantity_by_reference(building, item.quantity_reference)
    if quantity <= 0:
        return 0
    if item.uses_equipment:
        workers = estimate_daily_workers(item, quantity, pump_car_count(building))
    else:
        total = calculate_total_workers(quantity, item.daily_productivity)
        workers = calculate_daily_input_workers(total, item.equipment_count)
    if workers <= 0:
        return 0
    return calculate_work_days_with_rounding(quantity, item.daily_productivity, workers)


def category_days(building: Building, module: ProcessModule) -> float:
    """Sum of the direct work days of a module's items."""
    return sum(item_work_days(building, item) for item in module.items)


def process_plan_days(
    building: Building,
    process_types: dict[ProcessCategory, str] | None = None,
) -> dict[ProcessCategory, float]:
    """Work days per planned category, using default process types."""
    chosen = process_types or {}
    days: dict[ProcessCategory, float] = {}
    for category in PLAN_CATEGORIES:
        module = get_process_module(category, chosen.get(category))
        if module is None or not module.items:
            continue
        days[category] = category_days(building, module)
    return days


# ---------------------------------------------------------------------------
# Whole-building crew estimate
# ---------------------------------------------------------------------------

def _floor_records(building: Building) -> Iterable[FloorTrade]:
    """The record of every physical floor, range members included."""
    backed = {(f.core, labels.ground_level(f)) for f in building.floors if labels.ground_level(f)}
    for floor in building.floors:
        if not floor.is_range:
            record = pick_trade(building, floor.id)
            if record is not None:
                yield record
            continue
        span = labels.range_span(floor.floor_label)
        if span is None:
            continue
        for number in range(span[0], span[1] + 1):
            if (floor.core, number) in backed:
                continue
            member_id = labels.individual_floor_id(floor.id, number)
            record = pick_trade(building, member_id) or pick_trade(building, floor.id)
            if record is not None:
                yield record


def aggregate_building_quantities(building: Building) -> dict[TradeKind, float]:
    """Per-trade totals: 버림 and 기초 records plus every floor's record."""
    totals = {kind: 0.0 for kind in TradeKind}
    records = [
        r for r in building.floor_trades
        if r.trade_group in (TradeGroup.BLINDING, TradeGroup.FOUNDATION)
    ]
    records.extend(r for r in _floor_records(building) if r.trade_group == TradeGroup.APARTMENT)
    for record in records:
        for kind in TradeKind:
            totals[kind] += read_metric(record.trades, kind)
    return totals


def estimate_building_labor(building: Building) -> LaborReport:
    """Daily crews per trade for the whole building.

    Formwork crews also cover the gang-form and al-form areas; concrete
    crews follow the number of pump cars the volume needs.
    """
    totals = aggregate_building_quantities(building)
    formwork_total = (
        totals[TradeKind.GANG_FORM] + totals[TradeKind.AL_FORM] + totals[TradeKind.FORMWORK]
    )
    quantities = {
        TradeKind.GANG_FORM.value: totals[TradeKind.GANG_FORM],
        TradeKind.AL_FORM.value: totals[TradeKind.AL_FORM],
        TradeKind.FORMWORK.value: formwork_total,
        TradeKind.REBAR.value: totals[TradeKind.REBAR],
        TradeKind.CONCRETE.value: totals[TradeKind.CONCRETE],
    }

    workers = {
        trade: calculate_total_workers(quantities[trade], rate)
        for trade, rate in DASHBOARD_PRODUCTIVITY.items()
    }
    cars = pump_car_count(building)
    concrete = quantities[TradeKind.CONCRETE.value]
    count = calculate_equipment_count(concrete, DASHBOARD_CONCRETE["equipment_calculation_base"], cars)
    workers[TradeKind.CONCRETE.value] = calculate_daily_input_workers_by_equipment(
        count, DASHBOARD_CONCRETE["equipment_workers_per_unit"],
    )

    logger.debug("Labor estimate for %s: %s", building.id, workers)
    return LaborReport(
        building_id=building.id,
        building_name=building.name,
        quantities=quantities,
        workers=workers,
        productivity=dict(DASHBOARD_PRODUCTIVITY),
        pump_car_count=count,
    )


def estimate_project_labor(buildings: list[Building], name: str = "project") -> LaborReport:
    """Sum of the building estimates."""
    return LaborReport.combine([estimate_building_labor(b) for b in buildings], name=name)
