"""Crew and duration formulas of the standard frame-work schedule."""

from __future__ import annotations

import math

from floorquant.config import DEFAULT_PUMP_CAR_COUNT


def calculate_total_workers(quantity: float, daily_productivity: float) -> int:
    """Worker-days needed: quantity / per-worker daily output, rounded up."""
    if daily_productivity <= 0 or quantity <= 0:
        return 0
    return math.ceil(quantity / daily_productivity)


def calculate_daily_input_workers(total_workers: int, equipment_count: int) -> int:
    if equipment_count <= 0:
        return 0
    return math.ceil(total_workers / equipment_count)


def calculate_daily_input_workers_by_work_days(total_workers: int, direct_work_days: float) -> int:
    if direct_work_days <= 0:
        return 0
    return math.ceil(total_workers / direct_work_days)


def calculate_equipment_count(
    quantity: float,
    calculation_base: float,
    max_count: int = DEFAULT_PUMP_CAR_COUNT,
) -> int:
    """Pump cars for a pour: ``ceil(min(max_count, quantity / base))``.

    No quantity needs no equipment; a missing base assumes one unit.
    """
    if quantity <= 0:
        return 0
    if calculation_base <= 0:
        return 1
    return max(1, math.ceil(min(max_count, quantity / calculation_base)))


def calculate_daily_input_workers_by_equipment(equipment_count: int, workers_per_unit: float) -> int:
    return math.ceil(equipment_count * workers_per_unit)


def calculate_work_days_with_rounding(
    quantity: float,
    daily_productivity: float,
    daily_input_workers: int,
) -> int:
    """Direct work days, rounded half up, at least one day."""
    if daily_productivity <= 0 or daily_input_workers <= 0:
        return 1
    days = quantity / (daily_productivity * daily_input_workers)
    whole = math.floor(days)
    if days - whole < 0.5:
        return max(1, whole)
    return max(1, math.ceil(days))


def calculate_total_work_days(direct_work_days: float, indirect_days: float) -> int:
    return math.ceil(direct_work_days + indirect_days)
