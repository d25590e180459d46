"""Labor estimation: process modules, crews and work days."""

from floorquant.labor.estimator import (
    aggregate_building_quantities,
    category_days,
    estimate_building_labor,
    estimate_daily_workers,
    estimate_project_labor,
    item_work_days,
    process_plan_days,
)
from floorquant.labor.modules import get_available_modules, get_process_module
from floorquant.labor.report import LaborReport
from floorquant.labor.seed_data import PROCESS_MODULES

__all__ = [
    "LaborReport",
    "PROCESS_MODULES",
    "aggregate_building_quantities",
    "category_days",
    "estimate_building_labor",
    "estimate_daily_workers",
    "estimate_project_labor",
    "get_available_modules",
    "get_process_module",
    "item_work_days",
    "process_plan_days",
]
