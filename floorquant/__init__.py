"""floorquant — floor geometry, classification and quantity takeoff engine for apartment buildings."""

__version__ = "1.0.0"

from floorquant.api.facade import FloorEngine
from floorquant.classification import apply_classification, apply_range_classification, update_floor
from floorquant.consolidation import FloorView, Placeholder, RangeView, RealFloor, SpineRow, consolidate_for_display, display_grid
from floorquant.errors import (
    BuildingLockedError,
    FloorQuantError,
    InvalidMetricError,
    InvalidQuantityError,
    ReferenceSyntaxError,
    RegenerationAbortedError,
    UnknownFloorError,
    WriteFlushError,
)
from floorquant.geometry import count_units, derive_floors, display_spine, resolve_cores
from floorquant.labor import LaborReport, estimate_building_labor, estimate_daily_workers, estimate_project_labor
from floorquant.models import (
    Building,
    BuildingMeta,
    Floor,
    FloorClass,
    FloorTrade,
    LevelType,
    ProcessCategory,
    ProcessItem,
    ProcessModule,
    TradeGroup,
)
from floorquant.persistence import InMemoryRecordStore, LockScope, PersistenceAdapter
from floorquant.quantity import Metric, TradeKind, get_quantity_by_reference, get_quantity_from_floor
from floorquant.regeneration import RegenerationResult, regenerate_floors
from floorquant.settings import ConfigManager, EngineSettings

__all__ = [
    "__version__",
    # Facade
    "FloorEngine",
    # Models
    "Building",
    "BuildingMeta",
    "Floor",
    "FloorClass",
    "FloorTrade",
    "LevelType",
    "Metric",
    "ProcessCategory",
    "ProcessItem",
    "ProcessModule",
    "TradeGroup",
    "TradeKind",
    # Views
    "FloorView",
    "Placeholder",
    "RangeView",
    "RealFloor",
    "SpineRow",
    # Operations
    "apply_classification",
    "apply_range_classification",
    "consolidate_for_display",
    "count_units",
    "derive_floors",
    "display_grid",
    "display_spine",
    "estimate_building_labor",
    "estimate_daily_workers",
    "estimate_project_labor",
    "get_quantity_by_reference",
    "get_quantity_from_floor",
    "regenerate_floors",
    "resolve_cores",
    "update_floor",
    # Persistence and configuration
    "ConfigManager",
    "EngineSettings",
    "InMemoryRecordStore",
    "LaborReport",
    "LockScope",
    "PersistenceAdapter",
    "RegenerationResult",
    # Errors
    "BuildingLockedError",
    "FloorQuantError",
    "InvalidMetricError",
    "InvalidQuantityError",
    "ReferenceSyntaxError",
    "RegenerationAbortedError",
    "UnknownFloorError",
    "WriteFlushError",
]
