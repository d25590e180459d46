"""Building, Floor and FloorTrade — the records the engine works over.

Field names are snake_case; every model also accepts and emits the camelCase
shape used by the record store (``floorLabel``, ``coreGroundFloors``,
``areaM2``, ...).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from floorquant.config import CORE_PREFIX_RE, PH_LABEL_RE


class LevelType(str, Enum):
    """Above or below grade."""

    GROUND = "지상"
    BASEMENT = "지하"


class FloorClass(str, Enum):
    """Classification used by the formwork cycle planning."""

    BASEMENT = "지하층"
    GENERAL = "일반층"
    SETTING = "셋팅층"
    STANDARD = "기준층"
    TOP = "최상층"
    PENTHOUSE = "옥탑층"


# Older records stored penthouse floors under this name
_LEGACY_FLOOR_CLASSES = {"PH층": FloorClass.PENTHOUSE.value}


class TradeGroup(str, Enum):
    """Phase-of-work bucket a quantity record is filed under."""

    BLINDING = "버림"
    FOUNDATION = "기초"
    APARTMENT = "아파트"


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Dump in the record-store (camelCase, JSON-safe) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Building metadata
# ---------------------------------------------------------------------------

class FloorCount(_Model):
    """Floor counts, globally and optionally per core."""

    basement: int = 0
    ground: int = 0
    ph: int = 0
    core_ground_floors: list[int] | None = None
    core_basement_floors: list[int] | None = None
    core_ph_floors: list[int] | None = None
    pilotis_count: int | None = None
    core_pilotis_counts: list[int] | None = None
    core_pilotis_heights: list[int] | None = None
    has_high_ceiling_equipment_room: bool | None = None


class Heights(_Model):
    """Storey heights in millimetres."""

    basement2: float | None = None
    basement1: float | None = None
    floor1: float | None = None
    floor2: float | None = None
    floor3: float | None = None
    floor4: float | None = None
    floor5: float | None = None
    standard: float | None = None
    top: float | None = None
    ph: list[float] = Field(default_factory=list)

    @field_validator("ph", mode="before")
    @classmethod
    def _ph_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (int, float)):
            return [value]
        return value

    def for_floor(self, number: int) -> float | None:
        """Explicit height of ground floor 1..5, if configured."""
        if 1 <= number <= 5:
            return getattr(self, f"floor{number}")
        return None


class UnitTypePattern(_Model):
    """Unit type occupying floors ``from_floor`` to ``to_floor`` of a core."""

    from_floor: int = Field(default=1, alias="from")
    to_floor: int = Field(default=1, alias="to")
    unit_type: str = Field(default="", alias="type")
    core_number: int | None = None


class BuildingMeta(_Model):
    """Structural parameters of a building (동 기본 정보)."""

    core_count: int = 1
    core_type: str | None = None
    slab_type: str | None = None
    unit_type_pattern: list[UnitTypePattern] = Field(default_factory=list)
    floor_count: FloorCount = Field(default_factory=FloorCount)
    heights: Heights = Field(default_factory=Heights)
    standard_floor_cycle: str | None = None
    pump_car_count: int | None = None
    total_units: int | None = None
    is_basic_info_locked: bool = False
    is_data_input_locked: bool = False


# ---------------------------------------------------------------------------
# Floors
# ---------------------------------------------------------------------------

class Floor(_Model):
    """One physical level, or a legacy persisted range record."""

    id: str
    building_id: str = ""
    floor_label: str
    floor_number: int = 0
    level_type: LevelType = LevelType.GROUND
    floor_class: FloorClass = FloorClass.STANDARD
    height: float | None = None
    core: int | None = None

    @field_validator("floor_class", mode="before")
    @classmethod
    def _normalize_class(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_FLOOR_CLASSES.get(value, value)
        return value

    @model_validator(mode="after")
    def _infer_core(self) -> Floor:
        if self.core is None:
            match = CORE_PREFIX_RE.match(self.floor_label)
            if match:
                self.core = int(match.group(1))
        return self

    @property
    def is_range(self) -> bool:
        return "~" in self.floor_label

    @property
    def is_penthouse(self) -> bool:
        if self.floor_class == FloorClass.PENTHOUSE:
            return True
        return PH_LABEL_RE.match(CORE_PREFIX_RE.sub("", self.floor_label)) is not None

    @property
    def is_ground(self) -> bool:
        """Above grade and below the penthouse."""
        return self.level_type == LevelType.GROUND and not self.is_penthouse


# ---------------------------------------------------------------------------
# Trades
# ---------------------------------------------------------------------------

class AreaQuantity(_Model):
    area_m2: float | None = None


class TonQuantity(_Model):
    ton: float | None = None


class VolumeQuantity(_Model):
    volume_m3: float | None = None


class TradeData(_Model):
    """Sparse per-trade quantities. A missing trade or metric means zero."""

    gang_form: AreaQuantity | None = None
    al_form: AreaQuantity | None = None
    formwork: AreaQuantity | None = None
    strip_clean: AreaQuantity | None = None
    rebar: TonQuantity | None = None
    concrete: VolumeQuantity | None = None


class FloorTrade(_Model):
    """Quantities of one trade group on one floor."""

    id: str
    floor_id: str
    building_id: str = ""
    trade_group: TradeGroup = TradeGroup.APARTMENT
    trades: TradeData = Field(default_factory=TradeData)


class Building(_Model):
    """Aggregate root: metadata plus the floors and trades it owns."""

    id: str
    name: str = ""
    project_id: str | None = None
    meta: BuildingMeta = Field(default_factory=BuildingMeta)
    floors: list[Floor] = Field(default_factory=list)
    floor_trades: list[FloorTrade] = Field(default_factory=list)

    def floor_by_id(self, floor_id: str) -> Floor | None:
        for floor in self.floors:
            if floor.id == floor_id:
                return floor
        return None

    def trades_for(self, floor_id: str) -> list[FloorTrade]:
        return [t for t in self.floor_trades if t.floor_id == floor_id]


def clamp_quantity(value: float | None) -> float:
    """Stored quantities read as finite, non-negative numbers."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
