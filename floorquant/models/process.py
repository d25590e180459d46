"""Process modules: ordered work items of a construction phase."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProcessCategory(str, Enum):
    """Construction phase a module plans."""

    BLINDING = "버림"
    FOUNDATION = "기초"
    BASEMENT = "지하층"
    SETTING = "셋팅층"
    STANDARD = "기준층"
    PH = "PH층"
    PENTHOUSE = "옥탑층"


class ProcessItem(BaseModel):
    """One work step.

    ``quantity_reference`` uses the sheet reference language (``"F8*0.45"``).
    Equipment-driven items (concrete pours) set ``equipment_calculation_base``
    and ``equipment_workers_per_unit``; ``max_equipment_units`` caps the number
    of pump cars, falling back to the building's pump-car count.  A fixed
    ``direct_work_days`` overrides any computed duration.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    work_item: str
    unit: str = ""
    quantity_reference: str | None = None
    daily_productivity: float = 0.0
    calculation_basis: str = ""
    equipment_name: str = ""
    equipment_count: int = 1
    direct_work_days: float | None = None
    indirect_days: float = 0.0
    indirect_work_item: str = ""
    equipment_calculation_base: float | None = None
    equipment_workers_per_unit: float | None = None
    max_equipment_units: int | None = None
    floor_label: str | None = None

    @property
    def uses_equipment(self) -> bool:
        return bool(self.equipment_calculation_base) and bool(self.equipment_workers_per_unit)


class ProcessModule(BaseModel):
    """A category x process-type template, e.g. 기준층 / 6일 사이클."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: ProcessCategory
    items: tuple[ProcessItem, ...] = Field(default_factory=tuple)
