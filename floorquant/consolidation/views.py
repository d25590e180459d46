"""Display rows: a real floor, a range of standard floors, or a placeholder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from floorquant.geometry import labels
from floorquant.models.building import Floor, FloorClass


@dataclass(frozen=True)
class RealFloor:
    """An individual floor record shown as its own row."""

    floor: Floor

    @property
    def id(self) -> str:
        return self.floor.id

    @property
    def label(self) -> str:
        return labels.display_label(self.floor.floor_label)

    @property
    def floor_class(self) -> FloorClass:
        return self.floor.floor_class

    @property
    def height(self) -> float | None:
        return self.floor.height

    @property
    def core(self) -> int | None:
        return self.floor.core


@dataclass(frozen=True)
class RangeView:
    """Two or more consecutive 기준층 floors shown as one row.

    Never persisted; writes fan out to ``members``.
    """

    start: int
    end: int
    members: tuple[Floor, ...]
    core: int | None = None
    multi_core: bool = False

    @property
    def id(self) -> str:
        return f"range:{self.core or 0}:{self.start}~{self.end}F"

    @property
    def label(self) -> str:
        return labels.format_range(self.start, self.end, self.core, self.multi_core)

    @property
    def floor_class(self) -> FloorClass:
        return FloorClass.STANDARD

    @property
    def height(self) -> float | None:
        return self.members[0].height if self.members else None

    @property
    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]

    def contains(self, floor_number: int) -> bool:
        return self.start <= floor_number <= self.end

    def member(self, floor_number: int) -> Floor | None:
        for floor in self.members:
            if labels.ground_level(floor) == floor_number:
                return floor
        return None


@dataclass(frozen=True)
class Placeholder:
    """A spine row a core has no floor for.  Holds no data."""

    floor_number: int
    floor_class: FloorClass
    core: int | None = None
    multi_core: bool = False

    @property
    def label(self) -> str:
        return labels.qualify(f"{self.floor_number}F", self.core, self.multi_core)

    @property
    def height(self) -> None:
        return None


FloorView = Union[RealFloor, RangeView, Placeholder]


@dataclass(frozen=True)
class SpineRow:
    """One row of the multi-core floor table: the view of each core at a number."""

    floor_number: int
    cells: dict[int, FloorView]
