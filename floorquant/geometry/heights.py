"""Default storey heights and change detection."""

from __future__ import annotations

from floorquant.models.building import BuildingMeta, FloorClass, Heights

_SCALAR_KEYS = (
    "basement2", "basement1",
    "floor1", "floor2", "floor3", "floor4", "floor5",
    "standard", "top",
)


def basement_height(heights: Heights, number: int) -> float | None:
    if number == 2:
        return heights.basement2
    if number == 1:
        return heights.basement1
    return None


def penthouse_height(heights: Heights, number: int) -> float | None:
    if 1 <= number <= len(heights.ph):
        return heights.ph[number - 1]
    return None


def ground_height(heights: Heights, number: int, floor_class: FloorClass) -> float | None:
    """Height of ground floor ``number``.

    Floors 1..5 use their own entry when configured; otherwise the class
    decides (top floor, setting floor) and everything else is standard.
    """
    explicit = heights.for_floor(number)
    if explicit is not None:
        return explicit
    if floor_class == FloorClass.TOP and heights.top is not None:
        return heights.top
    if floor_class == FloorClass.SETTING and heights.floor1 is not None:
        return heights.floor1
    return heights.standard


def heights_changed(old: Heights, new: Heights) -> bool:
    for key in _SCALAR_KEYS:
        if getattr(old, key) != getattr(new, key):
            return True
    return list(old.ph) != list(new.ph)


def structure_changed(old: BuildingMeta, new: BuildingMeta) -> bool:
    """True when an edit invalidates the derived floor set."""
    if old.core_count != new.core_count:
        return True
    if old.floor_count.model_dump() != new.floor_count.model_dump():
        return True
    return heights_changed(old.heights, new.heights)
