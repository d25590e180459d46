"""CoreGeometryResolver — building metadata to per-core floor descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from floorquant.config import PH_FLOOR_BASE, SETTING_FLOOR_MAX
from floorquant.geometry import labels
from floorquant.geometry.heights import basement_height, ground_height, penthouse_height
from floorquant.models.building import (
    Building,
    BuildingMeta,
    Floor,
    FloorClass,
    Heights,
    LevelType,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FloorDescriptor:
    """A floor the metadata implies, before it becomes a Floor record."""

    level_type: LevelType
    floor_number: int
    label: str
    floor_class: FloorClass
    height: float | None
    core: int | None = None

    @property
    def shared(self) -> bool:
        return self.core is None


@dataclass
class CoreGeometry:
    """Counts and ordered floor descriptors of one structural core."""

    core: int
    basement: int
    ground: int
    ph: int
    pilotis_count: int = 0
    pilotis_floors: int = 0
    descriptors: list[FloorDescriptor] = field(default_factory=list)


def _entry(values: list[int] | None, index: int, fallback: int) -> int:
    """Per-core array entry, or the global count when it is missing."""
    if values and index < len(values) and values[index] is not None and values[index] >= 0:
        return int(values[index])
    if values:
        logger.debug("Per-core entry %d missing; using global count %d", index, fallback)
    return fallback


def default_classes(ground: int, heights: Heights) -> dict[int, FloorClass]:
    """Initial classification of ground floors 1..ground.

    The highest floor n <= 5 whose configured height differs from the
    standard height is the setting floor; floors below it are general,
    floors above it standard and the last floor is the top floor.
    """
    if ground <= 0:
        return {}
    if ground == 1:
        return {1: FloorClass.SETTING}

    setting: int | None = None
    if heights.standard is not None:
        for number in range(min(SETTING_FLOOR_MAX, ground), 0, -1):
            height = heights.for_floor(number)
            if height is not None and height != heights.standard:
                setting = number
                break

    standard_start = setting + 1 if setting else 2
    classes: dict[int, FloorClass] = {}
    for number in range(1, ground + 1):
        if number == ground:
            classes[number] = FloorClass.TOP
        elif number == setting:
            classes[number] = FloorClass.SETTING
        elif number < standard_start:
            classes[number] = FloorClass.GENERAL
        else:
            classes[number] = FloorClass.STANDARD
    return classes


def _basement_descriptors(count: int, heights: Heights, core: int | None, multi: bool) -> list[FloorDescriptor]:
    return [
        FloorDescriptor(
            level_type=LevelType.BASEMENT,
            floor_number=-number,
            label=labels.qualify(f"B{number}", core, multi),
            floor_class=FloorClass.BASEMENT,
            height=basement_height(heights, number),
            core=core,
        )
        for number in range(count, 0, -1)
    ]


def _ground_descriptors(count: int, heights: Heights, core: int | None, multi: bool) -> list[FloorDescriptor]:
    classes = default_classes(count, heights)
    return [
        FloorDescriptor(
            level_type=LevelType.GROUND,
            floor_number=number,
            label=labels.qualify(f"{number}F", core, multi),
            floor_class=classes[number],
            height=ground_height(heights, number, classes[number]),
            core=core,
        )
        for number in range(1, count + 1)
    ]


def _penthouse_descriptors(count: int, heights: Heights, core: int | None, multi: bool) -> list[FloorDescriptor]:
    return [
        FloorDescriptor(
            level_type=LevelType.GROUND,
            floor_number=PH_FLOOR_BASE + number,
            label=labels.qualify(f"PH{number}", core, multi),
            floor_class=FloorClass.PENTHOUSE,
            height=penthouse_height(heights, number),
            core=core,
        )
        for number in range(1, count + 1)
    ]


def resolve_cores(meta: BuildingMeta) -> list[CoreGeometry]:
    """Per-core counts and floor descriptors, basement to penthouse.

    Without a second core, or without per-core arrays, every level falls
    back to the global counts and its descriptors are shared (``core`` is
    None).  Per-core arrays shorter than the core count fall back to the
    global count for the missing cores.
    """
    counts = meta.floor_count
    heights = meta.heights
    core_count = max(1, meta.core_count or 1)
    multi = core_count > 1
    per_ground = multi and bool(counts.core_ground_floors)
    per_basement = multi and bool(counts.core_basement_floors)
    per_ph = multi and bool(counts.core_ph_floors)

    geometries: list[CoreGeometry] = []
    for core in range(1, core_count + 1):
        index = core - 1
        basement = _entry(counts.core_basement_floors, index, counts.basement) if per_basement else counts.basement
        ground = _entry(counts.core_ground_floors, index, counts.ground) if per_ground else counts.ground
        ph = _entry(counts.core_ph_floors, index, counts.ph) if per_ph else counts.ph

        geometry = CoreGeometry(
            core=core,
            basement=basement,
            ground=ground,
            ph=ph,
            pilotis_count=_entry(counts.core_pilotis_counts, index, 0),
            pilotis_floors=_entry(counts.core_pilotis_heights, index, 0),
        )
        geometry.descriptors.extend(
            _basement_descriptors(basement, heights, core if per_basement else None, multi)
        )
        geometry.descriptors.extend(
            _ground_descriptors(ground, heights, core if per_ground else None, multi)
        )
        geometry.descriptors.extend(
            _penthouse_descriptors(ph, heights, core if per_ph else None, multi)
        )
        geometries.append(geometry)
    return geometries


def floor_id(building_id: str, descriptor: FloorDescriptor) -> str:
    """Deterministic id: ``{building}-{label}`` or ``{building}-c{k}-{label}``."""
    label = labels.strip_core(descriptor.label)
    if descriptor.core is None:
        return f"{building_id}-{label}"
    return f"{building_id}-c{descriptor.core}-{label}"


def derive_floors(building: Building) -> list[Floor]:
    """Synthesize the deduplicated floor list of a building.

    Shared levels appear once; the order is basements, ground floors core
    by core, then penthouses.
    """
    geometries = resolve_cores(building.meta)
    seen: set[str] = set()
    buckets: dict[str, list[Floor]] = {"basement": [], "ground": [], "ph": []}

    for geometry in geometries:
        for descriptor in geometry.descriptors:
            fid = floor_id(building.id, descriptor)
            if fid in seen:
                continue
            seen.add(fid)
            floor = Floor(
                id=fid,
                building_id=building.id,
                floor_label=descriptor.label,
                floor_number=descriptor.floor_number,
                level_type=descriptor.level_type,
                floor_class=descriptor.floor_class,
                height=descriptor.height,
                core=descriptor.core,
            )
            if descriptor.level_type == LevelType.BASEMENT:
                buckets["basement"].append(floor)
            elif descriptor.floor_number > PH_FLOOR_BASE:
                buckets["ph"].append(floor)
            else:
                buckets["ground"].append(floor)

    floors = buckets["basement"] + buckets["ground"] + buckets["ph"]
    logger.debug("Derived %d floors for building %s", len(floors), building.id)
    return floors


def display_spine(building: Building, floors: list[Floor] | None = None) -> int:
    """Highest ground floor number shown as a table row.

    Core 1 sets the spine; it is extended by any other core's count and by
    actual floor records, which may exceed the metadata after manual edits.
    """
    geometries = resolve_cores(building.meta)
    top = max((g.ground for g in geometries), default=0)
    for floor in floors if floors is not None else building.floors:
        if floor.level_type != LevelType.GROUND or floor.is_penthouse:
            continue
        span = labels.range_span(floor.floor_label) if floor.is_range else None
        number = span[1] if span else labels.ground_number(floor.floor_label)
        if number is not None:
            top = max(top, number)
    return top


def count_units(meta: BuildingMeta) -> int:
    """Dwelling units after piloti exclusion.

    Each unit-type pattern contributes ``(to - from + 1)`` units on every
    ground floor of its core.  Piloti exclusions subtract ``count x floors``
    per core, or the plain counts when no floor counts are recorded.
    """
    geometries = {g.core: g for g in resolve_cores(meta)}
    counts = meta.floor_count

    total = 0
    for pattern in meta.unit_type_pattern:
        per_floor = max(0, pattern.to_floor - pattern.from_floor + 1)
        geometry = geometries.get(pattern.core_number or 1)
        floors = geometry.ground if geometry else counts.ground
        total += per_floor * floors

    if counts.core_pilotis_counts and counts.core_pilotis_heights:
        excluded = sum(
            (c or 0) * (h or 0)
            for c, h in zip(counts.core_pilotis_counts, counts.core_pilotis_heights)
        )
    elif counts.core_pilotis_counts:
        excluded = sum(c or 0 for c in counts.core_pilotis_counts)
    else:
        excluded = counts.pilotis_count or 0

    return max(0, total - excluded)
