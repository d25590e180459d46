"""RangeConsolidator — individual floors to display rows and back."""

from __future__ import annotations

import logging

from floorquant.consolidation.views import (
    FloorView,
    Placeholder,
    RangeView,
    RealFloor,
    SpineRow,
)
from floorquant.geometry import labels
from floorquant.geometry.resolver import display_spine, resolve_cores
from floorquant.models.building import Building, Floor, FloorClass, LevelType

logger = logging.getLogger(__name__)


def expand_range_records(floors: list[Floor]) -> list[Floor]:
    """Replace persisted range records by their individual floors.

    Floor N of a range record gets the id ``"{rangeId}-{N}F"``; numbers
    already backed by a real floor of the same core are skipped.
    """
    if not any(f.is_range for f in floors):
        return list(floors)

    backed = {(f.core, labels.ground_level(f)) for f in floors if labels.ground_level(f) is not None}
    result: list[Floor] = []
    for floor in floors:
        if not floor.is_range:
            result.append(floor)
            continue
        span = labels.range_span(floor.floor_label)
        if span is None:
            logger.debug("Unreadable range label %r ignored", floor.floor_label)
            continue
        for number in range(span[0], span[1] + 1):
            if (floor.core, number) in backed:
                continue
            result.append(
                Floor(
                    id=labels.individual_floor_id(floor.id, number),
                    building_id=floor.building_id,
                    floor_label=labels.qualify(f"{number}F", floor.core, floor.core is not None),
                    floor_number=number,
                    level_type=LevelType.GROUND,
                    floor_class=floor.floor_class,
                    height=floor.height,
                    core=floor.core,
                )
            )
    return result


def _unique_by_label(floors: list[Floor]) -> list[Floor]:
    seen: set[str] = set()
    unique = []
    for floor in floors:
        key = labels.canonical_label(floor.floor_label)
        if key not in seen:
            seen.add(key)
            unique.append(floor)
    return unique


def _ground_rows(
    by_number: dict[int, Floor],
    top: int,
    core: int | None,
    multi_core: bool,
) -> list[FloorView]:
    rows: list[FloorView] = []
    number = 1
    while number <= top:
        floor = by_number.get(number)
        if floor is None:
            inferred = FloorClass.TOP if number == top else FloorClass.STANDARD
            rows.append(Placeholder(number, inferred, core, multi_core))
            number += 1
            continue
        if floor.floor_class != FloorClass.STANDARD:
            rows.append(RealFloor(floor))
            number += 1
            continue

        run = [floor]
        while True:
            following = by_number.get(number + len(run))
            if following is None or following.floor_class != FloorClass.STANDARD:
                break
            run.append(following)
        if len(run) >= 2:
            rows.append(RangeView(number, number + len(run) - 1, tuple(run), core, multi_core))
        else:
            rows.append(RealFloor(floor))
        number += len(run)
    return rows


def consolidate_for_display(
    floors: list[Floor],
    *,
    core: int | None = None,
    spine_top: int | None = None,
) -> list[FloorView]:
    """Display rows: basements, ground floors with ranges, penthouses.

    Parameters
    ----------
    floors:
        Floors of one building.  Legacy range records are expanded first.
    core:
        Core to lay out.  Defaults to the lowest core present.
    spine_top:
        Highest ground number to show; missing numbers below it become
        placeholders (the last one classified 최상층).
    """
    floors = expand_range_records(floors)
    cores = sorted({f.core for f in floors if f.core is not None})
    multi_core = len(cores) > 1 or any(labels.core_of(f.floor_label) for f in floors)
    if core is None and cores:
        core = cores[0]
    scoped = [f for f in floors if labels.same_core(f.core, core)]

    basements = sorted(
        _unique_by_label([f for f in scoped if f.level_type == LevelType.BASEMENT]),
        key=lambda f: -(labels.basement_number(f.floor_label) or 0),
    )
    penthouses = sorted(
        _unique_by_label([f for f in scoped if f.level_type == LevelType.GROUND and f.is_penthouse]),
        key=lambda f: labels.penthouse_number(f.floor_label) or 0,
    )

    by_number: dict[int, Floor] = {}
    unnumbered: list[Floor] = []
    for floor in scoped:
        if floor.level_type != LevelType.GROUND or floor.is_penthouse:
            continue
        number = labels.ground_level(floor)
        if number is None:
            unnumbered.append(floor)
            continue
        current = by_number.get(number)
        # A core's own floor wins over a shared one at the same number
        if current is None or (current.core is None and floor.core is not None):
            by_number[number] = floor

    top = max([spine_top or 0, *by_number])
    rows: list[FloorView] = [RealFloor(f) for f in basements]
    rows.extend(_ground_rows(by_number, top, core, multi_core))
    rows.extend(RealFloor(f) for f in unnumbered)
    rows.extend(RealFloor(f) for f in penthouses)
    return rows


def expand(views: list[FloorView]) -> list[Floor]:
    """Individual floors behind display rows; placeholders have none."""
    floors: list[Floor] = []
    for view in views:
        if isinstance(view, RealFloor):
            floors.append(view.floor)
        elif isinstance(view, RangeView):
            floors.extend(view.members)
    return floors


def range_containing(views: list[FloorView], floor_id: str) -> RangeView | None:
    for view in views:
        if isinstance(view, RangeView) and floor_id in view.member_ids:
            return view
    return None


def display_grid(building: Building, floors: list[Floor] | None = None) -> list[SpineRow]:
    """Rectangular ground-floor table of a multi-core building.

    One row per spine number, one cell per core; a range fills every row
    it spans.
    """
    floors = building.floors if floors is None else floors
    spine = display_spine(building, floors)
    core_numbers = [g.core for g in resolve_cores(building.meta)]

    cells: dict[int, dict[int, FloorView]] = {n: {} for n in range(1, spine + 1)}
    for core in core_numbers:
        for view in consolidate_for_display(floors, core=core, spine_top=spine):
            if isinstance(view, RangeView):
                for number in range(view.start, view.end + 1):
                    cells.setdefault(number, {})[core] = view
            elif isinstance(view, Placeholder):
                cells.setdefault(view.floor_number, {})[core] = view
            else:
                number = labels.ground_level(view.floor)
                if number is not None:
                    cells.setdefault(number, {})[core] = view

    return [SpineRow(number, cells[number]) for number in sorted(cells)]
