"""FloorClassifier — pure reducers over floor snapshots.

Every operation takes the full floor list and returns a new one; input
floors are never mutated.  Order of a combined edit: classification (with
its cascade) first, then the height heuristic, whose promotion goes back
through the classification reducer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from floorquant.classification.cascade import cascade_targets
from floorquant.classification.heuristics import promotion_for_height
from floorquant.errors import UnknownFloorError
from floorquant.models.building import Floor, FloorClass

logger = logging.getLogger(__name__)

UNSET = object()


@dataclass
class ClassificationResult:
    """New floor snapshot plus the floors whose class or height changed."""

    floors: list[Floor]
    affected: list[Floor] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.affected)


def _index(floors: list[Floor], floor_id: str) -> int:
    for i, floor in enumerate(floors):
        if floor.id == floor_id:
            return i
    raise UnknownFloorError(floor_id)


def _diff(before: list[Floor], after: list[Floor]) -> list[Floor]:
    previous = {f.id: f for f in before}
    affected = []
    for floor in after:
        old = previous.get(floor.id)
        if old is None or old.floor_class != floor.floor_class or old.height != floor.height:
            affected.append(floor)
    return affected


def _set_class(floors: list[Floor], floor_id: str, new_class: FloorClass) -> list[Floor]:
    i = _index(floors, floor_id)
    if floors[i].floor_class == new_class:
        return floors
    logger.debug("%s: %s -> %s", floors[i].floor_label, floors[i].floor_class.value, new_class.value)
    result = list(floors)
    result[i] = floors[i].model_copy(update={"floor_class": new_class})
    return result


def _classify(floors: list[Floor], floor_id: str, new_class: FloorClass) -> list[Floor]:
    state = _set_class(floors, floor_id, new_class)
    if new_class != FloorClass.SETTING:
        return state
    while True:
        trigger = state[_index(state, floor_id)]
        changes = cascade_targets(state, trigger)
        if not changes:
            return state
        for target_id, target_class in changes.items():
            state = _set_class(state, target_id, target_class)


def apply_classification(
    floors: list[Floor],
    floor_id: str,
    new_class: FloorClass | str,
) -> ClassificationResult:
    """Set the class of one floor and run the setting-floor cascade.

    Parameters
    ----------
    floors:
        Full floor snapshot of the building.
    floor_id:
        Floor to reclassify.
    new_class:
        Target class (enum or its Korean value).

    Returns
    -------
    ClassificationResult
        New snapshot and every floor whose class changed.

    Raises
    ------
    UnknownFloorError
        If ``floor_id`` is not in ``floors``.
    """
    new_class = FloorClass(new_class)
    result = _classify(list(floors), floor_id, new_class)
    return ClassificationResult(floors=result, affected=_diff(floors, result))


def apply_range_classification(
    floors: list[Floor],
    member_ids: Iterable[str],
    new_class: FloorClass | str,
) -> ClassificationResult:
    """Fan a class change out to every member floor of a range."""
    new_class = FloorClass(new_class)
    state = list(floors)
    for member_id in member_ids:
        state = _classify(state, member_id, new_class)
    return ClassificationResult(floors=state, affected=_diff(floors, state))


def apply_height(
    floors: list[Floor],
    floor_id: str,
    height: float | None,
    standard_height: float | None,
) -> ClassificationResult:
    """Record a height edit and apply the height-driven setting inference."""
    state = list(floors)
    i = _index(state, floor_id)
    state[i] = state[i].model_copy(update={"height": height})

    promoted = promotion_for_height(state, floor_id, standard_height)
    if promoted is not None:
        state = _classify(state, promoted, FloorClass.SETTING)
    return ClassificationResult(floors=state, affected=_diff(floors, state))


def update_floor(
    floors: list[Floor],
    floor_id: str,
    *,
    floor_class: FloorClass | str | None = None,
    height: float | None | object = UNSET,
    standard_height: float | None = None,
) -> ClassificationResult:
    """Apply a class edit, then a height edit, to one floor."""
    state = list(floors)
    if floor_class is not None:
        state = apply_classification(state, floor_id, floor_class).floors
    if height is not UNSET:
        state = apply_height(state, floor_id, height, standard_height).floors
    return ClassificationResult(floors=state, affected=_diff(floors, state))
