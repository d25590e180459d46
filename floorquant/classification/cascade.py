"""Setting-floor cascade rule."""

from __future__ import annotations

from collections.abc import Iterable

from floorquant.config import SETTING_FLOOR_MAX
from floorquant.geometry.labels import ground_level, same_core
from floorquant.models.building import Floor, FloorClass


def cascade_targets(floors: Iterable[Floor], trigger: Floor) -> dict[str, FloorClass]:
    """Reclassifications implied by ``trigger`` being the setting floor.

    Floors above it up to floor 5 become standard, floors below it become
    general; other setting floors are left alone.  Only floors of the
    trigger's core take part.  Returns ``{floor_id: new_class}`` for floors
    whose class would actually change.
    """
    setting = ground_level(trigger)
    if trigger.floor_class != FloorClass.SETTING or setting is None:
        return {}
    if not 1 <= setting <= SETTING_FLOOR_MAX:
        return {}

    changes: dict[str, FloorClass] = {}
    for floor in floors:
        if floor.id == trigger.id or not same_core(floor.core, trigger.core):
            continue
        number = ground_level(floor)
        if number is None or floor.floor_class == FloorClass.SETTING:
            continue
        if setting < number <= SETTING_FLOOR_MAX:
            target = FloorClass.STANDARD
        elif 1 <= number < setting:
            target = FloorClass.GENERAL
        else:
            continue
        if floor.floor_class != target:
            changes[floor.id] = target
    return changes
