"""Height-driven setting-floor inference.

Best-effort: a height edit may promote one floor to 셋팅층.  The caller
runs the promotion through the classification reducer so it cascades.
"""

from __future__ import annotations

import logging

from floorquant.geometry.labels import ground_level, same_core
from floorquant.models.building import Floor, FloorClass

logger = logging.getLogger(__name__)


def _lowest_standard_run_member(ordered: list[Floor], standard: float) -> tuple[Floor | None, bool]:
    """Walk floors top-down; collect the lowest 기준층 at standard height
    before the first floor whose height differs.

    The walk starts at the top floor, so a top floor whose height is not the
    standard height (``heights.top``) ends it at once with no candidate.

    Returns ``(candidate, hit_different_height)``.
    """
    candidate: Floor | None = None
    for floor in ordered:
        if floor.height != standard:
            return candidate, True
        if floor.floor_class == FloorClass.STANDARD:
            candidate = floor
    return candidate, False


def promotion_for_height(
    floors: list[Floor],
    floor_id: str,
    standard_height: float | None,
) -> str | None:
    """Id of the floor the height of ``floor_id`` promotes to 셋팅층, if any.

    ``floors`` already carries the edited height.
    """
    edited = next((f for f in floors if f.id == floor_id), None)
    if edited is None or standard_height is None:
        return None
    number = ground_level(edited)
    if number is None:
        return None

    peers: dict[int, Floor] = {}
    for floor in floors:
        if not same_core(floor.core, edited.core):
            continue
        level = ground_level(floor)
        if level is not None and level not in peers:
            peers[level] = floor
    height = edited.height

    if number == 1:
        second = peers.get(2)
        if (
            second is not None
            and second.height == standard_height
            and height is not None
            and height != standard_height
            and edited.floor_class != FloorClass.SETTING
        ):
            logger.debug("Floor 1 height %s differs from standard; promoting", height)
            return edited.id
        return None

    if height is None:
        return None

    if height != standard_height:
        upper = [peers[n] for n in sorted(peers, reverse=True) if n > number]
        candidate, _ = _lowest_standard_run_member(upper, standard_height)
    else:
        # the edited floor is not a run candidate here
        ordered = [peers[n] for n in sorted(peers, reverse=True) if n != number]
        candidate, found = _lowest_standard_run_member(ordered, standard_height)
        if not found:
            candidate = None

    if candidate is None or candidate.floor_class == FloorClass.SETTING:
        return None
    logger.debug("Height edit on %s promotes %s", edited.floor_label, candidate.floor_label)
    return candidate.id
