"""Floor regeneration: rebuild the floor set after a structural edit.

Pending writes against the old floors are flushed first; if that fails the
regeneration is aborted and nothing changes.  Trades follow their floor to
the new set by core and canonical label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from floorquant.config import GROUP_FLOOR_PREFIX, RANGE_FLOOR_PREFIX
from floorquant.consolidation.consolidator import expand_range_records
from floorquant.errors import RegenerationAbortedError, WriteFlushError
from floorquant.geometry import labels
from floorquant.geometry.resolver import derive_floors
from floorquant.models.building import Building, BuildingMeta, Floor, FloorTrade
from floorquant.persistence.adapter import PersistenceAdapter
from floorquant.persistence.locking import LockScope, require_unlocked

logger = logging.getLogger(__name__)


@dataclass
class RegenerationResult:
    """Outcome of a regeneration."""

    building: Building
    removed_floor_ids: list[str] = field(default_factory=list)
    orphaned: list[FloorTrade] = field(default_factory=list)

    @property
    def floors(self) -> list[Floor]:
        return self.building.floors


def _key(floor: Floor) -> tuple[int | None, str]:
    return floor.core, labels.canonical_label(floor.floor_label)


def rekey_trades(
    old_floors: list[Floor],
    new_floors: list[Floor],
    trades: list[FloorTrade],
) -> tuple[list[FloorTrade], list[FloorTrade]]:
    """Move trades onto the matching new floors.

    Returns ``(kept, orphaned)``.  Group rows and range defaults keep their id; a trade whose
    floor has no counterpart, or whose counterpart already received a record
    of the same group, is orphaned.
    """
    old_by_id = {f.id: f for f in expand_range_records(old_floors)}
    new_by_key = {_key(f): f for f in new_floors}

    kept: list[FloorTrade] = []
    orphaned: list[FloorTrade] = []
    taken: set[tuple[str, str]] = set()
    for trade in trades:
        if trade.floor_id.startswith((GROUP_FLOOR_PREFIX, RANGE_FLOOR_PREFIX)):
            kept.append(trade)
            continue
        old = old_by_id.get(trade.floor_id)
        target = None
        if old is not None:
            core, label = _key(old)
            target = new_by_key.get((core, label))
            if target is None:
                # core-specific <-> shared after a core-count change
                target = new_by_key.get((None, label)) or new_by_key.get((1, label))
        slot = (target.id, trade.trade_group.value) if target is not None else None
        if slot is None or slot in taken:
            orphaned.append(trade)
            continue
        taken.add(slot)
        kept.append(trade.model_copy(update={"floor_id": target.id}))
    return kept, orphaned


def regenerate_floors(
    building: Building,
    meta: BuildingMeta | None = None,
    adapter: PersistenceAdapter | None = None,
) -> RegenerationResult:
    """Derive a new floor set for ``building`` (optionally with new metadata).

    Parameters
    ----------
    building:
        Current snapshot.
    meta:
        Replacement metadata; the current one when omitted.
    adapter:
        Write port.  Flushed before anything changes; receives the new
        floors and re-keyed trades afterwards.

    Raises
    ------
    BuildingLockedError
        If basic info is locked.
    RegenerationAbortedError
        If pending writes could not be flushed.
    """
    require_unlocked(building, LockScope.BASIC_INFO)
    if adapter is not None:
        try:
            adapter.flush()
        except WriteFlushError as exc:
            logger.error("Regeneration of %s aborted: %s", building.id, exc)
            raise RegenerationAbortedError(
                f"Pending writes for building '{building.id}' failed; floors left unchanged."
            ) from exc

    target = building.model_copy(update={"meta": meta}) if meta is not None else building
    new_floors = derive_floors(target)
    kept, orphaned = rekey_trades(building.floors, new_floors, building.floor_trades)

    new_ids = {f.id for f in new_floors}
    removed = [f.id for f in building.floors if f.id not in new_ids]
    result = RegenerationResult(
        building=target.model_copy(update={"floors": new_floors, "floor_trades": kept}),
        removed_floor_ids=removed,
        orphaned=orphaned,
    )

    if orphaned:
        logger.warning(
            "Regeneration of %s left %d trade record(s) without a floor: %s",
            building.id, len(orphaned), ", ".join(t.floor_id for t in orphaned),
        )
    logger.info(
        "Regenerated building %s: %d floors (%d removed)",
        building.id, len(new_floors), len(removed),
    )

    if adapter is not None:
        adapter.write_building_now(result.building)
        adapter.write_floors_now(new_floors)
        adapter.write_trades_now(kept)
        for floor_id in removed:
            adapter.delete_floor(floor_id)
    return result
