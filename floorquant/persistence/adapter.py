"""PersistenceAdapter — the write port the engine schedules writes on.

Classification edits are written immediately, one write per affected
floor.  Height and quantity edits are coalesced per record on the short
cell window; whole-building form saves use the longer autosave window.
"""

from __future__ import annotations

import logging
from typing import Any

from floorquant.config import CELL_DEBOUNCE_SECONDS, FORM_AUTOSAVE_SECONDS
from floorquant.errors import WriteFlushError
from floorquant.models.building import Building, Floor, FloorTrade
from floorquant.persistence.queue import WriteCoalescer
from floorquant.persistence.store import InMemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)

FLOOR = "floors"
FLOOR_TRADE = "floor_trades"
BUILDING = "buildings"


def _split(key: str) -> tuple[str, str]:
    kind, _, record_id = key.partition(":")
    return kind, record_id


def _building_payload(building: Building) -> dict[str, Any]:
    return building.model_dump(
        mode="json", by_alias=True, exclude_none=True, exclude={"floors", "floor_trades"},
    )


class PersistenceAdapter:
    """Owns the write coalescers in front of a record store.

    Parameters
    ----------
    store:
        Destination store; in-memory when omitted.
    cell_delay:
        Debounce of per-cell edits (heights, quantities).
    form_delay:
        Debounce of whole-form autosave (building basic info).
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        cell_delay: float = CELL_DEBOUNCE_SECONDS,
        form_delay: float = FORM_AUTOSAVE_SECONDS,
    ) -> None:
        self.store = store or InMemoryRecordStore()
        self._cells = WriteCoalescer(self._write, cell_delay)
        self._forms = WriteCoalescer(self._write, form_delay)

    def _write(self, key: str, payload: dict[str, Any]) -> None:
        kind, record_id = _split(key)
        self.store.put(kind, record_id, payload)

    # -- immediate ---------------------------------------------------------

    def write_floors_now(self, floors: list[Floor]) -> None:
        """Persist classification changes, one write per floor."""
        for floor in floors:
            self.store.put(FLOOR, floor.id, floor.to_record())
        if floors:
            logger.debug("Wrote %d floor(s) immediately", len(floors))

    def delete_floor(self, floor_id: str) -> None:
        self.store.delete(FLOOR, floor_id)

    def write_trades_now(self, trades: list[FloorTrade]) -> None:
        for trade in trades:
            self.store.put(FLOOR_TRADE, trade.id, trade.to_record())

    # -- debounced ---------------------------------------------------------

    def schedule_floor(self, floor: Floor) -> None:
        self._cells.submit(f"{FLOOR}:{floor.id}", floor.to_record())

    def schedule_trade(self, trade: FloorTrade) -> None:
        self._cells.submit(f"{FLOOR_TRADE}:{trade.id}", trade.to_record())

    def schedule_building(self, building: Building) -> None:
        """Autosave the building form (metadata only, no floors or trades)."""
        self._forms.submit(f"{BUILDING}:{building.id}", _building_payload(building))

    def write_building_now(self, building: Building) -> None:
        self.store.put(BUILDING, building.id, _building_payload(building))

    # -- flushing ----------------------------------------------------------

    @property
    def pending_keys(self) -> list[str]:
        return self._forms.pending_keys + self._cells.pending_keys

    def has_pending(self) -> bool:
        return self._cells.has_pending() or self._forms.has_pending()

    def flush(self) -> int:
        """Issue every pending write of both windows.

        Raises
        ------
        WriteFlushError
            If any write failed; both windows are attempted first.
        """
        failures: dict[str, Exception] = {}
        issued = 0
        for coalescer in (self._forms, self._cells):
            try:
                issued += coalescer.flush()
            except WriteFlushError as exc:
                failures.update(exc.failures)
        if failures:
            raise WriteFlushError(failures)
        logger.debug("Flushed %d pending write(s)", issued)
        return issued

    def close(self) -> None:
        """Flush, then stop accepting timers."""
        try:
            self.flush()
        finally:
            self._cells.cancel()
            self._forms.cancel()
