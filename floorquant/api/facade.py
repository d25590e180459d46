"""FloorEngine — the single entry point for floor and quantity operations.

Usage::

    from floorquant import FloorEngine

    engine = FloorEngine()
    building = building.model_copy(update={"floors": engine.derive_floors(building)})
    building = engine.apply_classification(building, floor_id, "셋팅층")
    building = engine.update_floor_height(building, floor_id, 3200)
    rows = engine.consolidate_for_display(building)
    building = engine.write_quantity(building, floor_id, "아파트", "concrete", 42.5)
    engine.resolve_quantity(building, "7F", "concrete")
    engine.quantity_by_reference(building, "C11+C13*10")
    engine.estimate_building_labor(building).to_markdown()
    engine.flush_pending_writes()
    result = engine.regenerate_floors(building, new_meta)

Every operation takes the current :class:`Building` snapshot and returns a
new one; the engine never mutates its input.  Writes go to the engine's
:class:`PersistenceAdapter`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from floorquant import classification, consolidation, labor, quantity
from floorquant.classification.classifier import UNSET
from floorquant.consolidation.views import FloorView, RangeView, SpineRow
from floorquant.geometry.heights import structure_changed
from floorquant.geometry.resolver import count_units, derive_floors, display_spine
from floorquant.labor.report import LaborReport
from floorquant.models.building import Building, BuildingMeta, Floor, FloorClass, TradeGroup
from floorquant.models.process import ProcessCategory, ProcessItem, ProcessModule
from floorquant.persistence.adapter import PersistenceAdapter
from floorquant.persistence.locking import LockScope, require_unlocked, set_lock
from floorquant.persistence.store import HttpRecordStore, RecordStore
from floorquant.quantity.metrics import Metric, TradeKind
from floorquant.regeneration import RegenerationResult, regenerate_floors
from floorquant.settings import EngineSettings, configure_logging

logger = logging.getLogger(__name__)


class FloorEngine:
    """The public interface of the floor quantity engine.

    Parameters
    ----------
    settings:
        Engine settings; loaded from ``project_root`` when omitted.
    store:
        Record store the adapter writes to.  An HTTP store is built from the
        settings when a store URL is configured, else an in-memory store.
    project_root:
        Directory searched for ``.floorquant/config.json`` and ``.env``.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        store: RecordStore | None = None,
        project_root: str | Path = ".",
    ) -> None:
        self.settings = settings or EngineSettings.load(project_root)
        configure_logging(self.settings)

        if store is None and self.settings.store_url:
            store = HttpRecordStore(
                self.settings.store_url,
                self.settings.store_token or None,
                timeout=self.settings.store_timeout,
            )
        self.adapter = PersistenceAdapter(
            store,
            cell_delay=self.settings.cell_debounce_seconds,
            form_delay=self.settings.form_autosave_seconds,
        )

    @property
    def store(self) -> RecordStore:
        return self.adapter.store

    # -- Geometry -------------------------------------------------------------

    def derive_floors(self, building: Building) -> list[Floor]:
        """Floor list implied by the building metadata."""
        return derive_floors(building)

    def count_units(self, building: Building) -> int:
        return count_units(building.meta)

    # -- Classification -------------------------------------------------------

    def _classified(self, building: Building, result: classification.ClassificationResult) -> Building:
        self.adapter.write_floors_now(result.affected)
        return building.model_copy(update={"floors": result.floors})

    def apply_classification(
        self,
        building: Building,
        floor_id: str,
        new_class: FloorClass | str,
    ) -> Building:
        """Reclassify one floor; every floor the cascade touches is written now."""
        require_unlocked(building, LockScope.BASIC_INFO)
        result = classification.apply_classification(building.floors, floor_id, new_class)
        logger.info(
            "Classified %s as %s (%d floor(s) changed)",
            floor_id, FloorClass(new_class).value, len(result.affected),
        )
        return self._classified(building, result)

    def apply_range_classification(
        self,
        building: Building,
        view: RangeView,
        new_class: FloorClass | str,
    ) -> Building:
        """Reclassify every member floor of a displayed range."""
        require_unlocked(building, LockScope.BASIC_INFO)
        known = {f.id for f in building.floors}
        member_ids = [fid for fid in view.member_ids if fid in known]
        if len(member_ids) != len(view.members):
            logger.debug("Range %s has %d legacy member(s) without a floor record",
                         view.label, len(view.members) - len(member_ids))
        result = classification.apply_range_classification(building.floors, member_ids, new_class)
        logger.info(
            "Classified range %s as %s (%d floor(s) changed)",
            view.label, FloorClass(new_class).value, len(result.affected),
        )
        return self._classified(building, result)

    def update_floor_height(self, building: Building, floor_id: str, height: float | None) -> Building:
        """Edit a height; a setting-floor promotion it implies is applied too."""
        return self.update_floor(building, floor_id, height=height)

    def update_floor(
        self,
        building: Building,
        floor_id: str,
        *,
        floor_class: FloorClass | str | None = None,
        height: Any = UNSET,
    ) -> Building:
        """Apply a class edit, then a height edit, to one floor.

        A height-only edit of the floor itself is debounced; class changes
        are written immediately.
        """
        require_unlocked(building, LockScope.BASIC_INFO)
        result = classification.update_floor(
            building.floors,
            floor_id,
            floor_class=floor_class,
            height=height,
            standard_height=building.meta.heights.standard,
        )
        logger.info("Updated floor %s (%d floor(s) changed)", floor_id, len(result.affected))
        before = {f.id: f.floor_class for f in building.floors}
        for floor in result.affected:
            if floor.id == floor_id and before.get(floor_id) == floor.floor_class:
                self.adapter.schedule_floor(floor)
            else:
                self.adapter.write_floors_now([floor])
        return building.model_copy(update={"floors": result.floors})

    # -- Consolidation --------------------------------------------------------

    def consolidate_for_display(self, building: Building, core: int | None = None) -> list[FloorView]:
        return consolidation.consolidate_for_display(
            building.floors, core=core, spine_top=display_spine(building),
        )

    def display_grid(self, building: Building) -> list[SpineRow]:
        return consolidation.display_grid(building)

    # -- Quantities -----------------------------------------------------------

    def resolve_quantity(
        self,
        building: Building,
        floor_label: str,
        trade: TradeKind | str,
        metric: Metric | str | None = None,
        range_floor_id: str | None = None,
    ) -> float:
        return quantity.get_quantity_from_floor(building, floor_label, trade, metric, range_floor_id)

    def quantity_by_reference(self, building: Building, reference: str | None, strict: bool = False) -> float:
        return quantity.get_quantity_by_reference(building, reference, strict=strict)

    def summarize_trades(self, building: Building, trade_group: TradeGroup | str | None = None) -> dict[TradeKind, float]:
        return quantity.summarize_trades(building, trade_group)

    def _scheduled(self, result: quantity.WriteResult) -> Building:
        for record in result.written:
            self.adapter.schedule_trade(record)
        return result.building

    def write_quantity(
        self,
        building: Building,
        floor_id: str,
        trade_group: TradeGroup | str,
        trade: TradeKind | str,
        value: float | None,
    ) -> Building:
        """Write one metric on one floor; range siblings are materialized first."""
        result = quantity.write_quantity(building, floor_id, trade_group, trade, value)
        logger.info("Wrote %s=%s on %s (%d record(s))", trade, value, floor_id, len(result.written))
        return self._scheduled(result)

    def write_range_quantity(
        self,
        building: Building,
        view: RangeView,
        trade_group: TradeGroup | str,
        trade: TradeKind | str,
        value: float | None,
    ) -> Building:
        result = quantity.write_range_quantity(building, view, trade_group, trade, value)
        logger.info("Wrote %s=%s on range %s (%d record(s))", trade, value, view.label, len(result.written))
        return self._scheduled(result)

    def write_group_quantity(
        self,
        building: Building,
        trade_group: TradeGroup | str,
        trade: TradeKind | str,
        value: float | None,
    ) -> Building:
        result = quantity.write_group_quantity(building, trade_group, trade, value)
        logger.info("Wrote %s=%s on the %s row", trade, value, TradeGroup(trade_group).value)
        return self._scheduled(result)

    # -- Labor ----------------------------------------------------------------

    def estimate_daily_workers(self, item: ProcessItem, total_quantity: float) -> int:
        return labor.estimate_daily_workers(item, total_quantity, self.settings.pump_car_max)

    def estimate_building_labor(self, building: Building) -> LaborReport:
        return labor.estimate_building_labor(building)

    def estimate_project_labor(self, buildings: list[Building], name: str = "project") -> LaborReport:
        return labor.estimate_project_labor(buildings, name=name)

    def category_days(self, building: Building, module: ProcessModule) -> float:
        return labor.category_days(building, module)

    def process_plan_days(
        self,
        building: Building,
        process_types: dict[ProcessCategory, str] | None = None,
    ) -> dict[ProcessCategory, float]:
        return labor.process_plan_days(building, process_types)

    # -- Persistence ----------------------------------------------------------

    def flush_pending_writes(self) -> int:
        """Issue every pending write now.

        Raises
        ------
        WriteFlushError
            If any write failed; failed writes stay pending.
        """
        return self.adapter.flush()

    def regenerate_floors(self, building: Building, meta: BuildingMeta | None = None) -> RegenerationResult:
        return regenerate_floors(building, meta, self.adapter)

    def update_building_meta(self, building: Building, meta: BuildingMeta) -> Building:
        """Save edited basic info, regenerating floors when the structure changed."""
        require_unlocked(building, LockScope.BASIC_INFO)
        if structure_changed(building.meta, meta):
            logger.info("Structure of building %s changed; regenerating floors", building.id)
            return self.regenerate_floors(building, meta).building
        updated = building.model_copy(update={"meta": meta})
        self.adapter.schedule_building(updated)
        logger.info("Saved basic info of building %s", building.id)
        return updated

    def lock(self, building: Building, scope: LockScope | str, user_id: str = "") -> Building:
        updated = set_lock(building, LockScope(scope), True, user_id)
        self.adapter.write_building_now(updated)
        return updated

    def unlock(self, building: Building, scope: LockScope | str, user_id: str = "") -> Building:
        updated = set_lock(building, LockScope(scope), False, user_id)
        self.adapter.write_building_now(updated)
        return updated

    def close(self) -> None:
        self.adapter.close()
