"""QuantityResolver — quantity of one trade on one floor."""

from __future__ import annotations

import logging

from floorquant.geometry import labels
from floorquant.models.building import Building, Floor, FloorTrade, TradeGroup
from floorquant.quantity.metrics import Metric, TradeKind, check_metric, read_metric

logger = logging.getLogger(__name__)


def ordered_floors(building: Building) -> list[Floor]:
    """Floors in tie-break order: ascending floor number, then core."""
    return sorted(building.floors, key=lambda f: (f.floor_number, f.core or 0))


def pick_trade(building: Building, floor_id: str) -> FloorTrade | None:
    """The floor's 아파트 record, else any record filed under the floor."""
    fallback: FloorTrade | None = None
    for trade in building.floor_trades:
        if trade.floor_id != floor_id:
            continue
        if trade.trade_group == TradeGroup.APARTMENT:
            return trade
        if fallback is None:
            fallback = trade
    return fallback


def find_floor(building: Building, floor_label: str) -> Floor | None:
    """Exact label match, else a match on the canonical label."""
    floors = ordered_floors(building)
    for floor in floors:
        if floor.floor_label == floor_label:
            return floor
    wanted = labels.canonical_label(floor_label)
    for floor in floors:
        if labels.canonical_label(floor.floor_label) == wanted:
            return floor
    return None


def find_range_record(building: Building, floor_number: int, core: int | None = None) -> Floor | None:
    """Persisted range record whose span contains ``floor_number``."""
    for floor in ordered_floors(building):
        if not floor.is_range or not labels.same_core(floor.core, core):
            continue
        span = labels.range_span(floor.floor_label)
        if span and span[0] <= floor_number <= span[1]:
            return floor
    return None


def get_quantity_from_floor(
    building: Building,
    floor_label: str,
    trade: TradeKind | str,
    metric: Metric | str | None = None,
    range_floor_id: str | None = None,
) -> float:
    """Resolve a trade quantity on the floor named ``floor_label``.

    ``floor_label`` may be core-qualified or use the display form of a
    penthouse (``"옥탑1"``).  When no floor record matches, a persisted range
    record spanning the floor supplies the individual id
    ``"{rangeId}-{N}F"``.  Missing floors, trades and metrics resolve to 0.

    Raises
    ------
    InvalidMetricError
        If ``metric`` is not the metric of ``trade``.
    """
    kind, metric = check_metric(trade, metric)

    range_record: Floor | None = None
    individual_id: str | None = None
    number = labels.ground_number(floor_label)
    if range_floor_id and number is not None:
        range_record = building.floor_by_id(range_floor_id)
        if range_record is not None:
            individual_id = labels.individual_floor_id(range_floor_id, number)

    floor = find_floor(building, floor_label)
    if floor is None and range_record is None and number is not None:
        range_record = find_range_record(building, number, labels.core_of(floor_label))
        if range_record is not None:
            individual_id = labels.individual_floor_id(range_record.id, number)

    if floor is None and individual_id is None:
        logger.debug("No floor for label %r in building %s", floor_label, building.id)
        return 0.0

    record = pick_trade(building, floor.id) if floor is not None else None
    if record is None and individual_id is not None:
        record = pick_trade(building, individual_id)
    if record is None and range_record is not None:
        # Range default, from data written before ranges were derived
        record = pick_trade(building, range_record.id)
    if record is None:
        return 0.0
    return read_metric(record.trades, kind, metric)


resolve_quantity = get_quantity_from_floor
