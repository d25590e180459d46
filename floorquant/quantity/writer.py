"""Quantity writes with range fan-out.

Trades are filed under individual floors.  A range keeps its own values on
a separate record; writing inside a range first gives every member without
a record a copy of them, then writes the target, so untouched siblings keep
the range value.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field

from floorquant.config import GROUP_FLOOR_PREFIX, RANGE_FLOOR_PREFIX
from floorquant.consolidation.consolidator import (
    consolidate_for_display,
    expand_range_records,
    range_containing,
)
from floorquant.consolidation.views import RangeView
from floorquant.errors import InvalidQuantityError, UnknownFloorError
from floorquant.models.building import Building, Floor, FloorTrade, TradeData, TradeGroup
from floorquant.persistence.locking import LockScope, require_unlocked
from floorquant.quantity.metrics import TradeKind, check_metric, write_metric
from floorquant.quantity.resolver import find_range_record

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Updated building and the trade records that must be persisted."""

    building: Building
    written: list[FloorTrade] = field(default_factory=list)


def group_floor_id(group: TradeGroup | str) -> str:
    """Floor id the 버림 / 기초 rows are filed under."""
    return f"{GROUP_FLOOR_PREFIX}{TradeGroup(group).value}"


def validate_quantity(value: float | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidQuantityError(f"Quantity {value!r} is not a number") from exc
    if not math.isfinite(number) or number < 0:
        raise InvalidQuantityError(f"Quantity {value!r} must be finite and non-negative")
    return number


def _find(records: list[FloorTrade], floor_id: str, group: TradeGroup) -> int | None:
    for i, record in enumerate(records):
        if record.floor_id == floor_id and record.trade_group == group:
            return i
    return None


def _new_record(building: Building, floor_id: str, group: TradeGroup, trades: TradeData) -> FloorTrade:
    return FloorTrade(
        id=uuid.uuid4().hex,
        floor_id=floor_id,
        building_id=building.id,
        trade_group=group,
        trades=trades,
    )


def _resolve_floor(building: Building, floor_id: str) -> Floor:
    for floor in expand_range_records(building.floors):
        if floor.id == floor_id:
            return floor
    raise UnknownFloorError(floor_id)


def range_for_floor(building: Building, floor_id: str) -> RangeView | None:
    """Display range the floor is a member of, if any."""
    floor = _resolve_floor(building, floor_id)
    views = consolidate_for_display(building.floors, core=floor.core)
    return range_containing(views, floor_id)


def range_default_id(view: RangeView) -> str:
    """Floor id the default values of a derived range are filed under.

    ``range-{start}F`` for shared floors, ``range-c{k}-{start}F`` for the
    floors of core k.
    """
    core = view.members[0].core if view.members else view.core
    if core is None:
        return f"{RANGE_FLOOR_PREFIX}{view.start}F"
    return f"{RANGE_FLOOR_PREFIX}c{core}-{view.start}F"


def range_home_id(building: Building, view: RangeView) -> str:
    """Floor id holding the range values: a persisted range record, else the
    derived range default."""
    legacy = find_range_record(building, view.start, view.core)
    return legacy.id if legacy is not None else range_default_id(view)


def range_values(building: Building, view: RangeView, group: TradeGroup) -> TradeData:
    """Current values of a range, never those of a member floor."""
    index = _find(building.floor_trades, range_home_id(building, view), group)
    if index is None:
        return TradeData()
    return building.floor_trades[index].trades.model_copy(deep=True)


def _upsert(
    building: Building,
    records: list[FloorTrade],
    floor_id: str,
    group: TradeGroup,
    kind: TradeKind,
    value: float | None,
    base: TradeData,
) -> FloorTrade:
    index = _find(records, floor_id, group)
    if index is None:
        record = _new_record(building, floor_id, group, write_metric(base, kind, value))
        records.append(record)
    else:
        record = records[index].model_copy(
            update={"trades": write_metric(records[index].trades, kind, value)}
        )
        records[index] = record
    return record


def _materialize_siblings(
    building: Building,
    records: list[FloorTrade],
    view: RangeView,
    group: TradeGroup,
    base: TradeData,
    skip: set[str],
) -> list[FloorTrade]:
    created = []
    for member in view.members:
        if member.id in skip or _find(records, member.id, group) is not None:
            continue
        record = _new_record(building, member.id, group, base.model_copy(deep=True))
        records.append(record)
        created.append(record)
    if created:
        logger.debug("Copied range %s values to %d floor(s)", view.label, len(created))
    return created


def write_quantity(
    building: Building,
    floor_id: str,
    trade_group: TradeGroup | str,
    trade: TradeKind | str,
    value: float | None,
) -> WriteResult:
    """Write one metric on one floor, fanning out inside a range.

    Parameters
    ----------
    building:
        Current snapshot.
    floor_id:
        Individual floor id, a ``"{rangeId}-{N}F"`` member id, or a
        :func:`group_floor_id`.
    trade_group:
        Group the record is filed under.
    trade:
        Trade kind; its metric is implied.
    value:
        New value, or None to clear the metric.

    Raises
    ------
    BuildingLockedError
        If data input is locked.
    InvalidQuantityError
        For negative or non-finite values.
    UnknownFloorError
        If ``floor_id`` is not a floor of the building.
    """
    require_unlocked(building, LockScope.DATA_INPUT)
    value = validate_quantity(value)
    group = TradeGroup(trade_group)
    kind, _ = check_metric(trade)

    records = list(building.floor_trades)
    written: list[FloorTrade] = []
    base = TradeData()
    if not floor_id.startswith(GROUP_FLOOR_PREFIX):
        view = range_for_floor(building, floor_id)
        if view is not None:
            base = range_values(building, view, group)
            written.extend(_materialize_siblings(building, records, view, group, base, {floor_id}))

    written.append(_upsert(building, records, floor_id, group, kind, value, base))
    return WriteResult(building.model_copy(update={"floor_trades": records}), written)


def write_range_quantity(
    building: Building,
    view: RangeView,
    trade_group: TradeGroup | str,
    trade: TradeKind | str,
    value: float | None,
) -> WriteResult:
    """Write a metric against a whole range.

    The range values are updated on their own record
    (:func:`range_home_id`).  Members without a record receive a copy of
    the updated values; members with their own record keep it.
    """
    require_unlocked(building, LockScope.DATA_INPUT)
    value = validate_quantity(value)
    group = TradeGroup(trade_group)
    kind, _ = check_metric(trade)
    if not view.members:
        return WriteResult(building)

    records = list(building.floor_trades)
    base = range_values(building, view, group)
    home = _upsert(building, records, range_home_id(building, view), group, kind, value, base)
    written = [home]
    written.extend(_materialize_siblings(building, records, view, group, home.trades, set()))
    return WriteResult(building.model_copy(update={"floor_trades": records}), written)


def write_group_quantity(
    building: Building,
    trade_group: TradeGroup | str,
    trade: TradeKind | str,
    value: float | None,
) -> WriteResult:
    """Write a metric on the 버림 or 기초 row."""
    return write_quantity(building, group_floor_id(trade_group), trade_group, trade, value)
