"""Per-trade subtotals of the quantity table."""

from __future__ import annotations

from floorquant.config import RANGE_FLOOR_PREFIX
from floorquant.models.building import Building, TradeGroup
from floorquant.quantity.metrics import TradeKind, read_metric


def summarize_trades(
    building: Building,
    trade_group: TradeGroup | str | None = None,
) -> dict[TradeKind, float]:
    """Sum every trade over the building's records, optionally one group only.

    Range default records are not floors and are left out.
    """
    group = TradeGroup(trade_group) if trade_group is not None else None
    totals = {kind: 0.0 for kind in TradeKind}
    for record in building.floor_trades:
        if group is not None and record.trade_group != group:
            continue
        if record.floor_id.startswith(RANGE_FLOOR_PREFIX):
            continue
        for kind in TradeKind:
            totals[kind] += read_metric(record.trades, kind)
    return totals
