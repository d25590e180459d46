"""Quantity resolution, the reference language and quantity writes."""

from floorquant.quantity.metrics import COLUMN_TRADES, TRADE_METRICS, Metric, TradeKind, check_metric
from floorquant.quantity.reference import get_quantity_by_reference, parse_reference
from floorquant.quantity.resolver import get_quantity_from_floor, resolve_quantity
from floorquant.quantity.summary import summarize_trades
from floorquant.quantity.writer import (
    WriteResult,
    group_floor_id,
    write_group_quantity,
    write_quantity,
    write_range_quantity,
)

__all__ = [
    "COLUMN_TRADES",
    "Metric",
    "TRADE_METRICS",
    "TradeKind",
    "WriteResult",
    "check_metric",
    "get_quantity_by_reference",
    "get_quantity_from_floor",
    "group_floor_id",
    "parse_reference",
    "resolve_quantity",
    "summarize_trades",
    "write_group_quantity",
    "write_quantity",
    "write_range_quantity",
]
