"""Quantity-sheet reference language.

A reference names cells of the quantity sheet: ``"D6"`` is column D
(formwork area) of row 6 (버림), ``"F8*0.45"`` takes 45% of the B2 rebar
tonnage and ``"E14+E16"`` adds two cells.  Columns B..G map to the six
trades; rows map to trade groups and floors:

====== =========================================
row    context
====== =========================================
6      every 버림 record, summed
7      every 기초 record, summed
8, 9   basement B2, B1
11     floor 1 (셋팅층, else 일반층)
12     floor 2 (셋팅층, else 일반층, else any)
13-25  floors 3..15, including range members
26-28  penthouse floors 1..3
====== =========================================

Unparsable references resolve to 0 unless ``strict`` is requested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from floorquant.config import (
    REFERENCE_TERM_RE,
    ROW_BASEMENT_1,
    ROW_BASEMENT_2,
    ROW_BLINDING,
    ROW_FLOOR_1,
    ROW_FLOOR_2,
    ROW_FOUNDATION,
    ROW_PH_FIRST,
    ROW_PH_LAST,
    ROW_STANDARD_FIRST,
    ROW_STANDARD_LAST,
)
from floorquant.errors import ReferenceSyntaxError
from floorquant.geometry import labels
from floorquant.models.building import Building, FloorClass, TradeGroup
from floorquant.quantity.metrics import COLUMN_TRADES, TradeKind, read_metric
from floorquant.quantity.resolver import get_quantity_from_floor, ordered_floors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceTerm:
    """One ``COL ROW [* RATIO]`` term."""

    trade: TradeKind
    row: int
    ratio: float = 1.0


def parse_reference(reference: str | None) -> list[ReferenceTerm] | None:
    """Terms of a reference, or None if any term is malformed."""
    if not reference or not isinstance(reference, str):
        return None
    terms: list[ReferenceTerm] = []
    for part in reference.split("+"):
        match = REFERENCE_TERM_RE.match(part.strip())
        if not match or match.group(1) not in COLUMN_TRADES:
            return None
        ratio = float(match.group(3)) if match.group(3) else 1.0
        terms.append(ReferenceTerm(COLUMN_TRADES[match.group(1)], int(match.group(2)), ratio))
    return terms


def _group_total(building: Building, group: TradeGroup, trade: TradeKind) -> float:
    return sum(
        read_metric(record.trades, trade)
        for record in building.floor_trades
        if record.trade_group == group
    )


def _floor_label_at(building: Building, number: int, classes: tuple[FloorClass, ...] | None) -> str | None:
    for floor_class in classes or (None,):
        for floor in ordered_floors(building):
            if labels.ground_level(floor) != number:
                continue
            if floor_class is None or floor.floor_class == floor_class:
                return floor.floor_label
    return None


def row_floor_label(building: Building, row: int) -> str | None:
    """Floor label a floor row of the sheet refers to, if the building has it."""
    if row == ROW_BASEMENT_2:
        return "B2"
    if row == ROW_BASEMENT_1:
        return "B1"
    if row == ROW_FLOOR_1:
        return _floor_label_at(building, 1, (FloorClass.SETTING, FloorClass.GENERAL))
    if row == ROW_FLOOR_2:
        label = _floor_label_at(building, 2, (FloorClass.SETTING, FloorClass.GENERAL))
        return label or _floor_label_at(building, 2, None) or "2F"
    if ROW_STANDARD_FIRST <= row <= ROW_STANDARD_LAST:
        number = row - 10
        return _floor_label_at(building, number, None) or f"{number}F"
    if ROW_PH_FIRST <= row <= ROW_PH_LAST:
        penthouses = [f for f in ordered_floors(building) if f.is_penthouse]
        index = row - ROW_PH_FIRST
        return penthouses[index].floor_label if index < len(penthouses) else None
    return None


def resolve_term(building: Building, term: ReferenceTerm) -> float:
    if term.row == ROW_BLINDING:
        quantity = _group_total(building, TradeGroup.BLINDING, term.trade)
    elif term.row == ROW_FOUNDATION:
        quantity = _group_total(building, TradeGroup.FOUNDATION, term.trade)
    else:
        label = row_floor_label(building, term.row)
        quantity = get_quantity_from_floor(building, label, term.trade) if label else 0.0
    return quantity * term.ratio


def get_quantity_by_reference(building: Building, reference: str | None, strict: bool = False) -> float:
    """Evaluate a reference against the building's quantity records.

    Parameters
    ----------
    building:
        Building snapshot with floors and trades.
    reference:
        Reference string such as ``"F7*0.45"`` or ``"E14+E16"``.
    strict:
        Raise instead of returning 0 for a malformed reference.

    Raises
    ------
    ReferenceSyntaxError
        Only in strict mode.
    """
    terms = parse_reference(reference)
    if terms is None:
        if strict:
            raise ReferenceSyntaxError(str(reference))
        if reference:
            logger.debug("Malformed reference %r resolves to 0", reference)
        return 0.0
    return sum(resolve_term(building, term) for term in terms)
