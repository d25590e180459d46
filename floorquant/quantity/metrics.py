"""Closed trade-kind / metric table and typed accessors on TradeData."""

from __future__ import annotations

from enum import Enum

from floorquant.errors import InvalidMetricError
from floorquant.models.building import (
    AreaQuantity,
    TonQuantity,
    TradeData,
    VolumeQuantity,
    clamp_quantity,
)


class TradeKind(str, Enum):
    GANG_FORM = "gangForm"
    AL_FORM = "alForm"
    FORMWORK = "formwork"
    STRIP_CLEAN = "stripClean"
    REBAR = "rebar"
    CONCRETE = "concrete"


class Metric(str, Enum):
    AREA_M2 = "areaM2"
    TON = "ton"
    VOLUME_M3 = "volumeM3"


# trade kind -> (metric, TradeData attribute, sub-model attribute, sub-model class)
_TABLE: dict[TradeKind, tuple[Metric, str, str, type]] = {
    TradeKind.GANG_FORM: (Metric.AREA_M2, "gang_form", "area_m2", AreaQuantity),
    TradeKind.AL_FORM: (Metric.AREA_M2, "al_form", "area_m2", AreaQuantity),
    TradeKind.FORMWORK: (Metric.AREA_M2, "formwork", "area_m2", AreaQuantity),
    TradeKind.STRIP_CLEAN: (Metric.AREA_M2, "strip_clean", "area_m2", AreaQuantity),
    TradeKind.REBAR: (Metric.TON, "rebar", "ton", TonQuantity),
    TradeKind.CONCRETE: (Metric.VOLUME_M3, "concrete", "volume_m3", VolumeQuantity),
}

TRADE_METRICS: dict[TradeKind, Metric] = {kind: row[0] for kind, row in _TABLE.items()}

# Quantity-sheet columns
COLUMN_TRADES: dict[str, TradeKind] = {
    "B": TradeKind.GANG_FORM,
    "C": TradeKind.AL_FORM,
    "D": TradeKind.FORMWORK,
    "E": TradeKind.STRIP_CLEAN,
    "F": TradeKind.REBAR,
    "G": TradeKind.CONCRETE,
}


def check_metric(trade: TradeKind | str, metric: Metric | str | None = None) -> tuple[TradeKind, Metric]:
    """Validate a trade/metric pair; the metric defaults to the trade's own.

    Raises
    ------
    InvalidMetricError
        Unknown trade or metric, or a metric the trade does not carry.
    """
    try:
        kind = TradeKind(trade)
        expected = TRADE_METRICS[kind]
        wanted = expected if metric is None else Metric(metric)
    except ValueError as exc:
        raise InvalidMetricError(f"Unknown trade/metric {trade!r}/{metric!r}") from exc
    if wanted != expected:
        raise InvalidMetricError(
            f"Trade '{kind.value}' is measured in {expected.value}, not {wanted.value}"
        )
    return kind, wanted


def read_metric(data: TradeData, trade: TradeKind | str, metric: Metric | str | None = None) -> float:
    """Stored value, or 0 for a missing trade/metric or an unusable number."""
    kind, _ = check_metric(trade, metric)
    _, attr, sub_attr, _ = _TABLE[kind]
    sub = getattr(data, attr)
    if sub is None:
        return 0.0
    return clamp_quantity(getattr(sub, sub_attr))


def write_metric(data: TradeData, trade: TradeKind | str, value: float | None) -> TradeData:
    """Copy of ``data`` with one metric set, or removed when ``value`` is None."""
    kind, _ = check_metric(trade)
    _, attr, sub_attr, sub_cls = _TABLE[kind]
    if value is None:
        return data.model_copy(update={attr: None})
    return data.model_copy(update={attr: sub_cls(**{sub_attr: value})})
