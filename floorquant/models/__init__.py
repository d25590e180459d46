"""Pydantic data models."""

from floorquant.models.building import (
    AreaQuantity,
    Building,
    BuildingMeta,
    Floor,
    FloorClass,
    FloorCount,
    FloorTrade,
    Heights,
    LevelType,
    TonQuantity,
    TradeData,
    TradeGroup,
    UnitTypePattern,
    VolumeQuantity,
)
from floorquant.models.process import ProcessCategory, ProcessItem, ProcessModule

__all__ = [
    "AreaQuantity",
    "Building",
    "BuildingMeta",
    "Floor",
    "FloorClass",
    "FloorCount",
    "FloorTrade",
    "Heights",
    "LevelType",
    "ProcessCategory",
    "ProcessItem",
    "ProcessModule",
    "TonQuantity",
    "TradeData",
    "TradeGroup",
    "UnitTypePattern",
    "VolumeQuantity",
]
