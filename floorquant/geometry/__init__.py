"""Core geometry: floor descriptors, derived floors, display spine."""

from floorquant.geometry.heights import heights_changed, structure_changed
from floorquant.geometry.labels import canonical_label, display_label, individual_floor_id
from floorquant.geometry.resolver import (
    CoreGeometry,
    FloorDescriptor,
    count_units,
    derive_floors,
    display_spine,
    resolve_cores,
)

__all__ = [
    "CoreGeometry",
    "FloorDescriptor",
    "canonical_label",
    "count_units",
    "derive_floors",
    "display_label",
    "display_spine",
    "heights_changed",
    "individual_floor_id",
    "resolve_cores",
    "structure_changed",
]
