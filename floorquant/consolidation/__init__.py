"""Range consolidation for display and its inverse."""

from floorquant.consolidation.consolidator import (
    consolidate_for_display,
    display_grid,
    expand,
    expand_range_records,
    range_containing,
)
from floorquant.consolidation.views import FloorView, Placeholder, RangeView, RealFloor, SpineRow

__all__ = [
    "FloorView",
    "Placeholder",
    "RangeView",
    "RealFloor",
    "SpineRow",
    "consolidate_for_display",
    "display_grid",
    "expand",
    "expand_range_records",
    "range_containing",
]
