"""Floor classification: setting-floor cascade and height inference."""

from floorquant.classification.cascade import cascade_targets
from floorquant.classification.classifier import (
    ClassificationResult,
    apply_classification,
    apply_height,
    apply_range_classification,
    update_floor,
)
from floorquant.classification.heuristics import promotion_for_height

__all__ = [
    "ClassificationResult",
    "apply_classification",
    "apply_height",
    "apply_range_classification",
    "cascade_targets",
    "promotion_for_height",
    "update_floor",
]
