"""Exception hierarchy for the floor/quantity engine."""

from __future__ import annotations


class FloorQuantError(Exception):
    """Base class for all engine errors."""


class BuildingLockedError(FloorQuantError, RuntimeError):
    """A mutation was attempted on a building whose lock flag is set."""

    def __init__(self, building_id: str, scope: str) -> None:
        self.building_id = building_id
        self.scope = scope
        super().__init__(f"Building '{building_id}' is locked for {scope}.")


class InvalidMetricError(FloorQuantError, ValueError):
    """A trade kind was paired with a metric it does not carry."""


class InvalidQuantityError(FloorQuantError, ValueError):
    """A quantity value is negative or not a finite number."""


class UnknownFloorError(FloorQuantError, LookupError):
    """A floor id does not resolve to a floor of the building."""

    def __init__(self, floor_id: str) -> None:
        self.floor_id = floor_id
        super().__init__(f"Unknown floor id '{floor_id}'.")


class ReferenceSyntaxError(FloorQuantError, ValueError):
    """A reference pattern could not be parsed (strict mode only)."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Malformed quantity reference '{reference}'.")


class WriteFlushError(FloorQuantError):
    """One or more pending writes could not be issued during a flush."""

    def __init__(self, failures: dict[str, Exception]) -> None:
        self.failures = failures
        keys = ", ".join(sorted(failures))
        super().__init__(f"{len(failures)} pending write(s) failed: {keys}")


class RegenerationAbortedError(FloorQuantError):
    """Floor regeneration was abandoned because pending writes did not flush."""
