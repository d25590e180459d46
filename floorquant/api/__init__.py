"""Python API: the :class:`FloorEngine` facade."""

from floorquant.api.facade import FloorEngine

__all__ = ["FloorEngine"]
