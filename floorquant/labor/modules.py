"""Lookups into the process-module table."""

from __future__ import annotations

from floorquant.labor.seed_data import DEFAULT_PROCESS_TYPES, PROCESS_MODULES
from floorquant.models.process import ProcessCategory, ProcessModule


def get_process_module(category: ProcessCategory | str, process_type: str | None = None) -> ProcessModule | None:
    """Module for a category and process type (default type when omitted)."""
    category = ProcessCategory(category)
    name = process_type or DEFAULT_PROCESS_TYPES[category]
    for module in PROCESS_MODULES:
        if module.category == category and module.name == name:
            return module
    return None


def get_available_modules(category: ProcessCategory | str) -> list[ProcessModule]:
    category = ProcessCategory(category)
    return [m for m in PROCESS_MODULES if m.category == category]
