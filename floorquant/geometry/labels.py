"""Floor label parsing and formatting.

Canonical labels: ``"7F"``, ``"B2"``, ``"PH1"``, optionally core-qualified
(``"코어2-7F"``).  Display labels show penthouses as ``"옥탑1"``.
"""

from __future__ import annotations

from floorquant.config import (
    BASEMENT_LABEL_RE,
    CORE_PREFIX_RE,
    GROUND_LABEL_RE,
    PH_DISPLAY_RE,
    PH_LABEL_RE,
    RANGE_LABEL_RE,
    STANDARD_SUFFIX_RE,
)


def strip_core(label: str) -> str:
    return CORE_PREFIX_RE.sub("", label.strip())


def core_of(label: str) -> int | None:
    match = CORE_PREFIX_RE.match(label.strip())
    return int(match.group(1)) if match else None


def canonical_label(label: str) -> str:
    """Strip the core qualifier and map ``옥탑K`` back to ``PHK``."""
    clean = strip_core(label)
    match = PH_DISPLAY_RE.match(clean)
    if match:
        return f"PH{match.group(1)}"
    return clean


def display_label(label: str) -> str:
    """Label as shown in tables: ``PH2`` -> ``옥탑2``, no ``기준층`` suffix."""
    text = STANDARD_SUFFIX_RE.sub("", label)
    prefix_match = CORE_PREFIX_RE.match(text)
    prefix = prefix_match.group(0) if prefix_match else ""
    body = text[len(prefix):]
    match = PH_LABEL_RE.match(body)
    if match:
        body = f"옥탑{match.group(1)}"
    return prefix + body


def ground_number(label: str) -> int | None:
    """``"코어1-13F"`` -> 13; None for basements, penthouses and ranges."""
    match = GROUND_LABEL_RE.match(canonical_label(label))
    return int(match.group(1)) if match else None


def basement_number(label: str) -> int | None:
    match = BASEMENT_LABEL_RE.match(canonical_label(label))
    return int(match.group(1)) if match else None


def penthouse_number(label: str) -> int | None:
    match = PH_LABEL_RE.match(canonical_label(label))
    return int(match.group(1)) if match else None


def range_span(label: str) -> tuple[int, int] | None:
    """``"코어1-2~14F 기준층"`` -> (2, 14)."""
    text = STANDARD_SUFFIX_RE.sub("", strip_core(label))
    match = RANGE_LABEL_RE.search(text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def qualify(label: str, core: int | None, multi_core: bool) -> str:
    if multi_core and core is not None:
        return f"코어{core}-{label}"
    return label


def format_range(start: int, end: int, core: int | None = None, multi_core: bool = False) -> str:
    return qualify(f"{start}~{end}F", core, multi_core)


def individual_floor_id(range_floor_id: str, floor_number: int) -> str:
    """Storage id of floor ``floor_number`` inside a persisted range record."""
    return f"{range_floor_id}-{floor_number}F"


def ground_level(floor) -> int | None:
    """Ground floor number of an individual above-grade floor record."""
    if not floor.is_ground or floor.is_range:
        return None
    return ground_number(floor.floor_label)


def same_core(a: int | None, b: int | None) -> bool:
    """Shared floors (core None) belong to every core."""
    return a is None or b is None or a == b
