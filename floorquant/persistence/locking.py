"""Sign-off locks on building data.

``isBasicInfoLocked`` freezes the floor structure (classes, heights,
regeneration); ``isDataInputLocked`` freezes quantity records.  Locked
mutations are rejected, not ignored.
"""

from __future__ import annotations

import logging
from enum import Enum

from floorquant.errors import BuildingLockedError
from floorquant.models.building import Building

logger = logging.getLogger(__name__)


class LockScope(str, Enum):
    BASIC_INFO = "basic_info"
    DATA_INPUT = "data_input"


_FLAGS = {
    LockScope.BASIC_INFO: "is_basic_info_locked",
    LockScope.DATA_INPUT: "is_data_input_locked",
}


def is_locked(building: Building, scope: LockScope) -> bool:
    return bool(getattr(building.meta, _FLAGS[LockScope(scope)]))


def require_unlocked(building: Building, scope: LockScope) -> None:
    """Raise BuildingLockedError if ``scope`` is locked on ``building``."""
    scope = LockScope(scope)
    if is_locked(building, scope):
        logger.info("Rejected %s edit on locked building %s", scope.value, building.id)
        raise BuildingLockedError(building.id, scope.value)


def set_lock(building: Building, scope: LockScope, locked: bool, user_id: str = "") -> Building:
    """Copy of ``building`` with the lock flag of ``scope`` set or cleared."""
    scope = LockScope(scope)
    meta = building.meta.model_copy(update={_FLAGS[scope]: locked})
    action = "Locked" if locked else "Unlocked"
    logger.info("%s %s of building %s by user %s", action, scope.value, building.id, user_id or "-")
    return building.model_copy(update={"meta": meta})
