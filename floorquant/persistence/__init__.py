"""Persistence port: write coalescing, record stores, locks."""

from floorquant.persistence.adapter import PersistenceAdapter
from floorquant.persistence.locking import LockScope, is_locked, require_unlocked, set_lock
from floorquant.persistence.queue import WriteCoalescer
from floorquant.persistence.store import HttpRecordStore, InMemoryRecordStore, RecordStore

__all__ = [
    "HttpRecordStore",
    "InMemoryRecordStore",
    "LockScope",
    "PersistenceAdapter",
    "RecordStore",
    "WriteCoalescer",
    "is_locked",
    "require_unlocked",
    "set_lock",
]
