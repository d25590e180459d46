"""WriteCoalescer — debounced writes keyed by record identity."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from floorquant.errors import WriteFlushError

logger = logging.getLogger(__name__)

Writer = Callable[[str, Any], None]


class WriteCoalescer:
    """Collapse rapid writes to the same record into one.

    Each key has its own ``threading.Timer``; submitting again for a key
    cancels the pending timer and replaces the payload.  Writes of one key
    are serialized, and a payload superseded while waiting for the previous
    write is dropped, so the newest payload lands last.  A write that fails
    on its timer stays pending for the next :meth:`flush`.

    Parameters
    ----------
    writer:
        Called as ``writer(key, payload)`` to issue a write.
    delay_seconds:
        Debounce window.
    """

    def __init__(self, writer: Writer, delay_seconds: float) -> None:
        self._writer = writer
        self._delay = delay_seconds
        self._pending: dict[str, Any] = {}
        self._timers: dict[str, threading.Timer] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending_keys(self) -> list[str]:
        with self._lock:
            return sorted(self._pending)

    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def submit(self, key: str, payload: Any) -> None:
        """Schedule ``payload`` for ``key``, superseding any pending write."""
        with self._lock:
            timer = self._timers.pop(key, None)
            if timer is not None:
                timer.cancel()
                logger.debug("Superseded pending write %s", key)
            self._pending[key] = payload
            timer = threading.Timer(self._delay, self._fire, args=(key, payload))
            timer.daemon = True
            self._timers[key] = timer
            timer.start()

    def flush(self) -> int:
        """Issue every pending write now.

        Returns the number of writes issued.

        Raises
        ------
        WriteFlushError
            If any write failed; failed writes remain pending.
        """
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            batch = dict(self._pending)

        failures: dict[str, Exception] = {}
        issued = 0
        for key, payload in batch.items():
            try:
                written = self._issue(key, payload)
            except Exception as exc:
                logger.warning("Write %s failed during flush: %s", key, exc)
                failures[key] = exc
                continue
            if written:
                issued += 1

        if failures:
            raise WriteFlushError(failures)
        return issued

    def cancel(self) -> None:
        """Drop pending writes without issuing them."""
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            self._pending.clear()

    def _fire(self, key: str, payload: Any) -> None:
        with self._lock:
            if self._pending.get(key) is not payload:
                return
            self._timers.pop(key, None)
        try:
            self._issue(key, payload)
        except Exception as exc:
            logger.warning("Debounced write %s failed, kept for flush: %s", key, exc)

    def _issue(self, key: str, payload: Any) -> bool:
        """Write ``payload`` unless a newer one superseded it.

        Returns False when the payload was no longer current once the
        previous write of the key finished.
        """
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            with self._lock:
                if self._pending.get(key) is not payload:
                    logger.debug("Dropped superseded write %s", key)
                    return False
            self._writer(key, payload)
            with self._lock:
                if self._pending.get(key) is payload:
                    del self._pending[key]
        return True
