"""RecordStore interface plus in-memory and HTTP stores."""

from __future__ import annotations

import abc
import copy
import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class RecordStore(abc.ABC):
    """Key/record store the engine persists floors, trades and buildings to."""

    @abc.abstractmethod
    def put(self, kind: str, record_id: str, payload: dict[str, Any]) -> None:
        """Create or replace a record."""

    @abc.abstractmethod
    def get(self, kind: str, record_id: str) -> dict[str, Any] | None:
        """Return a record, or None."""

    @abc.abstractmethod
    def delete(self, kind: str, record_id: str) -> bool:
        """Remove a record; True if it existed."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Return True if this store is ready."""


class InMemoryRecordStore(RecordStore):
    """Dict-backed store.  Always available."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], dict[str, Any]] = {}
        self._lock = threading.Lock()
        self.write_count = 0

    def put(self, kind: str, record_id: str, payload: dict[str, Any]) -> None:
        with self._lock:
            self._records[(kind, record_id)] = copy.deepcopy(payload)
            self.write_count += 1

    def get(self, kind: str, record_id: str) -> dict[str, Any] | None:
        with self._lock:
            record = self._records.get((kind, record_id))
            return copy.deepcopy(record) if record is not None else None

    def delete(self, kind: str, record_id: str) -> bool:
        with self._lock:
            return self._records.pop((kind, record_id), None) is not None

    def is_available(self) -> bool:
        return True

    def records(self, kind: str) -> dict[str, dict[str, Any]]:
        """All records of one kind, keyed by id."""
        with self._lock:
            return {
                rid: copy.deepcopy(payload)
                for (k, rid), payload in self._records.items()
                if k == kind
            }


class HttpRecordStore(RecordStore):
    """JSON records over HTTP: ``{base_url}/{kind}/{id}``.

    Failures raise, so the write queue keeps the write pending.
    """

    def __init__(self, base_url: str | None = None, token: str | None = None, timeout: float = 10) -> None:
        self._base_url = (base_url or "").rstrip("/")
        self._token = token
        self._timeout = timeout

    def is_available(self) -> bool:
        if not self._base_url:
            return False
        try:
            import requests  # noqa: F401
            return True
        except ImportError:
            return False

    def _url(self, kind: str, record_id: str) -> str:
        return f"{self._base_url}/{kind}/{record_id}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def put(self, kind: str, record_id: str, payload: dict[str, Any]) -> None:
        import requests

        resp = requests.put(
            self._url(kind, record_id), json=payload, headers=self._headers(), timeout=self._timeout,
        )
        resp.raise_for_status()

    def get(self, kind: str, record_id: str) -> dict[str, Any] | None:
        import requests

        resp = requests.get(self._url(kind, record_id), headers=self._headers(), timeout=self._timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def delete(self, kind: str, record_id: str) -> bool:
        import requests

        resp = requests.delete(self._url(kind, record_id), headers=self._headers(), timeout=self._timeout)
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True
