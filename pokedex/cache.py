"""A thread-safe in-memory cache whose entries expire after a fixed interval."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass(frozen=True)
class _Entry:
    val: bytes
    created_at: float = field(default_factory=time.monotonic)


class Cache:
    """Key/value store that drops entries older than ``interval`` seconds.

    A background thread wakes up every ``interval`` seconds and removes
    expired entries. Call :meth:`close` (or use the cache as a context
    manager) to stop it.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("cache interval must be positive")
        self._interval = float(interval)
        self._lock = threading.Lock()
        self._data: dict[str, _Entry] = {}
        self._stop = threading.Event()
        self._reaper = threading.Thread(
            target=self._reap_loop, name="cache-reaper", daemon=True
        )
        self._reaper.start()

    @property
    def interval(self) -> float:
        return self._interval

    def add(self, key: str, val: bytes) -> None:
        """Store ``val`` under ``key``, replacing any previous entry."""
        with self._lock:
            self._data[key] = _Entry(bytes(val))

    def get(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or ``None`` if absent."""
        with self._lock:
            entry = self._data.get(key)
        return entry.val if entry is not None else None

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def close(self) -> None:
        """Stop the background reaper thread."""
        self._stop.set()
        if self._reaper is not threading.current_thread():
            self._reaper.join()

    def __enter__(self) -> Cache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _reap_loop(self) -> None:
        while not self._stop.wait(self._interval):
            self._reap()

    def _reap(self) -> None:
        now = time.monotonic()
        with self._lock:
            expired = [
                key
                for key, entry in self._data.items()
                if now - entry.created_at > self._interval
            ]
            for key in expired:
                del self._data[key]