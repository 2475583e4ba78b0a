"""In-memory memoisation of geocode results keyed by the exact address string."""

from __future__ import annotations

import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator

from ...models.domain import GeocodeResult


class _AddressLock:
    __slots__ = ("lock", "waiters")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.waiters = 0


class GeocodeCache:
    """Process-wide geocode cache.

    Keys are the address strings exactly as received, with no case or
    whitespace normalisation. Entries are never invalidated; when
    ``max_entries`` is set the least recently used entry is dropped once the
    bound is exceeded.

    ``address_lock`` hands out one lock per address so that concurrent misses
    for the same string collapse into a single provider call. A lock is
    dropped as soon as nobody holds or waits for it.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, GeocodeResult] = OrderedDict()
        self._lock = threading.Lock()
        self._address_locks: dict[str, _AddressLock] = {}

    def get(self, address: str) -> GeocodeResult | None:
        with self._lock:
            result = self._entries.get(address)
            if result is not None and self.max_entries is not None:
                self._entries.move_to_end(address)
            return result

    def set(self, address: str, result: GeocodeResult) -> None:
        with self._lock:
            if address in self._entries:
                # first writer wins, results are never replaced
                return
            self._entries[address] = result
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    @contextmanager
    def address_lock(self, address: str) -> Iterator[None]:
        with self._lock:
            entry = self._address_locks.get(address)
            if entry is None:
                entry = self._address_locks[address] = _AddressLock()
            entry.waiters += 1
        try:
            with entry.lock:
                yield
        finally:
            # the lock only lives while someone holds or waits for it
            with self._lock:
                entry.waiters -= 1
                if entry.waiters == 0 and self._address_locks.get(address) is entry:
                    del self._address_locks[address]

    def pending_addresses(self) -> int:
        """Number of addresses with a lookup in flight."""
        with self._lock:
            return len(self._address_locks)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
