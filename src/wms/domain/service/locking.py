"""Named mutual-exclusion locks with ordered, bounded acquisition.

One ``threading.Lock`` per key, created on first use and dropped again once
no caller holds or waits on it.  ``hold()`` always takes locks in sorted key
order, so two callers whose key sets overlap can never wait on each other in
a cycle, and gives up once the shared deadline passes.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog

from wms.domain.exceptions import BusyError

logger = structlog.get_logger(__name__)


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class KeyedLocks:

    def __init__(self, name: str) -> None:
        self._name = name
        self._slots: dict[str, _Slot] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        """Number of keys currently held or waited on."""
        with self._registry_lock:
            return len(self._slots)

    def _check_out(self, key: str) -> threading.Lock:
        with self._registry_lock:
            slot = self._slots.get(key)
            if slot is None:
                slot = self._slots[key] = _Slot()
            slot.users += 1
            return slot.lock

    def _check_in(self, key: str) -> None:
        with self._registry_lock:
            slot = self._slots[key]
            slot.users -= 1
            if slot.users == 0:
                del self._slots[key]

    @contextmanager
    def hold(self, keys: Iterable[str], timeout: float | None) -> Iterator[list[str]]:
        """Hold the locks for every key in *keys* for the duration of the block.

        Raises BusyError if they cannot all be taken within *timeout* seconds;
        any lock already taken is released first.  ``timeout=None`` waits as
        long as it takes.  Yields the sorted keys.
        """
        ordered = sorted(set(keys))
        deadline = None if timeout is None else time.monotonic() + timeout
        checked_out: list[str] = []
        held: list[threading.Lock] = []
        try:
            for key in ordered:
                lock = self._check_out(key)
                checked_out.append(key)
                if deadline is None:
                    acquired = lock.acquire()
                else:
                    acquired = lock.acquire(timeout=max(0.0, deadline - time.monotonic()))
                if not acquired:
                    logger.warning(
                        "Lock wait exceeded",
                        lock_group=self._name,
                        key=key,
                        timeout=timeout,
                    )
                    raise BusyError(
                        f"Timed out after {timeout}s waiting for {self._name} lock '{key}'"
                    )
                held.append(lock)
            yield ordered
        finally:
            for lock in reversed(held):
                lock.release()
            for key in checked_out:
                self._check_in(key)
