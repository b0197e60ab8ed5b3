from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field


@dataclass(slots=True)
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class IdentityLocks:
    """
    One lock per reservation id.

    Serializes read-validate-write sequences that target the same reservation
    inside this process. It does not coordinate several processes sharing a
    SQL database; those can still race and the last save wins.

    An id only has an entry while someone holds or waits for its lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, reservation_id: int) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(reservation_id)
            if entry is None:
                entry = self._locks[reservation_id] = _Entry()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[reservation_id]
