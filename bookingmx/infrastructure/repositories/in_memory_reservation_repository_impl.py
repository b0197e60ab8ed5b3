from __future__ import annotations

import itertools
import threading
from dataclasses import replace

from loguru import logger

from bookingmx.core.entities.reservation import Reservation
from bookingmx.core.repositories.reservation_repository import ReservationRepository


class InMemoryReservationRepositoryImpl(ReservationRepository):
    """
    Process-local reservation store.

    Records are copied on the way in and on the way out, so callers never hold a
    reference into the map. A single lock guards both the map and the id counter.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._store: dict[int, Reservation] = {}
        self._ids = itertools.count(1)

    def find_all(self) -> list[Reservation]:
        with self._lock:
            return [replace(r) for r in self._store.values()]

    def find_by_id(self, reservation_id: int) -> Reservation | None:
        with self._lock:
            stored = self._store.get(reservation_id)
        return replace(stored) if stored is not None else None

    def save(self, reservation: Reservation) -> Reservation:
        with self._lock:
            if reservation.id is None:
                reservation.id = next(self._ids)
                logger.debug(f"Assigned reservation id {reservation.id}")
            self._store[reservation.id] = replace(reservation)
        return reservation

    def delete(self, reservation_id: int) -> None:
        with self._lock:
            self._store.pop(reservation_id, None)
