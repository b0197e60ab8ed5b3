from __future__ import annotations

import threading

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookingmx.core.entities.reservation import Reservation, ReservationStatus
from bookingmx.core.repositories.reservation_repository import ReservationRepository
from bookingmx.infrastructure.models.models import ReservationModel

# Sessions from the StaticPool engine share one SQLite connection, so their
# transactions must not interleave. Every method ends its transaction before
# releasing the lock, so no session keeps the connection between calls.
_db_lock = threading.Lock()


class ReservationRepositoryImpl(ReservationRepository):
    """
    SQLAlchemy implementation of the reservation store.

    Identities come from the database primary key. Each instance works on the
    request's session, so it is not shared between requests.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all(self) -> list[Reservation]:
        with _db_lock:
            rows = self._db.scalars(select(ReservationModel).order_by(ReservationModel.id)).all()
            reservations = [self._to_entity(row) for row in rows]
            self._db.commit()
            return reservations

    def find_by_id(self, reservation_id: int) -> Reservation | None:
        with _db_lock:
            row = self._db.get(ReservationModel, reservation_id)
            reservation = self._to_entity(row) if row is not None else None
            self._db.commit()
            return reservation

    def save(self, reservation: Reservation) -> Reservation:
        with _db_lock:
            row = None
            if reservation.id is not None:
                row = self._db.get(ReservationModel, reservation.id)
            if row is None:
                row = ReservationModel(id=reservation.id)

            row.guest_name = reservation.guest_name
            row.hotel_name = reservation.hotel_name
            row.check_in = reservation.check_in
            row.check_out = reservation.check_out
            row.status = reservation.status

            self._db.add(row)
            self._db.flush()
            saved_id = row.id
            self._db.commit()

        if reservation.id is None:
            logger.debug(f"Assigned reservation id {saved_id}")
        reservation.id = saved_id
        return reservation

    def delete(self, reservation_id: int) -> None:
        with _db_lock:
            row = self._db.get(ReservationModel, reservation_id)
            if row is not None:
                self._db.delete(row)
            self._db.commit()

    @staticmethod
    def _to_entity(row: ReservationModel) -> Reservation:
        return Reservation(
            id=row.id,
            guest_name=row.guest_name,
            hotel_name=row.hotel_name,
            check_in=row.check_in,
            check_out=row.check_out,
            status=ReservationStatus(row.status) if not isinstance(row.status, ReservationStatus) else row.status,
        )
