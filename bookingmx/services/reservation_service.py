from __future__ import annotations

from sqlalchemy.orm import Session

from bookingmx.core.entities.reservation import Reservation as CoreReservation
from bookingmx.core.repositories.reservation_repository import ReservationRepository
from bookingmx.core.use_cases.identity_locks import IdentityLocks
from bookingmx.core.use_cases.reservation_lifecycle import ReservationLifecycleManager
from bookingmx.core.use_cases.reservation_lifecycle import ReservationRequest as CoreReservationRequest
from bookingmx.infrastructure.repositories.in_memory_reservation_repository_impl import (
    InMemoryReservationRepositoryImpl,
)
from bookingmx.infrastructure.repositories.reservation_repository_impl import ReservationRepositoryImpl
from bookingmx.schemas.models import Reservation, ReservationRequest

# Shared across requests: the in-memory store is the data itself, and the id
# locks only serialize anything if every request sees the same registry.
_memory_repo = InMemoryReservationRepositoryImpl()
_identity_locks = IdentityLocks()


def _reservation_repo(db: Session) -> ReservationRepository:
    from bookingmx.infrastructure.config import settings
    if settings.store_backend == "sql":
        return ReservationRepositoryImpl(db)
    return _memory_repo


def _manager(db: Session) -> ReservationLifecycleManager:
    return ReservationLifecycleManager(reservation_repo=_reservation_repo(db), identity_locks=_identity_locks)


def _to_core_request(body: ReservationRequest) -> CoreReservationRequest:
    """
    Translate API schema ReservationRequest -> core request value.
    """
    return CoreReservationRequest(
        guest_name=body.guestName,
        hotel_name=body.hotelName,
        check_in=body.checkIn,
        check_out=body.checkOut,
    )


def _to_schema(reservation: CoreReservation) -> Reservation:
    return Reservation(
        id=reservation.id,
        guestName=reservation.guest_name,
        hotelName=reservation.hotel_name,
        checkIn=reservation.check_in,
        checkOut=reservation.check_out,
        status=reservation.status.value,
    )


def list_reservations_service(db: Session) -> list[Reservation]:
    return [_to_schema(r) for r in _manager(db).list()]


def create_reservation_service(body: ReservationRequest, db: Session) -> Reservation:
    return _to_schema(_manager(db).create(_to_core_request(body)))


def update_reservation_service(reservation_id: int, body: ReservationRequest, db: Session) -> Reservation:
    return _to_schema(_manager(db).update(reservation_id, _to_core_request(body)))


def cancel_reservation_service(reservation_id: int, db: Session) -> Reservation:
    return _to_schema(_manager(db).cancel(reservation_id))
