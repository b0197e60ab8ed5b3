from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from loguru import logger

from bookingmx.core.entities.reservation import Reservation, ReservationStatus
from bookingmx.core.repositories.reservation_repository import ReservationRepository
from bookingmx.core.use_cases.identity_locks import IdentityLocks


class NotFoundError(Exception):
    """Raise to map to HTTP 404."""


class ValidationError(Exception):
    """Raise to map to HTTP 400 (invalid input or state)."""


@dataclass(frozen=True, slots=True)
class ReservationRequest:
    """
    Plain values for create/update. Dates may be None; that is rejected by
    validation, not here.
    """
    guest_name: str
    hotel_name: str
    check_in: date | None
    check_out: date | None


class ReservationLifecycleManager:
    """
    Validates reservation dates and enforces the ACTIVE -> CANCELED state machine
    before delegating to the store.

    Update and cancel run under a per-id lock, so two requests on the same
    reservation cannot interleave their lookup and save.
    """

    def __init__(
            self,
            *,
            reservation_repo: ReservationRepository,
            identity_locks: IdentityLocks | None = None,
            today: Callable[[], date] = date.today,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._identity_locks = identity_locks if identity_locks is not None else IdentityLocks()
        self._today = today

    def list(self) -> Sequence[Reservation]:
        return self._reservation_repo.find_all()

    def create(self, request: ReservationRequest) -> Reservation:
        self._validate_dates(request.check_in, request.check_out)

        reservation = Reservation(
            id=None,
            guest_name=request.guest_name,
            hotel_name=request.hotel_name,
            check_in=request.check_in,
            check_out=request.check_out,
            status=ReservationStatus.ACTIVE,
        )
        saved = self._reservation_repo.save(reservation)
        logger.info(f"Created reservation {saved.id} for {saved.guest_name!r} at {saved.hotel_name!r}")
        return saved

    def update(self, reservation_id: int, request: ReservationRequest) -> Reservation:
        with self._identity_locks.hold(reservation_id):
            existing = self._get_existing(reservation_id)
            if not existing.is_active:
                logger.warning(f"Rejected update of canceled reservation {reservation_id}")
                raise ValidationError("Cannot update a canceled reservation")

            self._validate_dates(request.check_in, request.check_out)

            existing.guest_name = request.guest_name
            existing.hotel_name = request.hotel_name
            existing.check_in = request.check_in
            existing.check_out = request.check_out
            saved = self._reservation_repo.save(existing)

        logger.info(f"Updated reservation {saved.id}")
        return saved

    def cancel(self, reservation_id: int) -> Reservation:
        with self._identity_locks.hold(reservation_id):
            existing = self._get_existing(reservation_id)
            # Canceling twice is allowed; CANCELED is terminal
            existing.cancel()
            saved = self._reservation_repo.save(existing)

        logger.info(f"Canceled reservation {saved.id}")
        return saved

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _get_existing(self, reservation_id: int) -> Reservation:
        reservation = self._reservation_repo.find_by_id(reservation_id)
        if reservation is None:
            logger.warning(f"Reservation {reservation_id} not found")
            raise NotFoundError("Reservation not found")
        return reservation

    def _validate_dates(self, check_in: date | None, check_out: date | None) -> None:
        """Raises ValidationError on the first violated rule."""
        today = self._today()

        if check_in is None or check_out is None:
            message = "Dates cannot be null"
        elif not check_out > check_in:
            message = "Check-out must be after check-in"
        elif check_in < today:
            message = "Check-in must be in the future"
        elif check_out < today:
            # Unreachable with one `today` read: check_out > check_in >= today here
            message = "Check-out must be in the future"
        else:
            return

        logger.warning(f"Rejected reservation dates ({check_in} -> {check_out}): {message}")
        raise ValidationError(message)
