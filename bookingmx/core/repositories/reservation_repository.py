from __future__ import annotations

from abc import ABC, abstractmethod

from bookingmx.core.entities.reservation import Reservation


class ReservationRepository(ABC):
    """
    Store for reservation records, keyed by identity.

    Holds no business rules. Implementations must assign identities atomically,
    but give no atomicity across separate calls (find_by_id then save).
    """

    @abstractmethod
    def find_all(self) -> list[Reservation]:
        """Snapshot of every stored reservation; order is not guaranteed."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, reservation: Reservation) -> Reservation:
        """
        Assign the next identity when `reservation.id` is None, otherwise overwrite
        whatever is stored under that identity. Returns the stored value with its id.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, reservation_id: int) -> None:
        """Remove the reservation if present; no-op otherwise."""
        raise NotImplementedError
