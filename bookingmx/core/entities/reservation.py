from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ReservationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELED = "CANCELED"


@dataclass(slots=True, eq=False)
class Reservation:
    """
    A hotel room reservation.

    Identity is assigned by the store on first save and is the only thing
    that takes part in equality.
    """
    id: int | None
    guest_name: str
    hotel_name: str
    check_in: date | None
    check_out: date | None
    status: ReservationStatus = ReservationStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is ReservationStatus.ACTIVE

    def cancel(self) -> None:
        self.status = ReservationStatus.CANCELED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reservation):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(self.id)
