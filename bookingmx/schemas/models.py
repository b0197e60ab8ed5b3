from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel


class Status(Enum):
    ACTIVE = 'ACTIVE'
    CANCELED = 'CANCELED'


class ReservationRequest(BaseModel):
    guestName: str
    hotelName: str
    checkIn: date | None = None
    checkOut: date | None = None


class Reservation(BaseModel):
    id: int
    guestName: str
    hotelName: str
    checkIn: date
    checkOut: date
    status: Status
