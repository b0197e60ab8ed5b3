from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookingmx.infrastructure.database import SessionLocal
from bookingmx.services.reservation_service import (
    cancel_reservation_service,
    create_reservation_service,
    list_reservations_service,
    update_reservation_service,
)
from bookingmx.schemas.models import Reservation, ReservationRequest
from bookingmx.core.use_cases.reservation_lifecycle import NotFoundError, ValidationError

router = APIRouter()


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@router.get("/api/reservations", response_model=list[Reservation])
def get_reservations(db: Session = Depends(get_db)) -> list[Reservation]:
    """
    List all reservations
    """
    return list_reservations_service(db)


@router.post("/api/reservations", response_model=Reservation, status_code=201)
def post_reservations(body: ReservationRequest, db: Session = Depends(get_db)) -> Reservation:
    """
    Create a reservation

    Returns:
      - 201 with the stored reservation
      - 400 if the dates break a business rule
      - 422 if the body cannot be parsed
    """
    try:
        return create_reservation_service(body, db)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/api/reservations/{reservation_id}", response_model=Reservation)
def put_reservations_reservation_id(
    reservation_id: int,
    body: ReservationRequest,
    db: Session = Depends(get_db),
) -> Reservation:
    """
    Update an active reservation
    """
    try:
        return update_reservation_service(reservation_id, body, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/api/reservations/{reservation_id}", response_model=Reservation)
def delete_reservations_reservation_id(reservation_id: int, db: Session = Depends(get_db)) -> Reservation:
    """
    Cancel a reservation (the record is kept with status CANCELED)
    """
    try:
        return cancel_reservation_service(reservation_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
