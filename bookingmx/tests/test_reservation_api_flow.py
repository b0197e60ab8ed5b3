from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest
from starlette.testclient import TestClient

import bookingmx.services.reservation_service as reservation_service
from bookingmx.infrastructure.config import settings
from bookingmx.infrastructure.database import SessionLocal
from bookingmx.infrastructure.models.models import ReservationModel
from bookingmx.infrastructure.repositories.in_memory_reservation_repository_impl import (
    InMemoryReservationRepositoryImpl,
)
from bookingmx.main import app


@pytest.fixture(params=["memory", "sql"])
def client(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """
    Run every flow against both stores, each starting empty.
    """
    monkeypatch.setattr(settings, "store_backend", request.param)
    monkeypatch.setattr(reservation_service, "_memory_repo", InMemoryReservationRepositoryImpl())

    db = SessionLocal()
    try:
        db.query(ReservationModel).delete()
        db.commit()
    finally:
        db.close()

    return TestClient(app)


def _day(n: int) -> str:
    return (date.today() + timedelta(days=n)).isoformat()


def _body(guest: str = "Alice", hotel: str = "Hotel Azul", check_in: Any = None, check_out: Any = None) -> dict:
    return {
        "guestName": guest,
        "hotelName": hotel,
        "checkIn": _day(5) if check_in is None else check_in,
        "checkOut": _day(7) if check_out is None else check_out,
    }


def test_create_then_list_round_trip(client: TestClient) -> None:
    res = client.post("/api/reservations", json=_body())
    assert res.status_code == 201
    created = res.json()

    assert isinstance(created["id"], int)
    assert created["guestName"] == "Alice"
    assert created["hotelName"] == "Hotel Azul"
    assert created["checkIn"] == _day(5)
    assert created["checkOut"] == _day(7)
    assert created["status"] == "ACTIVE"

    listed = client.get("/api/reservations")
    assert listed.status_code == 200
    assert listed.json() == [created]


def test_create_assigns_distinct_ids(client: TestClient) -> None:
    ids = {client.post("/api/reservations", json=_body(guest=f"G{i}")).json()["id"] for i in range(3)}
    assert len(ids) == 3


@pytest.mark.parametrize(
    ("payload", "detail"),
    [
        ({"guestName": "Bob", "hotelName": "Hotel Verde", "checkIn": None, "checkOut": _day(3)},
         "Dates cannot be null"),
        ({"guestName": "Bob", "hotelName": "Hotel Verde", "checkIn": _day(3)}, "Dates cannot be null"),
        ({"guestName": "Carol", "hotelName": "Hotel Rojo", "checkIn": _day(7), "checkOut": _day(7)},
         "Check-out must be after check-in"),
        ({"guestName": "Dan", "hotelName": "Hotel Naranja", "checkIn": _day(-1), "checkOut": _day(2)},
         "Check-in must be in the future"),
    ],
)
def test_create_invalid_dates_return_400_and_store_nothing(client: TestClient, payload: dict, detail: str) -> None:
    res = client.post("/api/reservations", json=payload)
    assert res.status_code == 400
    assert res.json()["detail"] == detail

    assert client.get("/api/reservations").json() == []


def test_update_then_list_reflects_latest_state(client: TestClient) -> None:
    created = client.post("/api/reservations", json=_body(guest="Gus", hotel="Hotel Tres")).json()

    res = client.put(
        f"/api/reservations/{created['id']}",
        json=_body(guest="Gustavo", hotel="Hotel Tres Deluxe", check_in=_day(10), check_out=_day(15)),
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["id"] == created["id"]
    assert updated["guestName"] == "Gustavo"
    assert updated["status"] == "ACTIVE"

    assert client.get("/api/reservations").json() == [updated]


def test_update_unknown_id_returns_404(client: TestClient) -> None:
    res = client.put("/api/reservations/999", json=_body())
    assert res.status_code == 404
    assert res.json()["detail"] == "Reservation not found"


def test_cancel_then_update_returns_400(client: TestClient) -> None:
    created = client.post("/api/reservations", json=_body(guest="Ivan", hotel="Hotel Cinco")).json()

    canceled = client.delete(f"/api/reservations/{created['id']}")
    assert canceled.status_code == 200
    assert canceled.json()["status"] == "CANCELED"

    res = client.put(f"/api/reservations/{created['id']}", json=_body(check_in=_day(6), check_out=_day(8)))
    assert res.status_code == 400
    assert res.json()["detail"] == "Cannot update a canceled reservation"

    [listed] = client.get("/api/reservations").json()
    assert listed == canceled.json()


def test_cancel_twice_is_idempotent(client: TestClient) -> None:
    created = client.post("/api/reservations", json=_body()).json()

    first = client.delete(f"/api/reservations/{created['id']}")
    second = client.delete(f"/api/reservations/{created['id']}")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["status"] == "CANCELED"


def test_cancel_unknown_id_returns_404(client: TestClient) -> None:
    res = client.delete("/api/reservations/12345")
    assert res.status_code == 404
