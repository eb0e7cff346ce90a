"""Tests for Reservations module."""
from datetime import datetime

import pytest

from app.lunchly import create_app
from app.lunchly.db import session_scope
from app.lunchly.errors import InvalidPayload, RecordNotFound
from app.lunchly.models import Base
from app.lunchly.modules.customers.models import Customer
from app.lunchly.modules.customers.service import save_customer
from app.lunchly.modules.reservations.models import Reservation
from app.lunchly.modules.reservations.service import (
    MAX_NUM_GUESTS,
    decode_reservation,
    list_reservations_for_customer,
    parse_start_at,
    save_reservation,
)

CSRF = "test-csrf-token"


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")

    app = create_app()
    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)
    return app


@pytest.fixture()
def customer_id(app):
    with session_scope(app) as s:
        return save_customer(s, Customer(first_name="Jane", last_name="Doe")).id


@pytest.fixture()
def client(app):
    c = app.test_client()
    with c.session_transaction() as sess:
        sess["csrf_token"] = CSRF
    return c


def test_notes_normalized_to_empty_string():
    r = Reservation(customer_id=1, start_at=datetime(2026, 11, 2, 18, 30), num_guests=2, notes=None)
    assert r.notes == ""


def test_formatted_start_at():
    r = Reservation(customer_id=1, start_at=datetime(2026, 11, 2, 18, 30), num_guests=2)
    assert r.formatted_start_at == "November 2 2026, 6:30 PM"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2026-11-02", datetime(2026, 11, 2)),
        ("2026-11-02 18:30", datetime(2026, 11, 2, 18, 30)),
        ("2026-11-02T18:30", datetime(2026, 11, 2, 18, 30)),
        ("2026-11-02T18:30+05:00", datetime(2026, 11, 2, 13, 30)),
        ("2026-11-02T01:00-03:00", datetime(2026, 11, 2, 4, 0)),
        ("", None),
        (None, None),
        ("next tuesday", None),
    ],
)
def test_parse_start_at(raw, expected):
    assert parse_start_at(raw) == expected


def test_decode_reservation():
    r = decode_reservation({"startAt": "2026-11-02T18:30", "numGuests": "4", "notes": ""}, customer_id=3)
    assert r.customer_id == 3
    assert r.num_guests == 4
    assert r.start_at == datetime(2026, 11, 2, 18, 30)
    assert r.notes == ""


def test_decode_reservation_rejects_bad_input():
    with pytest.raises(InvalidPayload) as excinfo:
        decode_reservation({"startAt": "soon", "numGuests": "0"}, customer_id=3)
    assert {e.field for e in excinfo.value.errors} == {"startAt", "numGuests"}


def test_decode_reservation_rejects_non_numeric_guests():
    with pytest.raises(InvalidPayload):
        decode_reservation({"startAt": "2026-11-02", "numGuests": "two"}, customer_id=3)


def test_save_and_list_for_customer(app, customer_id):
    with session_scope(app) as s:
        later = save_reservation(s, Reservation(customer_id=customer_id, start_at=datetime(2026, 12, 1, 19), num_guests=2))
        earlier = save_reservation(s, Reservation(customer_id=customer_id, start_at=datetime(2026, 11, 1, 19), num_guests=5))
        assert later.id is not None and earlier.id is not None

    with session_scope(app) as s:
        rows = list_reservations_for_customer(s, customer_id)
    assert [r.id for r in rows] == [earlier.id, later.id]


def test_list_for_customer_without_reservations(app, customer_id):
    with session_scope(app) as s:
        assert list_reservations_for_customer(s, customer_id) == []


def test_save_with_id_updates(app, customer_id):
    with session_scope(app) as s:
        r = save_reservation(s, Reservation(customer_id=customer_id, start_at=datetime(2026, 11, 1, 19), num_guests=2))
        rid = r.id
    with session_scope(app) as s:
        save_reservation(
            s,
            Reservation(id=rid, customer_id=customer_id, start_at=datetime(2026, 11, 1, 20), num_guests=6, notes="moved"),
        )
    with session_scope(app) as s:
        rows = list_reservations_for_customer(s, customer_id)
    assert len(rows) == 1
    assert (rows[0].num_guests, rows[0].notes, rows[0].start_at.hour) == (6, "moved", 20)


def test_save_with_unknown_id_raises(app, customer_id):
    with session_scope(app) as s:
        with pytest.raises(RecordNotFound):
            save_reservation(s, Reservation(id=77, customer_id=customer_id, start_at=datetime(2026, 11, 1), num_guests=1))


def test_add_reservation_route(client, customer_id):
    r = client.post(
        f"/{customer_id}/add-reservation/",
        data={"startAt": "2026-11-02T18:30", "numGuests": "4", "notes": "Window seat", "csrf_token": CSRF},
    )
    assert r.status_code == 302
    assert r.headers["Location"].endswith(f"/{customer_id}/")

    r = client.get(f"/{customer_id}/")
    assert b"November 2 2026, 6:30 PM" in r.data
    assert b"Window seat" in r.data


def test_add_reservation_bad_guest_count_is_400(client, customer_id):
    r = client.post(
        f"/{customer_id}/add-reservation/",
        data={"startAt": "2026-11-02T18:30", "numGuests": "0", "csrf_token": CSRF},
    )
    assert r.status_code == 400
    assert b"at least one guest" in r.data


def test_add_reservation_huge_guest_count_is_400(client, customer_id):
    r = client.post(
        f"/{customer_id}/add-reservation/",
        data={"startAt": "2026-11-02T18:30", "numGuests": "99999999999999999999", "csrf_token": CSRF},
    )
    assert r.status_code == 400
    assert b"numGuests" in r.data

    r = client.get(f"/{customer_id}/")
    assert b"No reservations." in r.data


def test_decode_reservation_guest_count_upper_bound():
    r = decode_reservation({"startAt": "2026-11-02", "numGuests": str(MAX_NUM_GUESTS)}, customer_id=3)
    assert r.num_guests == MAX_NUM_GUESTS
    with pytest.raises(InvalidPayload) as excinfo:
        decode_reservation({"startAt": "2026-11-02", "numGuests": str(MAX_NUM_GUESTS + 1)}, customer_id=3)
    assert [e.field for e in excinfo.value.errors] == ["numGuests"]


def test_add_reservation_with_offset_is_stored_as_utc(client, customer_id):
    r = client.post(
        f"/{customer_id}/add-reservation/",
        data={"startAt": "2026-11-02T18:30+05:00", "numGuests": "2", "csrf_token": CSRF},
    )
    assert r.status_code == 302

    r = client.get(f"/{customer_id}/")
    assert b"November 2 2026, 1:30 PM" in r.data


def test_add_reservation_for_missing_customer_is_404(client):
    r = client.post(
        "/999/add-reservation/",
        data={"startAt": "2026-11-02T18:30", "numGuests": "2", "csrf_token": CSRF},
    )
    assert r.status_code == 404
