from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import update

from app.lunchly.errors import FieldError, InvalidPayload, RecordNotFound
from app.lunchly.modules.reservations.models import Reservation

logger = logging.getLogger(__name__)

# Upper bound of the INTEGER num_guests column.
MAX_NUM_GUESTS = 2**31 - 1


def parse_start_at(raw: str | None) -> datetime | None:
    """
    Accepts ISO dates with or without a time part ("2026-10-19", "2026-10-19 18:30", "2026-10-19T18:30").
    Values carrying a UTC offset are converted to naive UTC; start_at is stored without a timezone.
    """
    value = (raw or "").strip()
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def decode_reservation(form: Mapping[str, Any], *, customer_id: int) -> Reservation:
    errs: list[FieldError] = []

    start_at = parse_start_at(form.get("startAt"))
    if start_at is None:
        errs.append(FieldError("startAt", "Not a valid date/time."))

    num_guests: int | None = None
    try:
        num_guests = int(str(form.get("numGuests") or "").strip())
    except ValueError:
        errs.append(FieldError("numGuests", "Number of guests must be a whole number."))
    else:
        if num_guests < 1:
            errs.append(FieldError("numGuests", "A reservation needs at least one guest."))
        elif num_guests > MAX_NUM_GUESTS:
            errs.append(FieldError("numGuests", f"Number of guests cannot exceed {MAX_NUM_GUESTS}."))

    if errs:
        raise InvalidPayload(errs)

    return Reservation(
        customer_id=customer_id,
        start_at=start_at,
        num_guests=num_guests,
        notes=form.get("notes"),
    )


def list_reservations_for_customer(s, customer_id: int) -> list[Reservation]:
    return (
        s.query(Reservation)
        .filter(Reservation.customer_id == customer_id)
        .order_by(Reservation.start_at.asc(), Reservation.id.asc())
        .all()
    )


def save_reservation(s, r: Reservation) -> Reservation:
    if r.id is None:
        s.add(r)
        s.flush()
        logger.info("Reservation created id=%s customer_id=%s", r.id, r.customer_id)
        return r

    result = s.execute(
        update(Reservation)
        .where(Reservation.id == r.id)
        .values(
            customer_id=r.customer_id,
            start_at=r.start_at,
            num_guests=r.num_guests,
            notes=r.notes,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise RecordNotFound(f"No such reservation: {r.id}")
    logger.info("Reservation updated id=%s customer_id=%s", r.id, r.customer_id)
    return r
