"""
Customer queries and persistence.

Every function takes the SQLAlchemy session first; callers own the commit.
Lookups that come back empty raise instead of returning None so the
route layer never has to translate a missing row.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import func, update

from app.lunchly.errors import FieldError, InvalidPayload, OperationalAlert, RecordNotFound
from app.lunchly.modules.customers.models import Customer
from app.lunchly.modules.reservations.models import Reservation
from app.lunchly.modules.reservations.service import list_reservations_for_customer

logger = logging.getLogger(__name__)

TOP_CUSTOMERS_LIMIT = 10


def decode_customer(form: Mapping[str, Any], *, customer_id: int | None = None) -> Customer:
    """
    Build a Customer from submitted form fields (camelCase keys).
    First and last name must be present; an empty string is accepted.
    """
    errs: list[FieldError] = []
    first_name = form.get("firstName")
    last_name = form.get("lastName")
    if first_name is None:
        errs.append(FieldError("firstName", "Field is missing."))
    if last_name is None:
        errs.append(FieldError("lastName", "Field is missing."))
    if errs:
        raise InvalidPayload(errs)

    return Customer(
        id=customer_id,
        first_name=first_name,
        middle_name=form.get("middleName"),
        last_name=last_name,
        phone=form.get("phone"),
        notes=form.get("notes"),
    )


def list_customers(s) -> list[Customer]:
    return (
        s.query(Customer)
        .order_by(Customer.last_name.asc(), Customer.first_name.asc(), Customer.id.asc())
        .all()
    )


def get_customer(s, customer_id: int) -> Customer:
    c = s.query(Customer).filter(Customer.id == customer_id).one_or_none()
    if c is None:
        raise RecordNotFound(f"No such customer: {customer_id}")
    return c


def search_customers(s, name: str) -> list[Customer]:
    """Case-insensitive substring match on any name part. The term is used as-is, so "" matches everyone."""
    like = f"%{name}%"
    customers = (
        s.query(Customer)
        .filter(
            Customer.first_name.ilike(like)
            | Customer.middle_name.ilike(like)
            | Customer.last_name.ilike(like)
        )
        .order_by(Customer.last_name.asc(), Customer.first_name.asc(), Customer.id.asc())
        .all()
    )
    if not customers:
        raise RecordNotFound(f"No such customer: {name}")
    return customers


def top_customers(s, limit: int = TOP_CUSTOMERS_LIMIT) -> list[Customer]:
    """Customers with the most reservations; equal counts are ordered by customer id."""
    reservation_count = func.count(Reservation.id).label("reservation_count")
    rows = (
        s.query(Customer, reservation_count)
        .join(Reservation, Reservation.customer_id == Customer.id)
        .group_by(Customer.id)
        .order_by(reservation_count.desc(), Customer.id.asc())
        .limit(limit)
        .all()
    )
    if not rows:
        logger.error("Top customers query returned no rows; reservations table may be empty or unreachable")
        raise OperationalAlert("Sorry, we cannot show you this now. ALERT Admin!")
    return [c for c, _count in rows]


def get_customer_reservations(s, customer: Customer) -> list[Reservation]:
    return list_reservations_for_customer(s, customer.id)


def save_customer(s, c: Customer) -> Customer:
    """Insert when the customer has no id yet, otherwise overwrite the stored row (last write wins)."""
    if c.id is None:
        s.add(c)
        s.flush()
        logger.info("Customer created id=%s", c.id)
        return c

    result = s.execute(
        update(Customer)
        .where(Customer.id == c.id)
        .values(
            first_name=c.first_name,
            middle_name=c.middle_name,
            last_name=c.last_name,
            phone=c.phone,
            notes=c.notes,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise RecordNotFound(f"No such customer: {c.id}")
    logger.info("Customer updated id=%s", c.id)
    return c
