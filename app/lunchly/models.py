from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def normalize_optional(value: str | None) -> str | None:
    """Falsy input (None, "") is stored as NULL."""
    return value or None


def normalize_text(value: str | None) -> str:
    """Falsy input (None, "") is stored as an empty string, never NULL."""
    return value or ""


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.lunchly.modules.customers.models import Customer  # noqa: E402,F401
from app.lunchly.modules.reservations.models import Reservation  # noqa: E402,F401
