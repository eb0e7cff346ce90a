"""
Seed demo customers and reservations.

Idempotent: does nothing when the customers table already has rows.

Usage:
  python scripts/seed_data.py
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.lunchly.modules.customers.models import Customer  # noqa: E402
from app.lunchly.modules.customers.service import save_customer  # noqa: E402
from app.lunchly.modules.reservations.models import Reservation  # noqa: E402
from app.lunchly.modules.reservations.service import save_reservation  # noqa: E402
from scripts._db_utils import resolve_db_url, script_session  # noqa: E402

logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    {"first_name": "Anthony", "last_name": "Gonzales", "phone": "590-813-6478", "notes": "Money voice check many."},
    {"first_name": "Stephanie", "middle_name": "Ann", "last_name": "Sanders", "phone": "(548)605-9963"},
    {"first_name": "Nicole", "last_name": "Wilson", "notes": "Prefers a booth."},
    {"first_name": "Jessica", "last_name": "Walsh", "phone": "001-675-493-8210"},
    {"first_name": "Paul", "middle_name": "J", "last_name": "Davis"},
]

# (customer index, start_at, num_guests, notes)
DEMO_RESERVATIONS = [
    (0, "2026-11-02 18:30", 2, ""),
    (0, "2026-11-09 19:00", 4, "Birthday"),
    (0, "2026-11-16 12:15", 2, ""),
    (1, "2026-11-03 20:00", 6, "Window table"),
    (1, "2026-11-10 18:00", 3, ""),
    (2, "2026-11-05 13:00", 1, ""),
    (4, "2026-11-07 19:45", 8, "Anniversary dinner"),
]


def seed_only(*, database_url: str | None = None) -> int:
    """Insert the demo rows. Returns the number of customers created."""
    db_url = resolve_db_url(database_url)
    with script_session(db_url) as s:
        if s.query(Customer.id).first() is not None:
            logger.info("Customers already present; skipping demo seed.")
            return 0

        customers = [save_customer(s, Customer(**fields)) for fields in DEMO_CUSTOMERS]
        for idx, start_at, num_guests, notes in DEMO_RESERVATIONS:
            save_reservation(
                s,
                Reservation(
                    customer_id=customers[idx].id,
                    start_at=datetime.fromisoformat(start_at),
                    num_guests=num_guests,
                    notes=notes,
                ),
            )
        logger.info("Seeded %d customers and %d reservations.", len(customers), len(DEMO_RESERVATIONS))
        return len(customers)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    created = seed_only()
    print(f"Seed complete ({created} customers created).", flush=True)


if __name__ == "__main__":
    main()
