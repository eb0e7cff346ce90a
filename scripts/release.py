"""
Release-phase helper.

Goal:
- Fail fast if DATABASE_URL is missing (avoid silently using SQLite in prod).
- Run alembic migrations.
- Seed demo data (only into an empty customers table, and never in production).

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _require_env(name: str) -> str:
    v = (os.environ.get(name) or "").strip()
    if not v:
        raise RuntimeError(f"Missing required environment variable {name}.")
    return v


def run_release() -> None:
    _require_env("DATABASE_URL")
    from app.lunchly.config import load_settings

    settings = load_settings()
    db_url = settings.database_url
    env = settings.env.lower()
    # Guardrail: prevent accidental prod deploys against SQLite.
    if env in ("prod", "production") and db_url.startswith("sqlite"):
        raise RuntimeError("Refusing to run release on sqlite DATABASE_URL in production. Set DATABASE_URL to Postgres.")

    print("=== Lunchly release start ===", flush=True)
    print(f"ENV={env or '(unset)'}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)

    if env in ("prod", "production") or (os.environ.get("SKIP_SEED") or "").strip() == "1":
        print("Skipping demo seed.", flush=True)
    else:
        print("Seeding demo data (idempotent)...", flush=True)
        from scripts import seed_data

        seed_data.seed_only(database_url=db_url)
        print("Seed complete.", flush=True)
    print("=== Lunchly release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
