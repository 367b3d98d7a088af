#!/usr/bin/env python3
"""
Seed the starter tables.

Safe to run more than once: tables that already exist by name are skipped.
Run from backend/: python scripts/seed_data.py
"""

import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import Session

from core.database import SessionLocal, transaction
from modules.reservations.models.reservation_models import Reservation  # noqa: F401
from modules.tables.models.table_models import Table, TableStatus

logger = logging.getLogger(__name__)

STARTER_TABLES = [
    ("Bar #1", 1),
    ("Bar #2", 1),
    ("#1", 6),
    ("#2", 6),
]


def seed_tables(db: Session) -> int:
    """Insert the starter tables that are missing; returns how many were added"""
    existing = {name for (name,) in db.query(Table.table_name).all()}

    added = 0
    with transaction(db):
        for table_name, capacity in STARTER_TABLES:
            if table_name in existing:
                continue
            db.add(Table(table_name=table_name, capacity=capacity, status=TableStatus.FREE))
            added += 1

    logger.info(f"Seeded {added} table(s)")
    return added


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    db = SessionLocal()
    try:
        seed_tables(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
