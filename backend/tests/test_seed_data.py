"""Tests for the starter table seed script."""

from sqlalchemy.orm import Session

from modules.tables.models.table_models import Table, TableStatus
from scripts.seed_data import STARTER_TABLES, seed_tables


def test_seed_tables(db_session: Session):
    assert seed_tables(db_session) == len(STARTER_TABLES)

    tables = {t.table_name: t for t in db_session.query(Table).all()}
    assert tables["Bar #1"].capacity == 1
    assert tables["#2"].capacity == 6
    assert all(t.status == TableStatus.FREE for t in tables.values())


def test_seed_tables_is_idempotent(db_session: Session):
    seed_tables(db_session)
    assert seed_tables(db_session) == 0
    assert db_session.query(Table).count() == len(STARTER_TABLES)
