"""
Pytest configuration file for backend testing.
"""
import os
import sys
from pathlib import Path

# Tests run against an in-memory SQLite database; set before core is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest
from fastapi.testclient import TestClient

from core.database import Base, engine, SessionLocal, get_db

# Import all models to register them with SQLAlchemy
from modules.reservations.models.reservation_models import Reservation  # noqa: E402,F401
from modules.tables.models.table_models import Table  # noqa: E402,F401


@pytest.fixture
def db_session():
    """A session on a freshly created schema, dropped after the test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client whose requests share the test's database session"""
    from app.app_factory import create_app

    app = create_app(run_checks=False)

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
