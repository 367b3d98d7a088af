"""Smoke tests for application startup and configuration."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.app_factory import create_app
from app.startup import StartupValidator, run_startup_checks
from core.config import Settings, validate_production_config
from core.database import Base


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def test_create_app_registers_routes() -> None:
    app = create_app(run_checks=False)
    assert isinstance(app, FastAPI)

    paths = set(app.openapi()["paths"])
    assert {
        "/",
        "/reservations",
        "/reservations/{reservation_id}",
        "/reservations/{reservation_id}/status",
        "/tables",
        "/tables/{table_id}",
        "/tables/{table_id}/seat",
    } <= paths


def test_validator_warns_about_missing_tables(sqlite_engine) -> None:
    validator = StartupValidator(db_engine=sqlite_engine, settings=Settings(database_url="sqlite://"))

    passed, errors, warnings = validator.validate_all()

    assert passed
    assert errors == []
    assert any("reservations" in warning for warning in warnings)


def test_validator_with_migrated_schema(sqlite_engine) -> None:
    Base.metadata.create_all(bind=sqlite_engine)
    validator = StartupValidator(
        db_engine=sqlite_engine,
        settings=Settings(database_url="sqlite://", environment="test"),
    )

    passed, warnings = run_startup_checks(validator)

    assert passed
    assert not any("Missing database tables" in warning for warning in warnings)


def test_validator_rejects_unsafe_production_config(sqlite_engine) -> None:
    settings = Settings(database_url="sqlite://", environment="production", debug=True)
    validator = StartupValidator(db_engine=sqlite_engine, settings=settings)

    assert validator.check_environment_config() is False
    assert "DEBUG is enabled in production" in validator.errors[0]


def test_production_config_checks() -> None:
    with pytest.raises(ValueError):
        validate_production_config(
            Settings(
                environment="production",
                debug=False,
                database_url="postgresql+psycopg2://app@localhost/reservations",
            )
        )

    validate_production_config(
        Settings(
            environment="production",
            debug=False,
            database_url="postgresql+psycopg2://app@db.internal/reservations",
        )
    )


def test_comma_separated_settings(monkeypatch) -> None:
    monkeypatch.setenv("CLOSED_WEEKDAYS", "0, 1")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test,http://b.test")

    settings = Settings()

    assert settings.closed_weekdays == [0, 1]
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_business_hours_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(opening_time="22:00", closing_time="10:00")


def test_closed_weekday_out_of_range() -> None:
    with pytest.raises(ValidationError):
        Settings(closed_weekdays=[7])
