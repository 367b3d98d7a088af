"""
Application startup validation.

Checks configuration, database connectivity and the presence of the
reservation tables before the app serves requests.
"""

import logging
import sys
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import get_settings, validate_production_config
from core.database import engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["reservations", "tables"]


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self, db_engine=None, settings=None):
        self.engine = db_engine if db_engine is not None else engine
        self.settings = settings or get_settings()
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_environment_config(self) -> bool:
        """Validate environment configuration"""
        try:
            validate_production_config(self.settings)
        except ValueError as e:
            self.errors.append(f"Configuration validation failed: {str(e)}")
            return False

        if self.settings.is_development and self.settings.database_url.startswith("sqlite"):
            self.warnings.append("Using SQLite - switch to PostgreSQL for deployments")
        return True

    def check_database_connection(self) -> bool:
        """Check database connectivity"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_required_tables(self) -> bool:
        """Warn when the schema has not been migrated yet"""
        try:
            existing_tables = sa.inspect(self.engine).get_table_names()
        except SQLAlchemyError as e:
            self.warnings.append(f"Could not check database tables: {str(e)}")
            return True

        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.warnings.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks(validator: StartupValidator = None):
    """Run all startup validation checks"""
    validator = validator or StartupValidator()
    settings = validator.settings

    logger.info("=" * 60)
    logger.info("Starting reservation backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"  {warning}")
    for error in errors:
        logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning(f"Starting in {settings.environment} mode despite errors")
    else:
        logger.info("All startup checks passed")

    return passed, warnings


def configure_startup_logging():
    """Configure logging for startup"""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
