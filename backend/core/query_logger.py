# backend/core/query_logger.py

import logging
import time
from typing import Dict, Any
from contextlib import contextmanager
from sqlalchemy import event
from sqlalchemy.engine import Engine
from core.config import get_settings

logger = logging.getLogger("sqlalchemy.engine")
query_logger = logging.getLogger("query_performance")

settings = get_settings()


class QueryLogger:
    """Collects query counts and flags slow statements"""

    def __init__(self, slow_query_threshold: float = None):
        self.slow_query_threshold = (
            slow_query_threshold
            if slow_query_threshold is not None
            else settings.slow_query_threshold_seconds
        )
        self.reset_stats()

    def record(self, statement: str, elapsed: float):
        """Record a finished statement and warn when it was slow"""
        self.query_stats["total_queries"] += 1
        self.query_stats["total_time"] += elapsed

        if elapsed > self.slow_query_threshold:
            self.query_stats["slow_queries"] += 1
            query_logger.warning(
                "SLOW QUERY (%.3fs): %s", elapsed, statement[:200]
            )

    def log_query_stats(self):
        """Log accumulated query statistics"""
        total = self.query_stats["total_queries"]
        query_logger.info(
            "Query statistics: total=%d slow=%d total_time=%.3fs avg=%.3fs",
            total,
            self.query_stats["slow_queries"],
            self.query_stats["total_time"],
            self.query_stats["total_time"] / max(total, 1),
        )

    def reset_stats(self):
        """Reset query statistics"""
        self.query_stats: Dict[str, Any] = {
            "total_queries": 0,
            "slow_queries": 0,
            "total_time": 0.0,
        }


# Singleton instance
query_logger_instance = QueryLogger()


def setup_query_logging(engine: Engine):
    """
    Attach timing hooks (and SQLite pragmas) to an SQLAlchemy engine

    Args:
        engine: SQLAlchemy engine instance
    """

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())
        if settings.log_sql_queries:
            logger.debug("Start Query: %s", statement)

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        elapsed = time.perf_counter() - conn.info["query_start_time"].pop(-1)
        query_logger_instance.record(statement, elapsed)
        if settings.log_sql_queries:
            logger.debug("Query Complete in %.3fs", elapsed)

    if engine.url.get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
            """SQLite leaves foreign key enforcement off by default"""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()


@contextmanager
def log_query_performance(operation_name: str):
    """
    Log how long a block of database work took

    Example:
        with log_query_performance("seat_table"):
            service.seat(table_id, reservation_id)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        query_logger.info("%s completed in %.3fs", operation_name, elapsed)
