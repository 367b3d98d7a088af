# backend/core/validation.py

"""
Shared checks for raw request payloads.
"""

from typing import Any

from .exceptions import InvalidRangeError

# Largest value an INTEGER column holds on PostgreSQL and SQLite alike
MAX_DB_INTEGER = 2**31 - 1


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def check_max_length(
    field: str, value: str, max_length: int, error_code: str = "INVALID_LENGTH"
) -> str:
    """Reject text longer than the column that stores it"""
    if len(value) > max_length:
        raise InvalidRangeError(
            f"'{field}' field must be at most {max_length} characters",
            error_code=error_code,
        )
    return value
