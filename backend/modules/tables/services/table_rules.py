# backend/modules/tables/services/table_rules.py

"""
Validation and occupancy rules for tables.
"""

from typing import Any, Dict

from core.exceptions import (
    ConflictStateError,
    InvalidFormatError,
    InvalidRangeError,
    MissingFieldError,
    TerminalStateError,
)
from core.validation import MAX_DB_INTEGER, check_max_length, is_blank
from modules.reservations.models.reservation_models import (
    Reservation,
    ReservationStatus,
)
from ..models.table_models import Table, TableStatus
from ..schemas.table_schemas import TablePayload

MIN_TABLE_NAME_LENGTH = 2
MAX_TABLE_NAME_LENGTH = 50


def coerce_reservation_id(value: Any) -> int:
    """Accept an integer id or its decimal string form"""
    if isinstance(value, bool):
        raise InvalidFormatError(
            "'reservation_id' field must be a number", error_code="INVALID_FIELD"
        )
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        raise InvalidFormatError(
            "'reservation_id' field must be a number", error_code="INVALID_FIELD"
        )
    if value < 1 or value > MAX_DB_INTEGER:
        raise InvalidRangeError(
            f"'reservation_id' field must be between 1 and {MAX_DB_INTEGER}"
        )
    return value


def validate_table_payload(payload: Dict[str, Any]) -> TablePayload:
    """Check a new table's name and capacity"""
    table_name = payload.get("table_name")
    if is_blank(table_name):
        raise MissingFieldError("'table_name' field is empty")
    if not isinstance(table_name, str):
        raise InvalidFormatError(
            "'table_name' field must be a string", error_code="INVALID_FIELD"
        )
    table_name = table_name.strip()
    if len(table_name) < MIN_TABLE_NAME_LENGTH:
        raise InvalidRangeError(
            f"'table_name' field requires at least {MIN_TABLE_NAME_LENGTH} characters",
            error_code="INVALID_LENGTH",
        )
    check_max_length("table_name", table_name, MAX_TABLE_NAME_LENGTH)

    capacity = payload.get("capacity")
    if is_blank(capacity):
        raise MissingFieldError("'capacity' field is empty")
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidFormatError(
            "'capacity' field must be a number", error_code="INVALID_CAPACITY"
        )
    if capacity < 1:
        raise InvalidRangeError(
            "'capacity' field requires at least 1", error_code="INVALID_CAPACITY"
        )
    if capacity > MAX_DB_INTEGER:
        raise InvalidRangeError(
            f"'capacity' field must be at most {MAX_DB_INTEGER}",
            error_code="INVALID_CAPACITY",
        )

    reservation_id = payload.get("reservation_id")
    if reservation_id is not None:
        reservation_id = coerce_reservation_id(reservation_id)

    return TablePayload(
        table_name=table_name,
        capacity=capacity,
        reservation_id=reservation_id,
    )


def validate_seat_request(payload: Dict[str, Any]) -> int:
    """Return the reservation id named in a seat body"""
    reservation_id = payload.get("reservation_id")
    if is_blank(reservation_id):
        raise MissingFieldError("reservation_id field is required in the body")
    return coerce_reservation_id(reservation_id)


def validate_seat_assignment(table: Table, reservation: Reservation) -> None:
    """
    Check that ``reservation`` can be seated at ``table``.

    Order: table already occupied, reservation finished, reservation
    already seated, capacity.
    """
    if table.status == TableStatus.OCCUPIED:
        raise ConflictStateError(
            "The table you selected is currently occupied",
            error_code="TABLE_OCCUPIED",
        )

    if reservation.status == ReservationStatus.FINISHED:
        raise TerminalStateError("a finished reservation cannot be seated")

    if reservation.status == ReservationStatus.SEATED:
        raise ConflictStateError(
            "The reservation you selected is already seated",
            error_code="ALREADY_SEATED",
        )

    if table.capacity < reservation.people:
        raise ConflictStateError(
            f"The table you selected does not have enough capacity to seat "
            f"{reservation.people} people",
            error_code="CAPACITY_EXCEEDED",
        )


def validate_finish(table: Table) -> None:
    if table.status != TableStatus.OCCUPIED:
        raise ConflictStateError(
            "this table is not occupied", error_code="NOT_OCCUPIED"
        )
