# backend/modules/reservations/services/reservation_rules.py

"""
Validation rules and status transitions for reservations.

Each check raises on the first failure; nothing is aggregated. The functions
are pure: they work on the raw payload and on records the caller has
already loaded.
"""

import calendar
from datetime import date, datetime, time
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from core.config import Settings, get_settings
from core.exceptions import (
    BusinessRuleViolation,
    ConflictStateError,
    InvalidFormatError,
    InvalidRangeError,
    InvalidStatusError,
    MissingFieldError,
    TerminalStateError,
)
from core.validation import MAX_DB_INTEGER, check_max_length, is_blank
from ..models.reservation_models import Reservation, ReservationStatus
from ..schemas.reservation_schemas import ReservationPayload

REQUIRED_FIELDS = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
)

# Column sizes on the reservations table
TEXT_FIELD_LENGTHS = {
    "first_name": 100,
    "last_name": 100,
    "mobile_number": 30,
}

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def _format_clock(value: time) -> str:
    return value.strftime("%I:%M %p").lstrip("0")


def parse_reservation_datetime(raw_date: Any, raw_time: Any) -> datetime:
    """Parse date and time strings into one naive instant"""
    if not isinstance(raw_date, str) or not isinstance(raw_time, str):
        raise InvalidFormatError(
            "'reservation_date' or 'reservation_time' field is not in correct format",
            error_code="INVALID_DATE_TIME",
        )

    try:
        parsed_date = datetime.strptime(raw_date.strip(), DATE_FORMAT).date()
    except ValueError:
        parsed_date = None

    parsed_time = None
    for fmt in TIME_FORMATS:
        try:
            parsed_time = datetime.strptime(raw_time.strip(), fmt).time()
            break
        except ValueError:
            continue

    if parsed_date is None or parsed_time is None:
        raise InvalidFormatError(
            "'reservation_date' or 'reservation_time' field is not in correct format",
            error_code="INVALID_DATE_TIME",
        )

    return datetime.combine(parsed_date, parsed_time)


def validate_party_size(people: Any) -> int:
    # bool is an int subclass; JSON true must not count as one person
    if isinstance(people, bool) or not isinstance(people, int):
        raise InvalidFormatError(
            "'people' field must be a number", error_code="INVALID_PARTY_SIZE"
        )
    if people < 1:
        raise InvalidRangeError(
            "'people' field must have capacity of at least 1 person",
            error_code="INVALID_PARTY_SIZE",
        )
    if people > MAX_DB_INTEGER:
        raise InvalidRangeError(
            f"'people' field must be at most {MAX_DB_INTEGER}",
            error_code="INVALID_PARTY_SIZE",
        )
    return people


def validate_create_payload(payload: Dict[str, Any]) -> ReservationPayload:
    """
    Check a create/edit payload and return the validated reservation.

    Order: required fields, text type and length, date/time parse, party
    size, client status.
    The returned payload always carries ``booked``.
    """
    for field in REQUIRED_FIELDS:
        if field not in payload or is_blank(payload[field]):
            raise MissingFieldError(f"Field required: '{field}'")

    for field, max_length in TEXT_FIELD_LENGTHS.items():
        if not isinstance(payload[field], str):
            raise InvalidFormatError(
                f"'{field}' field must be a string", error_code="INVALID_FIELD"
            )
        check_max_length(field, payload[field].strip(), max_length)

    instant = parse_reservation_datetime(
        payload["reservation_date"], payload["reservation_time"]
    )
    people = validate_party_size(payload["people"])

    client_status = payload.get("status")
    if not is_blank(client_status) and client_status != ReservationStatus.BOOKED.value:
        raise InvalidStatusError(f"'status' field cannot be {client_status}")

    return ReservationPayload(
        first_name=payload["first_name"].strip(),
        last_name=payload["last_name"].strip(),
        mobile_number=payload["mobile_number"].strip(),
        reservation_date=instant.date(),
        reservation_time=instant.time(),
        people=people,
        status=ReservationStatus.BOOKED,
    )


def last_seating_time(config: Settings) -> time:
    minutes = config.closing_time.hour * 60 + config.closing_time.minute
    minutes = max(minutes - config.last_seating_minutes, 0)
    return time(*divmod(minutes, 60))


def validate_business_rules(
    reservation_date: date,
    reservation_time: time,
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> None:
    """
    Check the reservation instant against opening days and hours.

    Checks run in a fixed order: closed day, in the past, before opening,
    at/after closing, after last seating. ``now`` defaults to the current
    time in the restaurant's timezone; a naive ``now`` is compared with a
    naive instant.
    """
    config = config or get_settings()
    tz = ZoneInfo(config.restaurant_timezone)
    if now is None:
        now = datetime.now(tz)

    instant = datetime.combine(reservation_date, reservation_time)
    if now.tzinfo is not None:
        instant = instant.replace(tzinfo=tz)

    weekday = reservation_date.weekday()
    if weekday in config.closed_weekdays:
        raise BusinessRuleViolation(
            f"'reservation_date' field: restaurant is closed on {calendar.day_name[weekday]}s",
            error_code="CLOSED_DAY",
        )

    if instant <= now:
        raise BusinessRuleViolation(
            "'reservation_date' and 'reservation_time' field must be in the future",
            error_code="IN_THE_PAST",
        )

    if reservation_time < config.opening_time:
        raise BusinessRuleViolation(
            f"'reservation_time' field: restaurant does not open until "
            f"{_format_clock(config.opening_time)}",
            error_code="OUTSIDE_HOURS",
        )

    if reservation_time >= config.closing_time:
        raise BusinessRuleViolation(
            f"'reservation_time' field: restaurant is closed after "
            f"{_format_clock(config.closing_time)}",
            error_code="OUTSIDE_HOURS",
        )

    if reservation_time > last_seating_time(config):
        raise BusinessRuleViolation(
            f"'reservation_time' field: reservation must be made at least "
            f"{config.last_seating_minutes} minutes before "
            f"{_format_clock(config.closing_time)}",
            error_code="OUTSIDE_HOURS",
        )


def validate_status_update(payload: Dict[str, Any]) -> Any:
    """Return the requested status from a status-update body"""
    requested = payload.get("status")
    if is_blank(requested):
        raise MissingFieldError("body must include a status field")
    return requested


def validate_status_transition(
    current: ReservationStatus, requested: Any
) -> ReservationStatus:
    """
    Check a status change requested through the status endpoint.

    Unknown values are rejected first, then anything out of ``finished``,
    then a move back to ``booked`` (only creation sets it).
    """
    try:
        new_status = ReservationStatus(requested)
    except ValueError:
        raise InvalidStatusError(f"'status' field cannot be {requested}")

    if current == ReservationStatus.FINISHED:
        raise TerminalStateError("a finished reservation cannot be updated")

    if new_status == ReservationStatus.BOOKED:
        raise InvalidStatusError("'status' field cannot be set back to booked")

    return new_status


def validate_editable(reservation: Reservation) -> None:
    """Only a reservation that is still booked can be edited"""
    if reservation.status == ReservationStatus.FINISHED:
        raise TerminalStateError("a finished reservation cannot be updated")
    if reservation.status != ReservationStatus.BOOKED:
        raise ConflictStateError(
            f"only booked reservations can be edited; reservation "
            f"{reservation.reservation_id} is {reservation.status.value}",
            error_code="NOT_EDITABLE",
        )
