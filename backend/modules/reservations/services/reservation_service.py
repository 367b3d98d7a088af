# backend/modules/reservations/services/reservation_service.py

"""
Reservation service: runs the rule layer, then reads or writes the store.
"""

from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Any, Dict, List, Optional
import logging

from core.database import transaction
from core.exceptions import NotFoundError
from ..models.reservation_models import Reservation, ReservationStatus
from . import reservation_rules as rules

logger = logging.getLogger(__name__)


class ReservationService:
    """Service for managing reservations"""

    def __init__(self, db: Session):
        self.db = db

    def list_reservations(
        self,
        reservation_date: Optional[date] = None,
        mobile_number: Optional[str] = None,
    ) -> List[Reservation]:
        """
        List reservations.

        A date wins over a mobile number: rows on that exact date, earliest
        first. Otherwise rows whose mobile number starts with the given
        prefix. Otherwise everything.
        """
        query = self.db.query(Reservation)

        if reservation_date:
            return (
                query.filter(Reservation.reservation_date == reservation_date)
                .order_by(Reservation.reservation_time.asc(), Reservation.reservation_id.asc())
                .all()
            )

        if mobile_number:
            return (
                query.filter(
                    Reservation.mobile_number.startswith(mobile_number, autoescape=True)
                )
                .order_by(Reservation.reservation_id.asc())
                .all()
            )

        return query.order_by(Reservation.reservation_id.asc()).all()

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        """Get a reservation by ID"""
        return self.db.query(Reservation).filter_by(reservation_id=reservation_id).first()

    def read_reservation(self, reservation_id: int, message: Optional[str] = None) -> Reservation:
        """Get a reservation by ID or fail with 404"""
        reservation = self.get_reservation(reservation_id)
        if not reservation:
            raise NotFoundError(
                message or f"reservation id {reservation_id} does not exist"
            )
        return reservation

    def create_reservation(
        self, payload: Dict[str, Any], now: Optional[datetime] = None
    ) -> Reservation:
        """Create a new reservation; the stored status is always booked"""
        data = rules.validate_create_payload(payload)
        rules.validate_business_rules(data.reservation_date, data.reservation_time, now=now)

        reservation = Reservation(**data.model_dump())
        reservation.status = ReservationStatus.BOOKED

        with transaction(self.db):
            self.db.add(reservation)
        self.db.refresh(reservation)

        logger.info(
            f"Created reservation {reservation.reservation_id} for "
            f"{reservation.reservation_date} {reservation.reservation_time} "
            f"(party of {reservation.people})"
        )
        return reservation

    def update_status(self, reservation_id: int, payload: Dict[str, Any]) -> ReservationStatus:
        """Change only the status of a reservation"""
        reservation = self.read_reservation(reservation_id)
        requested = rules.validate_status_update(payload)
        new_status = rules.validate_status_transition(reservation.status, requested)

        previous = reservation.status
        with transaction(self.db):
            reservation.status = new_status

        logger.info(
            f"Reservation {reservation_id} status {previous.value} -> {new_status.value}"
        )
        return new_status

    def edit_reservation(
        self,
        reservation_id: int,
        payload: Dict[str, Any],
        now: Optional[datetime] = None,
    ) -> Reservation:
        """Replace the details of a reservation that is still booked"""
        reservation = self.read_reservation(reservation_id)
        rules.validate_editable(reservation)

        data = rules.validate_create_payload(payload)
        rules.validate_business_rules(data.reservation_date, data.reservation_time, now=now)

        with transaction(self.db):
            for field, value in data.model_dump().items():
                setattr(reservation, field, value)
        self.db.refresh(reservation)

        logger.info(f"Edited reservation {reservation_id}")
        return reservation
