# backend/modules/tables/services/table_service.py

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session

from core.database import transaction
from core.exceptions import NotFoundError
from core.query_logger import log_query_performance
from modules.reservations.models.reservation_models import Reservation, ReservationStatus
from modules.reservations.services import ReservationService
from ..models.table_models import Table, TableStatus
from . import table_rules as rules

logger = logging.getLogger(__name__)


class TableService:
    """Service for tables and the seating/finishing of reservations"""

    def __init__(self, db: Session):
        self.db = db
        self.reservation_service = ReservationService(db)

    def list_tables(self) -> List[Table]:
        """All tables, ordered by name"""
        return self.db.query(Table).order_by(Table.table_name.asc(), Table.table_id.asc()).all()

    def get_table(self, table_id: int) -> Optional[Table]:
        return self.db.query(Table).filter_by(table_id=table_id).first()

    def read_table(self, table_id: int) -> Table:
        table = self.get_table(table_id)
        if not table:
            raise NotFoundError(f"table id: {table_id} does not exist")
        return table

    def _read_seating_reservation(self, reservation_id: int) -> Reservation:
        return self.reservation_service.read_reservation(
            reservation_id, message=f"reservation_id: {reservation_id} does not exist"
        )

    def create_table(self, payload: Dict[str, Any]) -> Table:
        """
        Create a table.

        With a ``reservation_id`` the table starts occupied and the
        reservation is marked seated in the same transaction.
        """
        data = rules.validate_table_payload(payload)
        table = Table(
            table_name=data.table_name,
            capacity=data.capacity,
            status=TableStatus.FREE,
        )

        reservation = None
        if data.reservation_id is not None:
            reservation = self._read_seating_reservation(data.reservation_id)
            rules.validate_seat_assignment(table, reservation)

        with transaction(self.db):
            if reservation is not None:
                table.status = TableStatus.OCCUPIED
                table.reservation_id = reservation.reservation_id
                reservation.status = ReservationStatus.SEATED
            self.db.add(table)
        self.db.refresh(table)

        if reservation is not None:
            logger.info(
                f"Created table {table.table_id} ({table.table_name}) seated with "
                f"reservation {reservation.reservation_id}"
            )
        else:
            logger.info(f"Created table {table.table_id} ({table.table_name})")
        return table

    def seat(self, table_id: int, payload: Dict[str, Any]) -> Table:
        """Seat a reservation at a table; both records change together"""
        table = self.read_table(table_id)
        reservation_id = rules.validate_seat_request(payload)
        reservation = self._read_seating_reservation(reservation_id)
        rules.validate_seat_assignment(table, reservation)

        with log_query_performance("seat_table"):
            with transaction(self.db):
                table.status = TableStatus.OCCUPIED
                table.reservation_id = reservation.reservation_id
                self.db.flush()
                reservation.status = ReservationStatus.SEATED

        logger.info(f"Seated reservation {reservation_id} at table {table_id}")
        return table

    def finish(self, table_id: int) -> Table:
        """Free an occupied table and finish its reservation together"""
        table = self.read_table(table_id)
        rules.validate_finish(table)

        reservation_id = table.reservation_id
        with log_query_performance("finish_table"):
            with transaction(self.db):
                if reservation_id is not None:
                    reservation = self.reservation_service.get_reservation(reservation_id)
                    if reservation is not None:
                        reservation.status = ReservationStatus.FINISHED
                        self.db.flush()
                table.reservation_id = None
                table.status = TableStatus.FREE

        logger.info(f"Finished table {table_id} (reservation {reservation_id})")
        return table
