# backend/modules/tables/models/table_models.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    Enum as SQLEnum,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from enum import Enum

from core.database import Base
from core.mixins import TimestampMixin


class TableStatus(str, Enum):
    """Table occupancy status"""

    FREE = "free"
    OCCUPIED = "occupied"


class Table(Base, TimestampMixin):
    """Restaurant table and the reservation currently seated at it"""

    __tablename__ = "tables"

    table_id = Column(Integer, primary_key=True)
    table_name = Column(String(50), nullable=False)
    capacity = Column(Integer, nullable=False)

    status = Column(
        SQLEnum(
            TableStatus,
            name="table_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        nullable=False,
        default=TableStatus.FREE,
    )

    # Back-reference only; the reservation outlives the seating
    reservation_id = Column(
        Integer, ForeignKey("reservations.reservation_id"), nullable=True
    )

    reservation = relationship("Reservation", back_populates="table")

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="chk_table_capacity"),
        CheckConstraint(
            "(status = 'free' AND reservation_id IS NULL) OR status = 'occupied'",
            name="chk_table_free_unlinked",
        ),
    )

    def __repr__(self):
        return f"<Table {self.table_id} {self.table_name} ({self.status})>"
