# backend/modules/reservations/models/reservation_models.py

"""
Reservation model and its lifecycle status.
"""

from sqlalchemy import Column, Integer, String, Date, Time, Enum, Index
from sqlalchemy.orm import relationship
import enum

from core.database import Base
from core.mixins import TimestampMixin


class ReservationStatus(str, enum.Enum):
    """Reservation status enum"""
    BOOKED = "booked"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class Reservation(Base, TimestampMixin):
    """A booking for a party at a given date and time"""
    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, index=True)

    # Contact
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    mobile_number = Column(String(30), nullable=False, index=True)

    # Reservation details
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    people = Column(Integer, nullable=False)

    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        nullable=False,
        default=ReservationStatus.BOOKED,
    )

    # Back-reference from the table currently holding this reservation
    table = relationship("Table", back_populates="reservation", uselist=False)

    __table_args__ = (
        Index("idx_reservation_date_time", "reservation_date", "reservation_time"),
    )

    def __repr__(self):
        return (
            f"<Reservation {self.reservation_id} - {self.last_name} "
            f"on {self.reservation_date} at {self.reservation_time} ({self.status})>"
        )
