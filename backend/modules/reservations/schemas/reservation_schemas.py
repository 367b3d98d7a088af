# backend/modules/reservations/schemas/reservation_schemas.py

"""
Pydantic schemas for the reservation API.
"""

from pydantic import BaseModel, ConfigDict
from datetime import date, time, datetime
from typing import Optional

from ..models.reservation_models import ReservationStatus


class ReservationPayload(BaseModel):
    """Validated create/edit payload produced by the rule layer"""

    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: date
    reservation_time: time
    people: int
    status: ReservationStatus = ReservationStatus.BOOKED


class ReservationResponse(BaseModel):
    """Schema for reservation response"""

    model_config = ConfigDict(from_attributes=True)

    reservation_id: int
    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: date
    reservation_time: time
    people: int
    status: ReservationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
