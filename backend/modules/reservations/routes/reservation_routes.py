# backend/modules/reservations/routes/reservation_routes.py

"""
Reservation API routes.
"""

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from core.database import get_db
from core.response_models import DataRequest, DataResponse, StatusData, require_data
from core.validation import MAX_DB_INTEGER
from ..models.reservation_models import ReservationStatus
from ..schemas.reservation_schemas import ReservationResponse
from ..services import ReservationService

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get("", response_model=DataResponse[List[ReservationResponse]])
def list_reservations(
    reservation_date: Optional[date] = Query(None, alias="date", description="Exact reservation date"),
    mobile_number: Optional[str] = Query(None, description="Mobile number prefix"),
    db: Session = Depends(get_db),
):
    """
    List reservations for a date, or by mobile number prefix.

    Finished reservations are left out of the listing.
    """
    service = ReservationService(db)
    reservations = service.list_reservations(reservation_date, mobile_number)
    return DataResponse(
        data=[
            ReservationResponse.model_validate(reservation)
            for reservation in reservations
            if reservation.status != ReservationStatus.FINISHED
        ]
    )


@router.get("/{reservation_id}", response_model=DataResponse[ReservationResponse])
def read_reservation(
    reservation_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    db: Session = Depends(get_db),
):
    """Get a specific reservation"""
    reservation = ReservationService(db).read_reservation(reservation_id)
    return DataResponse(data=ReservationResponse.model_validate(reservation))


@router.post(
    "",
    response_model=DataResponse[ReservationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(
    body: Optional[DataRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Create a new reservation; it is always stored as booked"""
    payload = require_data(body)
    reservation = ReservationService(db).create_reservation(payload)
    return DataResponse(data=ReservationResponse.model_validate(reservation))


@router.put("/{reservation_id}/status", response_model=DataResponse[StatusData])
def update_reservation_status(
    reservation_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    body: Optional[DataRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Update only the status of a reservation (seat, cancel, finish)"""
    payload = require_data(body)
    new_status = ReservationService(db).update_status(reservation_id, payload)
    return DataResponse(data=StatusData(status=new_status.value))


@router.put("/{reservation_id}", response_model=DataResponse[ReservationResponse])
def edit_reservation(
    reservation_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    body: Optional[DataRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Edit the details of a booked reservation"""
    payload = require_data(body)
    reservation = ReservationService(db).edit_reservation(reservation_id, payload)
    return DataResponse(data=ReservationResponse.model_validate(reservation))
