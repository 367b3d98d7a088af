# backend/modules/tables/routes/table_routes.py

from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from core.database import get_db
from core.response_models import DataRequest, DataResponse, StatusData, require_data
from core.validation import MAX_DB_INTEGER
from modules.reservations.models.reservation_models import ReservationStatus
from ..schemas.table_schemas import TableResponse
from ..services import TableService

router = APIRouter(prefix="/tables", tags=["Tables"])


@router.get("", response_model=DataResponse[List[TableResponse]])
def list_tables(db: Session = Depends(get_db)):
    """List every table, ordered by name"""
    tables = TableService(db).list_tables()
    return DataResponse(data=[TableResponse.model_validate(table) for table in tables])


@router.get("/{table_id}", response_model=DataResponse[TableResponse])
def read_table(
    table_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    db: Session = Depends(get_db),
):
    table = TableService(db).read_table(table_id)
    return DataResponse(data=TableResponse.model_validate(table))


@router.post(
    "",
    response_model=DataResponse[TableResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_table(
    body: Optional[DataRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """
    Create a table.

    A ``reservation_id`` in the body seats that reservation right away.
    """
    payload = require_data(body)
    table = TableService(db).create_table(payload)
    return DataResponse(data=TableResponse.model_validate(table))


@router.put("/{table_id}/seat", response_model=DataResponse[StatusData])
def seat_table(
    table_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    body: Optional[DataRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Seat a reservation at a table"""
    payload = require_data(body)
    TableService(db).seat(table_id, payload)
    return DataResponse(data=StatusData(status=ReservationStatus.SEATED.value))


@router.delete("/{table_id}/seat", response_model=DataResponse[StatusData])
def finish_table(
    table_id: int = Path(..., ge=1, le=MAX_DB_INTEGER),
    db: Session = Depends(get_db),
):
    """Free a table and finish the reservation seated there"""
    TableService(db).finish(table_id)
    return DataResponse(data=StatusData(status=ReservationStatus.FINISHED.value))
