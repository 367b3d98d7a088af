# backend/modules/tables/schemas/table_schemas.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from ..models.table_models import TableStatus


class TablePayload(BaseModel):
    """Validated table creation payload"""

    table_name: str
    capacity: int
    reservation_id: Optional[int] = None


class TableResponse(BaseModel):
    """Table response"""

    model_config = ConfigDict(from_attributes=True)

    table_id: int
    table_name: str
    capacity: int
    status: TableStatus
    reservation_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
