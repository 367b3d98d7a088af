"""
Standard API Response Models

Every request and response body travels inside a ``{"data": ...}`` envelope.
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from pydantic import BaseModel, Field

from .exceptions import ValidationError


T = TypeVar('T')


class DataResponse(BaseModel, Generic[T]):
    """
    Response envelope

    Usage:
        return DataResponse(data=ReservationResponse.model_validate(reservation))
    """
    data: T = Field(description="Response payload")


class StatusData(BaseModel):
    """Payload returned by status-changing endpoints"""
    status: str


class DataRequest(BaseModel):
    """
    Request envelope

    ``data`` is kept as a raw mapping: field-level checks belong to the rule
    layer, which reports the first failure with a specific message.
    """
    data: Optional[Dict[str, Any]] = Field(None, description="Request payload")

    def require_data(self) -> Dict[str, Any]:
        if self.data is None:
            raise ValidationError("Body must include a data object", error_code="MISSING_DATA")
        return self.data


def require_data(body: Optional[DataRequest]) -> Dict[str, Any]:
    """Return the payload of ``body`` or fail when the envelope is missing."""
    if body is None:
        raise ValidationError("Body must include a data object", error_code="MISSING_DATA")
    return body.require_data()
