from .reservation_schemas import ReservationPayload, ReservationResponse

__all__ = ["ReservationPayload", "ReservationResponse"]
