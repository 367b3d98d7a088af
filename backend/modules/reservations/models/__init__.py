from .reservation_models import Reservation, ReservationStatus

__all__ = [
    "Reservation",
    "ReservationStatus",
]
