"""Date-range availability checks against confirmed bookings."""

from datetime import date

from rental_booking.models.store import Store
from rental_booking.utils.constants import BookingStatus


class AvailabilityChecker:
    """
    Answers whether a vehicle is free over [start, end).
    The answer is only stable while the caller holds ``store.vehicle_lock(vehicle_id)``.
    """

    def __init__(self, store: Store):
        self.store = store

    def has_conflict(self, vehicle_id: str, start: date, end: date) -> bool:
        hit = self.store.find_conflicting(vehicle_id, BookingStatus.CONFIRMED, start, end)
        return hit is not None

    def booked_ranges(self, vehicle_id: str) -> list[tuple[str, str]]:
        """
        Return (start, end) ISO strings for confirmed bookings of the vehicle.
        Used by clients to disable booked date ranges.
        """
        return [(b["start_date"], b["end_date"])
                for b in self.store.bookings_for_vehicle(vehicle_id, BookingStatus.CONFIRMED)]
