from __future__ import annotations

from typing import List, Optional

from rental_booking.exceptions import NotFoundError, ValidationError
from rental_booking.models.store import Store
from rental_booking.models.vehicle import Vehicle
from rental_booking.services.availability_service import AvailabilityChecker
from rental_booking.services.common import is_valid_id, vehicle_from_dict


class VehicleService:
    """Read-only vehicle catalogue: lookup, listing, booked ranges."""

    def __init__(self, store: Store):
        self.store = store
        self.availability = AvailabilityChecker(store)

    def find_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        """Return the vehicle, or None when the ID is unknown."""
        return vehicle_from_dict(self.store.get_vehicle(vehicle_id))

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        """Return a vehicle by ID or raise ValidationError/NotFoundError."""
        if not is_valid_id(vehicle_id):
            raise ValidationError("Invalid car ID")
        v = self.find_vehicle(vehicle_id)
        if v is None:
            raise NotFoundError("Car not found")
        return v

    def all_vehicles(self) -> List[Vehicle]:
        vehicles = [vehicle_from_dict(d) for d in list(self.store.vehicles.values())]
        vehicles.sort(key=lambda v: (v.brand.lower(), v.model.lower()))
        return vehicles

    def availability_calendar(self, vehicle_id: str) -> list[dict]:
        """Confirmed booked ranges of a vehicle, earliest first."""
        return [{"start": s, "end": e} for (s, e) in self.availability.booked_ranges(vehicle_id)]
