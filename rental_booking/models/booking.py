from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class GuestContact:
    """Contact details embedded in a guest-channel booking."""
    name: str
    email: str
    phone: str

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass
class Booking:
    """
    A reservation of one vehicle over [start_date, end_date).
    Exactly one of `user_id` (user channel) and `guest` (guest channel) is set.
    """
    booking_id: str
    vehicle_id: str
    start_date: date
    end_date: date
    total_price: float
    status: str  # "confirmed" | "cancelled"
    channel: str  # "user" | "guest"
    confirmation_code: str
    created_at: str
    user_id: Optional[str] = None
    guest: Optional[GuestContact] = field(default=None)

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    def to_dict(self) -> dict:
        return {
            "id": self.booking_id,
            "vehicleId": self.vehicle_id,
            "user": self.user_id,
            "guestInfo": self.guest.to_dict() if self.guest else None,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalPrice": self.total_price,
            "status": self.status,
            "bookingType": self.channel,
            "confirmationNumber": self.confirmation_code,
            "createdAt": self.created_at,
        }
