"""Shared service helpers and dict -> model mappers."""

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from rental_booking.models.booking import Booking, GuestContact
from rental_booking.models.vehicle import Vehicle


# -------- date & math helpers --------
def parse_date(x) -> date:
    """Coerce any date-like to a naive date (supports 'YYYY-MM-DD' or ISO with T)."""
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if isinstance(x, str):
        base = x.split("T", 1)[0].strip()
        return date.fromisoformat(base)
    raise ValueError(f"Unsupported date: {x!r}")


def utcnow() -> datetime:
    """Wrapper for easier testing/mocking."""
    return datetime.now(timezone.utc)


def round2(x: float) -> float:
    return round(float(x), 2)


def is_blank(value) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


# -------- validators --------
def is_valid_id(value) -> bool:
    """Store IDs are canonical uuid strings."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value
    except ValueError:
        return False


# -------- dict -> rich model mappers --------
def vehicle_from_dict(d: Optional[dict]) -> Optional[Vehicle]:
    """Map a stored vehicle dict to a Vehicle."""
    if not d:
        return None
    return Vehicle(
        vehicle_id=d.get("vehicle_id"),
        brand=d.get("brand") or "",
        model=d.get("model") or "",
        type=(d.get("type") or "car").lower(),
        daily_rate=float(d.get("rate") or 0.0),
    )


def booking_from_dict(d: Optional[dict]) -> Optional[Booking]:
    """Map a stored booking dict to a Booking."""
    if not d:
        return None
    guest = d.get("guest")
    return Booking(
        booking_id=d["booking_id"],
        vehicle_id=d["vehicle_id"],
        start_date=parse_date(d["start_date"]),
        end_date=parse_date(d["end_date"]),
        total_price=float(d.get("total_price") or 0.0),
        status=d["status"],
        channel=d["channel"],
        confirmation_code=d["confirmation_code"],
        created_at=d.get("created_at") or "",
        user_id=d.get("user_id"),
        guest=GuestContact(**guest) if guest else None,
    )
