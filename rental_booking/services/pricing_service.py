"""Flat per-day pricing."""

import math
from datetime import date

from rental_booking.services.common import round2

SECONDS_PER_DAY = 24 * 60 * 60


class PriceCalculator:
    """Total price = whole days rented (rounded up) x daily rate."""

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """Rental length in days, rounding any partial day up."""
        return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)

    def price(self, start: date, end: date, daily_rate: float) -> float:
        days = self.days_between(start, end)
        if days <= 0:
            raise ValueError("End date must be after start date")
        if daily_rate < 0:
            raise ValueError("Daily rate must not be negative")
        return round2(days * daily_rate)
