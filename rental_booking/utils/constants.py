# rental_booking/utils/constants.py

"""
Global constants for booking statuses, channels and formats.
These constants are imported by both models and services.
"""

# Date format (used for booking start/end)
DATE_FMT = "%Y-%m-%d"


class BookingStatus:
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingChannel:
    USER = "user"
    GUEST = "guest"


# Confirmation code prefixes, one per channel
CODE_PREFIXES = {
    BookingChannel.USER: "UB",
    BookingChannel.GUEST: "GB",
}
