"""Confirmation numbers shown to customers."""

import secrets
from typing import Callable

from rental_booking.services.common import utcnow
from rental_booking.utils.constants import CODE_PREFIXES


def _random_suffix() -> str:
    return secrets.token_hex(2).upper()


class ConfirmationCodeGenerator:
    """
    Builds codes like ``UB1780272000000A3F9``: the channel prefix, the creation
    instant in epoch milliseconds, then four random hex characters so that two
    bookings created in the same millisecond still differ.
    """

    def __init__(self, clock: Callable = utcnow, suffix: Callable[[], str] = _random_suffix):
        self._clock = clock
        self._suffix = suffix

    def generate(self, channel: str) -> str:
        try:
            prefix = CODE_PREFIXES[channel]
        except KeyError:
            raise ValueError(f"Unknown booking channel: {channel!r}") from None
        millis = int(self._clock().timestamp() * 1000)
        return f"{prefix}{millis}{self._suffix()}"
