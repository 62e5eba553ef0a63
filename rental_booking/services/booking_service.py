"""Booking admission, cancellation and listing."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Union

from rental_booking.exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from rental_booking.models.booking import Booking, GuestContact
from rental_booking.models.store import Store
from rental_booking.services.availability_service import AvailabilityChecker
from rental_booking.services.common import (
    booking_from_dict,
    is_blank,
    is_valid_id,
    parse_date,
    utcnow,
)
from rental_booking.services.confirmation import ConfirmationCodeGenerator
from rental_booking.services.notification_service import NotificationDispatcher
from rental_booking.services.pricing_service import PriceCalculator
from rental_booking.services.user_service import UserService
from rental_booking.services.vehicle_service import VehicleService
from rental_booking.utils.constants import BookingChannel, BookingStatus

logger = logging.getLogger(__name__)

GUEST_FIELDS = ("name", "email", "phone")

Requester = Union[str, dict, GuestContact, None]


class BookingService:
    """
    Turns booking requests into confirmed bookings, and cancels them.

    Admission for one vehicle is serialized by the store's vehicle lock: the
    conflict check, the price, the confirmation code and the insert all happen
    while it is held, so two overlapping requests can never both be confirmed.
    Notifications are handed to the injected dispatcher after the commit and
    cannot change the outcome.
    """

    MAX_CODE_ATTEMPTS = 3

    def __init__(
            self,
            store: Store,
            notifier: Optional[NotificationDispatcher] = None,
            *,
            vehicles: Optional[VehicleService] = None,
            users: Optional[UserService] = None,
            pricing: Optional[PriceCalculator] = None,
            codes: Optional[ConfirmationCodeGenerator] = None,
            clock: Callable = utcnow,
    ):
        self.store = store
        self.notifier = notifier
        self.vehicles = vehicles or VehicleService(store)
        self.users = users or UserService(store)
        self.availability = AvailabilityChecker(store)
        self.pricing = pricing or PriceCalculator()
        self.codes = codes or ConfirmationCodeGenerator(clock=clock)
        self._clock = clock

    # ---------- admission ----------
    def admit(self, channel: str, vehicle_id, start_date, end_date, requester: Requester = None) -> Booking:
        """
        Validate and commit a booking.

        `requester` is the authenticated user id for the user channel, or the
        guest's contact (dict or GuestContact with name/email/phone) for the guest channel.

        Raises:
            ValidationError: missing fields (all listed), bad vehicle id, bad or inverted dates.
            AuthenticationError: user channel without a requester id.
            NotFoundError: the vehicle does not exist.
            ConflictError: the dates overlap a confirmed booking of the vehicle.
        """
        # --- 1. required fields, reported together ---
        missing = [name for name, value in (("vehicleId", vehicle_id),
                                            ("startDate", start_date),
                                            ("endDate", end_date)) if is_blank(value)]
        guest = None
        if channel == BookingChannel.GUEST:
            info = requester.to_dict() if isinstance(requester, GuestContact) else dict(requester or {})
            missing += [f for f in GUEST_FIELDS if is_blank(info.get(f))]
            if not missing:
                guest = GuestContact(*(str(info[f]).strip() for f in GUEST_FIELDS))
        elif channel == BookingChannel.USER:
            if is_blank(requester):
                raise AuthenticationError()
        else:
            raise ValidationError(f"Invalid booking type: {channel!r}")

        if missing:
            logger.info("Booking rejected, missing fields: %s", ", ".join(missing))
            raise ValidationError.missing(missing)

        # --- 2./3. vehicle id format and existence ---
        if not is_valid_id(vehicle_id):
            raise ValidationError("Invalid car ID")
        vehicle = self.vehicles.find_vehicle(vehicle_id)
        if vehicle is None:
            raise NotFoundError("Car not found")

        # --- 4. dates ---
        start, end = self._parse_range(start_date, end_date)

        # --- 5.-7. check, price and commit atomically for this vehicle ---
        with self.store.vehicle_lock(vehicle.vehicle_id):
            if self.availability.has_conflict(vehicle.vehicle_id, start, end):
                logger.info("Booking rejected, %s already booked within %s..%s",
                            vehicle.vehicle_id, start, end)
                raise ConflictError("Car already booked")

            draft = {
                "vehicle_id": vehicle.vehicle_id,
                "user_id": requester if channel == BookingChannel.USER else None,
                "guest": guest.to_dict() if guest else None,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "days": self.pricing.days_between(start, end),
                "rate": vehicle.daily_rate,
                "total_price": self.pricing.price(start, end, vehicle.daily_rate),
                "status": BookingStatus.CONFIRMED,
                "channel": channel,
                "created_at": self._clock().isoformat(),
            }
            booking = booking_from_dict(self._commit(draft))

        logger.info("Booking %s confirmed for vehicle %s (%s..%s, total %.2f)",
                    booking.confirmation_code, booking.vehicle_id,
                    booking.start_date, booking.end_date, booking.total_price)

        # --- 8. fire-and-forget notification ---
        contact = guest.to_dict() if guest else self.users.contact_for(requester)
        self._dispatch(booking, contact)
        return booking

    def admit_user(self, user_id: str, vehicle_id, start_date, end_date) -> Booking:
        return self.admit(BookingChannel.USER, vehicle_id, start_date, end_date, user_id)

    def admit_guest(self, vehicle_id, start_date, end_date, guest_info) -> Booking:
        return self.admit(BookingChannel.GUEST, vehicle_id, start_date, end_date, guest_info)

    @staticmethod
    def _parse_range(start_raw, end_raw) -> tuple[date, date]:
        try:
            start = parse_date(start_raw)
            end = parse_date(end_raw)
        except (TypeError, ValueError):
            raise ValidationError("Invalid dates (YYYY-MM-DD)") from None
        if start >= end:
            raise ValidationError("Invalid date range")
        return start, end

    def _commit(self, draft: dict) -> dict:
        """Insert the draft with a fresh confirmation code, regenerating on collision."""
        for attempt in range(1, self.MAX_CODE_ATTEMPTS + 1):
            draft["confirmation_code"] = self.codes.generate(draft["channel"])
            try:
                return self.store.create_booking(draft)
            except DuplicateError:
                logger.warning("Confirmation code collision (%s), attempt %d",
                               draft["confirmation_code"], attempt)
                if attempt == self.MAX_CODE_ATTEMPTS:
                    raise

    def _dispatch(self, booking: Booking, contact: dict) -> None:
        if self.notifier is None:
            logger.debug("No notifier configured; skipping notifications for %s", booking.confirmation_code)
            return
        try:
            self.notifier.notify(booking, contact)
        except Exception as exc:  # notification failures never fail an admission
            logger.warning("Notification dispatch failed for booking %s (ignored): %s",
                           booking.confirmation_code, exc)

    # ---------- cancellation ----------
    def cancel(self, booking_id: str, requester_id: Optional[str]) -> Booking:
        """
        Cancel one of the requester's own bookings.
        Bookings that do not exist or belong to someone else are both NotFoundError.
        Cancelling an already cancelled booking succeeds again.
        """
        if is_blank(requester_id):
            raise AuthenticationError()
        if not is_valid_id(booking_id):
            raise ValidationError("Invalid booking ID")

        record = self.store.update_booking_status(booking_id, BookingStatus.CANCELLED, owner_id=requester_id)
        if record is None:
            raise NotFoundError("Booking not found")

        booking = booking_from_dict(record)
        logger.info("Booking %s cancelled by %s", booking.confirmation_code, requester_id)
        return booking

    # ---------- queries ----------
    def bookings_for_user(self, user_id: str) -> list[Booking]:
        """The user's bookings, newest first."""
        return [booking_from_dict(b) for b in self.store.bookings_for_user(user_id)]
