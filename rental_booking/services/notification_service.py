"""Notification dispatch capabilities injected into BookingService."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, TYPE_CHECKING

from rental_booking.models.booking import Booking

if TYPE_CHECKING:
    from rental_booking.services.vehicle_service import VehicleService  # noqa: F401

logger = logging.getLogger(__name__)


def notification_payload(booking: Booking, car_name: Optional[str] = None) -> dict:
    """JSON-serializable booking snapshot handed to the notification task."""
    payload = booking.to_dict()
    payload["carName"] = car_name
    return payload


class NotificationDispatcher:
    """
    Base dispatcher. `notify()` must return quickly; delivery itself happens elsewhere.
    """

    def notify(self, booking: Booking, contact: dict) -> None:
        raise NotImplementedError


class CeleryNotificationDispatcher(NotificationDispatcher):
    """
    Queue the confirmation emails as a Celery task.
    Publishing to the broker runs on a background thread, so a slow or
    unreachable broker never holds up the caller.
    """

    def __init__(self, vehicles: Optional["VehicleService"] = None, max_workers: int = 2):
        self.vehicles = vehicles
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="notify")

    def notify(self, booking: Booking, contact: dict) -> Future:
        car_name = None
        if self.vehicles is not None:
            v = self.vehicles.find_vehicle(booking.vehicle_id)
            car_name = v.name if v else None

        payload = notification_payload(booking, car_name)
        future = self._executor.submit(self._publish, payload, dict(contact))
        future.add_done_callback(lambda f: self._log_outcome(f, booking.confirmation_code))
        return future

    @staticmethod
    def _publish(payload: dict, contact: dict) -> None:
        from rental_booking.tasks import send_booking_notifications

        send_booking_notifications.apply_async(args=[payload, contact], retry=False)

    @staticmethod
    def _log_outcome(future: Future, code: str) -> None:
        exc = future.exception()
        if exc is not None:
            logger.warning("Could not queue notifications for booking %s (ignored): %s", code, exc)
        else:
            logger.info("Queued notifications for booking %s", code)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
