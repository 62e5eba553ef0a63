from .availability_service import AvailabilityChecker
from .booking_service import BookingService
from .confirmation import ConfirmationCodeGenerator
from .notification_service import CeleryNotificationDispatcher, NotificationDispatcher
from .pricing_service import PriceCalculator
from .user_service import UserService
from .vehicle_service import VehicleService

__all__ = [
    "AvailabilityChecker",
    "BookingService",
    "CeleryNotificationDispatcher",
    "ConfirmationCodeGenerator",
    "NotificationDispatcher",
    "PriceCalculator",
    "UserService",
    "VehicleService",
]
