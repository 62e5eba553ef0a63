import logging
from dataclasses import dataclass

from flask import Flask, jsonify
from flask.logging import default_handler
from werkzeug.exceptions import HTTPException

from .config import DefaultConfig
from .controllers.auth import bp as auth_bp
from .controllers.bookings import bp as bookings_bp
from .controllers.vehicles import bp as vehicles_bp
from .exceptions import BookingError
from .models.store import Store
from .services.booking_service import BookingService
from .services.notification_service import CeleryNotificationDispatcher
from .services.user_service import UserService
from .services.vehicle_service import VehicleService
from .tasks import celery_init_app

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Collaborators shared by the request handlers, kept in app.extensions."""
    store: Store
    vehicles: VehicleService
    users: UserService
    bookings: BookingService


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("RENTAL")
    if test_config:
        app.config.update(test_config)

    package_logger = logging.getLogger("rental_booking")
    package_logger.setLevel(app.config["LOG_LEVEL"])
    if default_handler not in package_logger.handlers:
        package_logger.addHandler(default_handler)

    store = Store(app.config["STORE_PATH"])
    vehicles = VehicleService(store)
    users = UserService(store)
    bookings = BookingService(
        store,
        notifier=CeleryNotificationDispatcher(vehicles),
        vehicles=vehicles,
        users=users,
    )
    app.extensions["rental_booking"] = Services(store, vehicles, users, bookings)
    celery_init_app(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(vehicles_bp)
    app.register_blueprint(bookings_bp)
    register_error_handlers(app)

    @app.get("/")
    def health():
        return jsonify({"status": "ok"})

    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(BookingError)
    def handle_booking_error(err: BookingError):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("Unhandled error: %s", err)
        return jsonify({"error": "Server error"}), 500
