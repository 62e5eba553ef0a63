import sys, pathlib
from datetime import datetime, timezone, timedelta

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest

from rental_booking.models.store import Store
from rental_booking.services.booking_service import BookingService
from rental_booking.services.notification_service import NotificationDispatcher


class FakeNotifier(NotificationDispatcher):
    """Records every dispatched notification instead of sending it."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def notify(self, booking, contact):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.sent.append((booking, contact))


class StepClock:
    """Deterministic clock: every call moves one second forward."""

    def __init__(self, start=datetime(2030, 5, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def store(tmp_path):
    """A fresh store backed by a temp file."""
    return Store(tmp_path / "data.pkl")


def seed_vehicle(store, rate=100.0, brand="Toyota", model="Corolla"):
    return store.create_vehicle({"brand": brand, "model": model, "type": "car", "rate": rate})


@pytest.fixture
def vehicle_id(store):
    return seed_vehicle(store)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def service(store, notifier):
    return BookingService(store, notifier=notifier, clock=StepClock())


@pytest.fixture
def guest():
    return {"name": "Sara Ali", "email": "sara@example.com", "phone": "+971 50 123 4567"}


@pytest.fixture
def app(tmp_path):
    from rental_booking import create_app
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "STORE_PATH": str(tmp_path / "app-data.pkl"),
        "CELERY": {"task_always_eager": True, "broker_url": "memory://", "task_ignore_result": True},
        "ADMIN_EMAIL": "desk@example.com",
        "MAIL_SENDER": "bookings@example.com",
    })
    app.extensions["rental_booking"].bookings.notifier = FakeNotifier()
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c
