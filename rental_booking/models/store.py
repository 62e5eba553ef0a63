import logging
import os
import pickle
import threading
import uuid
from contextlib import contextmanager
from datetime import date
from pathlib import Path

from rental_booking.exceptions import DuplicateError

logger = logging.getLogger(__name__)

# ---- Paths ----
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATA_PATH = BASE_DIR / "data.pkl"


class Store:
    """
    Record store for users, vehicles and bookings, persisted to a pickle file.

    Every write runs under one re-entrant lock and is flushed to disk before
    the lock is released. Booking admission additionally holds the per-vehicle
    lock from `vehicle_lock()` across its conflict check and insert, which makes
    check-then-insert atomic for that vehicle.
    """

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path or DEFAULT_DATA_PATH)
        self.users: dict[str, dict] = {}
        self.vehicles: dict[str, dict] = {}
        self.bookings: dict[str, dict] = {}
        self._rw = threading.RLock()
        self._vehicle_locks: dict[str, threading.Lock] = {}

        logger.info("Using store file %s", self.path)
        self._load()

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            logger.warning("Store load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict):
            self.users = data.get("users", {}) or {}
            self.vehicles = data.get("vehicles", {}) or {}
            self.bookings = data.get("bookings", {}) or {}
            logger.info(
                "Loaded store: users=%d, vehicles=%d, bookings=%d",
                len(self.users), len(self.vehicles), len(self.bookings),
            )
        else:
            # Incompatible data format: back up the old file and start empty
            bak = self.path + ".bak"
            os.replace(self.path, bak)
            logger.warning("Incompatible store (%s); backed up to %s. Starting empty.",
                           type(data).__name__, bak)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = self.path + ".tmp"
        payload = {
            "users": self.users,
            "vehicles": self.vehicles,
            "bookings": self.bookings,
        }
        with open(tmp, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            logger.debug("Saving store to %s", self.path)
            self._dump()

    def clear(self):
        """Drop every record and persist the empty store."""
        with self._rw:
            self.users.clear()
            self.vehicles.clear()
            self.bookings.clear()
            self._dump()

    # ---------- Users ----------
    def user_exists(self, username: str) -> bool:
        """Return True if the given username already exists."""
        return any(u["username"] == username for u in self.users.values())

    def find_user(self, username: str) -> dict | None:
        """Find a user by username."""
        for u in self.users.values():
            if u["username"] == username:
                return u
        return None

    def get_user(self, user_id: str) -> dict | None:
        """Get user data by user_id."""
        return self.users.get(user_id)

    def create_user(self, username: str, password_hash: str, **profile) -> str:
        """Create a new user and return its ID."""
        with self._rw:
            if self.user_exists(username):
                raise DuplicateError("Username already exists")
            uid = str(uuid.uuid4())
            self.users[uid] = {
                "user_id": uid,
                "username": username,
                "password_hash": password_hash,
                "email": profile.get("email", ""),
                "name": profile.get("name", ""),
                "phone": profile.get("phone", ""),
            }
            self._dump()
            return uid

    # ---------- Vehicles ----------
    def create_vehicle(self, data: dict) -> str:
        """Create a new vehicle record and return its ID."""
        with self._rw:
            vid = str(uuid.uuid4())
            self.vehicles[vid] = {
                "vehicle_id": vid,
                "brand": data.get("brand", ""),
                "model": data.get("model", ""),
                "type": data.get("type", "car"),
                "rate": float(data.get("rate") or 0),
            }
            self._dump()
            return vid

    def get_vehicle(self, vehicle_id: str) -> dict | None:
        """Get vehicle information by ID."""
        return self.vehicles.get(str(vehicle_id))

    # ---------- Bookings ----------
    @contextmanager
    def vehicle_lock(self, vehicle_id: str):
        """Hold the lock that serializes admissions for one vehicle."""
        with self._rw:
            lock = self._vehicle_locks.setdefault(str(vehicle_id), threading.Lock())
        with lock:
            yield

    def find_conflicting(self, vehicle_id: str, status: str, start: date, end: date) -> dict | None:
        """
        Return a booking of the vehicle in `status` whose range overlaps [start, end).
        Ranges are half-open: a booking ending on day D does not overlap one starting on D.
        """
        with self._rw:
            for b in self.bookings.values():
                if b["vehicle_id"] != vehicle_id or b["status"] != status:
                    continue
                s = date.fromisoformat(b["start_date"])
                e = date.fromisoformat(b["end_date"])
                if start < e and s < end:
                    return b
        return None

    def create_booking(self, draft: dict) -> dict:
        """Insert a booking draft; the confirmation code must not already be in use."""
        with self._rw:
            code = draft["confirmation_code"]
            if any(b["confirmation_code"] == code for b in self.bookings.values()):
                raise DuplicateError(f"Confirmation code {code} already in use")
            bid = str(uuid.uuid4())
            b = dict(draft)
            b["booking_id"] = bid
            self.bookings[bid] = b
            self._dump()
            return dict(b)

    def get_booking(self, booking_id: str) -> dict | None:
        """Get a booking by ID."""
        b = self.bookings.get(booking_id)
        return dict(b) if b else None

    def update_booking_status(self, booking_id: str, status: str, owner_id: str | None = None) -> dict | None:
        """
        Set a booking's status if it exists and, when `owner_id` is given, belongs to that user.
        Returns the updated booking, or None when nothing matched.
        """
        with self._rw:
            b = self.bookings.get(booking_id)
            if not b:
                return None
            if owner_id is not None and b.get("user_id") != owner_id:
                return None
            b["status"] = status
            self._dump()
            return dict(b)

    def bookings_for_user(self, user_id: str) -> list[dict]:
        """All bookings owned by a user, newest first."""
        with self._rw:
            out = [dict(b) for b in self.bookings.values() if b.get("user_id") == user_id]
        out.sort(key=lambda b: b.get("created_at") or "", reverse=True)
        return out

    def bookings_for_vehicle(self, vehicle_id: str, status: str) -> list[dict]:
        """Bookings of a vehicle in the given status, ordered by start date."""
        with self._rw:
            out = [dict(b) for b in self.bookings.values()
                   if b["vehicle_id"] == vehicle_id and b["status"] == status]
        out.sort(key=lambda b: b["start_date"])
        return out
