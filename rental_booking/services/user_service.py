from __future__ import annotations

from typing import Optional

from rental_booking.models.store import Store
from rental_booking.utils.security import generate_hash, check_hash


def public_user(u: dict) -> dict:
    """User dict without the password hash."""
    return {
        "id": u["user_id"],
        "username": u["username"],
        "name": u.get("name", ""),
        "email": u.get("email", ""),
        "phone": u.get("phone", ""),
    }


class UserService:
    """Account registration and credential checks; the source of requester identity."""

    def __init__(self, store: Store):
        self.store = store

    def register(self, username: str, password: str, email: str, name: str = "", phone: str = "") -> dict:
        uid = self.store.create_user(username, generate_hash(password),
                                     email=email, name=name or username, phone=phone)
        return self.store.get_user(uid)

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """Return the user when the password matches, else None."""
        user = self.store.find_user(username)
        if not user or not check_hash(password, user["password_hash"]):
            return None
        return user

    def get_user(self, user_id: str) -> Optional[dict]:
        return self.store.get_user(user_id)

    def contact_for(self, user_id: str) -> dict:
        """Notification contact of a registered user."""
        u = self.store.get_user(user_id) or {}
        return {
            "name": u.get("name") or u.get("username", ""),
            "email": u.get("email", ""),
            "phone": u.get("phone", ""),
        }
