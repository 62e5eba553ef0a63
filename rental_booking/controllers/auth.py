import re

from flask import Blueprint, request, session, jsonify, current_app

from ..exceptions import AuthenticationError, ValidationError
from ..services.user_service import public_user
from ..utils.decorators import login_required, current_user_id

bp = Blueprint("auth", __name__, url_prefix="/api/auth")

# Compile once at module import
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{6,}$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,30}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _users():
    return current_app.extensions["rental_booking"].users


@bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    email = (data.get("email") or "").strip()

    # Basic input validation
    missing = [name for name, value in (("username", username), ("password", password),
                                        ("email", email)) if not value]
    if missing:
        raise ValidationError.missing(missing)

    # Username policy
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Username must be 3-30 chars (letters, digits, ., _, -).")

    # Password policy (server-side enforcement)
    if not PASSWORD_PATTERN.match(password):
        raise ValidationError("Password must have at least 6 characters, including A-Z, a-z, and 0-9.")

    # Extra guard: disallow password equal to username
    if password.lower() == username.lower():
        raise ValidationError("Password cannot be the same as username.")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address.")

    user = _users().register(
        username=username,
        password=password,
        email=email,
        name=(data.get("name") or "").strip(),
        phone=(data.get("phone") or "").strip(),
    )
    return jsonify({"user": public_user(user)}), 201


@bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    user = _users().authenticate((data.get("username") or "").strip(), data.get("password") or "")
    if not user:
        raise AuthenticationError("Invalid credentials")

    session.clear()
    session["uid"] = user["user_id"]
    session["username"] = user["username"]
    return jsonify({"user": public_user(user)})


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"success": True, "message": "Logged out"})


@bp.get("/me")
@login_required
def me():
    user = _users().get_user(current_user_id())
    if not user:
        session.clear()
        raise AuthenticationError("Session user no longer exists")
    return jsonify({"user": public_user(user)})
