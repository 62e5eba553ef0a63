from functools import wraps

from flask import session, jsonify


def current_user_id():
    """The authenticated requester for this session, if any."""
    return session.get("uid")


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"error": "Please login first"}), 401
        return fn(*args, **kwargs)

    return wrapper
