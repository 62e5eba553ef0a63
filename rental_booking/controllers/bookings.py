from flask import Blueprint, request, jsonify, current_app

from ..utils.decorators import login_required, current_user_id

bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


def _services():
    return current_app.extensions["rental_booking"]


def _vehicle_id(data: dict):
    return data.get("carId") or data.get("vehicleId")


def _created(booking):
    """201 body shared by both booking channels."""
    return jsonify({
        "success": True,
        "booking": _with_car(booking),
        "confirmationNumber": booking.confirmation_code,
    }), 201


def _with_car(booking) -> dict:
    out = booking.to_dict()
    v = _services().vehicles.find_vehicle(booking.vehicle_id)
    out["car"] = v.to_dict() if v else None
    return out


@bp.post("")
@login_required
def create_user_booking():
    """Book a vehicle for the logged-in user."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    booking = _services().bookings.admit_user(
        current_user_id(),
        _vehicle_id(data),
        data.get("startDate"),
        data.get("endDate"),
    )
    return _created(booking)


@bp.post("/guest")
def create_guest_booking():
    """Book a vehicle without an account; contact details come in `guestInfo`."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}
    guest_info = data.get("guestInfo")
    if not isinstance(guest_info, dict):
        guest_info = {}
    booking = _services().bookings.admit_guest(
        _vehicle_id(data),
        data.get("startDate"),
        data.get("endDate"),
        guest_info,
    )
    return _created(booking)


@bp.get("/my-bookings")
@login_required
def my_bookings():
    """The current user's bookings, newest first."""
    bookings = _services().bookings.bookings_for_user(current_user_id())
    return jsonify([_with_car(b) for b in bookings])


@bp.put("/<booking_id>/cancel")
@login_required
def cancel_booking(booking_id):
    """Cancel one of the current user's bookings."""
    booking = _services().bookings.cancel(booking_id, current_user_id())
    return jsonify({"success": True, "message": "Booking cancelled", "booking": booking.to_dict()})
