from flask import Blueprint, jsonify, current_app

bp = Blueprint("vehicles", __name__, url_prefix="/api/vehicles")


def _vehicles():
    return current_app.extensions["rental_booking"].vehicles


@bp.get("")
def list_vehicles():
    """All vehicles, sorted by brand and model."""
    return jsonify([v.to_dict() for v in _vehicles().all_vehicles()])


@bp.get("/<vid>")
def vehicle_detail(vid):
    """One vehicle plus the date ranges already booked, so clients can block them."""
    svc = _vehicles()
    v = svc.get_vehicle(vid)
    return jsonify({"vehicle": v.to_dict(), "booked": svc.availability_calendar(v.vehicle_id)})
