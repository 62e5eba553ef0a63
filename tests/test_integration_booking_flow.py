"""
End-to-end JSON API flow: register -> login -> book -> list -> cancel, plus guest bookings.
"""

import pytest

from conftest import seed_vehicle


def _register(client, username="omar", password="Secret123", email="omar@example.com", **extra):
    return client.post("/api/auth/register",
                       json={"username": username, "password": password, "email": email, **extra})


def _login(client, username="omar", password="Secret123"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def store(app):
    return app.extensions["rental_booking"].store


@pytest.fixture
def car(store):
    return seed_vehicle(store, rate=100.0)


@pytest.fixture
def logged_in(client):
    assert _register(client, phone="+971 50 000 1111").status_code == 201
    assert _login(client).status_code == 200
    return client


def test_user_booking_flow(logged_in, car, app):
    client = logged_in
    r = client.post("/api/bookings", json={"carId": car, "startDate": "2030-06-01", "endDate": "2030-06-04"})
    assert r.status_code == 201
    body = r.get_json()
    assert body["success"] is True
    assert body["confirmationNumber"].startswith("UB")
    assert body["booking"]["totalPrice"] == 300
    assert body["booking"]["car"]["name"] == "Toyota Corolla"
    booking_id = body["booking"]["id"]

    notifier = app.extensions["rental_booking"].bookings.notifier
    assert notifier.sent[0][1]["email"] == "omar@example.com"

    r = client.get("/api/bookings/my-bookings")
    assert r.status_code == 200
    assert [b["id"] for b in r.get_json()] == [booking_id]

    r = client.put(f"/api/bookings/{booking_id}/cancel")
    assert r.status_code == 200
    assert r.get_json()["booking"]["status"] == "cancelled"


def test_conflict_then_cancel_then_rebook(logged_in, car):
    client = logged_in
    a = client.post("/api/bookings", json={"carId": car, "startDate": "2030-06-01", "endDate": "2030-06-04"})
    assert a.status_code == 201

    b = client.post("/api/bookings", json={"carId": car, "startDate": "2030-06-03", "endDate": "2030-06-05"})
    assert b.status_code == 409
    assert b.get_json()["error"] == "Car already booked"

    c = client.post("/api/bookings", json={"carId": car, "startDate": "2030-06-04", "endDate": "2030-06-06"})
    assert c.status_code == 201

    client.put(f"/api/bookings/{a.get_json()['booking']['id']}/cancel")
    b = client.post("/api/bookings", json={"carId": car, "startDate": "2030-06-02", "endDate": "2030-06-04"})
    assert b.status_code == 201


def test_guest_booking(client, car):
    r = client.post("/api/bookings/guest", json={
        "carId": car,
        "startDate": "2030-06-01",
        "endDate": "2030-06-02",
        "guestInfo": {"name": "Sara", "email": "sara@example.com", "phone": "0501234567"},
    })
    assert r.status_code == 201
    body = r.get_json()
    assert body["confirmationNumber"].startswith("GB")
    assert body["booking"]["guestInfo"]["name"] == "Sara"
    assert body["booking"]["user"] is None


def test_guest_missing_phone(client, car):
    r = client.post("/api/bookings/guest", json={
        "carId": car,
        "startDate": "2030-06-01",
        "endDate": "2030-06-02",
        "guestInfo": {"name": "Sara", "email": "sara@example.com"},
    })
    assert r.status_code == 400
    assert r.get_json() == {"error": "Missing fields: phone", "fields": ["phone"]}


def test_guest_empty_body_lists_everything(client):
    r = client.post("/api/bookings/guest", json={})
    assert r.status_code == 400
    assert r.get_json()["fields"] == ["vehicleId", "startDate", "endDate", "name", "email", "phone"]


def test_guest_non_object_body_is_a_validation_error(client):
    r = client.post("/api/bookings/guest", json=["carId", "2030-06-01"])
    assert r.status_code == 400
    assert r.get_json()["fields"] == ["vehicleId", "startDate", "endDate", "name", "email", "phone"]


def test_invalid_and_unknown_car(client):
    info = {"name": "Sara", "email": "sara@example.com", "phone": "0501234567"}
    r = client.post("/api/bookings/guest", json={
        "carId": "abc", "startDate": "2030-06-01", "endDate": "2030-06-02", "guestInfo": info})
    assert r.status_code == 400
    r = client.post("/api/bookings/guest", json={
        "carId": "1b4e28ba-2fa1-41d2-883f-0016d3cca427",
        "startDate": "2030-06-01", "endDate": "2030-06-02", "guestInfo": info})
    assert r.status_code == 404


def test_cannot_cancel_other_users_booking(client, car):
    _register(client, "first", "Secret123", "first@example.com")
    _login(client, "first")
    r = client.post("/api/bookings", json={"vehicleId": car, "startDate": "2030-06-01", "endDate": "2030-06-04"})
    booking_id = r.get_json()["booking"]["id"]
    client.post("/api/auth/logout")

    _register(client, "second", "Secret123", "second@example.com")
    _login(client, "second")
    r = client.put(f"/api/bookings/{booking_id}/cancel")
    assert r.status_code == 404
    assert client.get("/api/bookings/my-bookings").get_json() == []


def test_vehicle_detail_lists_booked_ranges(logged_in, car):
    logged_in.post("/api/bookings", json={"carId": car, "startDate": "2030-06-01", "endDate": "2030-06-04"})
    r = logged_in.get(f"/api/vehicles/{car}")
    assert r.status_code == 200
    body = r.get_json()
    assert body["vehicle"]["dailyRate"] == 100.0
    assert body["booked"] == [{"start": "2030-06-01", "end": "2030-06-04"}]

    assert logged_in.get("/api/vehicles").get_json()[0]["id"] == car
    assert logged_in.get("/api/vehicles/nope").status_code == 400


def test_user_non_object_body_is_a_validation_error(logged_in):
    r = logged_in.post("/api/bookings", json=[])
    assert r.status_code == 400
    assert r.get_json()["fields"] == ["vehicleId", "startDate", "endDate"]
