"""
Minimal auth flow: register -> login -> me -> logout, and protected routes.
"""


def _register(client, username, password, email="x@example.com"):
    return client.post("/api/auth/register", json={"username": username, "password": password, "email": email})


def test_register_login_me_logout(client):
    assert _register(client, "alice", "Secret123").status_code == 201
    r = client.post("/api/auth/login", json={"username": "alice", "password": "Secret123"})
    assert r.status_code == 200
    with client.session_transaction() as sess:
        assert sess.get("uid")

    r = client.get("/api/auth/me")
    assert r.status_code == 200
    assert r.get_json()["user"]["username"] == "alice"
    assert "password_hash" not in r.get_json()["user"]

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_register_duplicate_username_fails(client):
    _register(client, "bob", "Secret123")
    r = _register(client, "bob", "Secret456")
    assert r.status_code == 409
    assert "exists" in r.get_json()["error"].lower()


def test_register_weak_password(client):
    r = _register(client, "carl", "pw")
    assert r.status_code == 400


def test_register_missing_fields(client):
    r = client.post("/api/auth/register", json={"username": "dan"})
    assert r.status_code == 400
    assert r.get_json()["fields"] == ["password", "email"]


def test_login_wrong_password(client):
    _register(client, "carl", "Secret123")
    r = client.post("/api/auth/login", json={"username": "carl", "password": "wrong"})
    assert r.status_code == 401
    with client.session_transaction() as sess:
        assert not sess.get("uid")


def test_booking_routes_require_login(client):
    assert client.post("/api/bookings", json={}).status_code == 401
    assert client.get("/api/bookings/my-bookings").status_code == 401
    assert client.put("/api/bookings/1b4e28ba-2fa1-41d2-883f-0016d3cca427/cancel").status_code == 401


def test_non_object_bodies_are_rejected_cleanly(client):
    r = client.post("/api/auth/register", json=[])
    assert r.status_code == 400
    assert r.get_json()["fields"] == ["username", "password", "email"]

    assert client.post("/api/auth/login", json=["alice", "Secret123"]).status_code == 401
