def test_home(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_unknown_route_is_json(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert "error" in r.get_json()


def test_package_logger_has_a_handler(app):
    import logging
    from flask.logging import default_handler

    logger = logging.getLogger("rental_booking")
    assert default_handler in logger.handlers
    assert logger.level == logging.INFO


def test_worker_entry_point(tmp_path, monkeypatch):
    import importlib
    import sys

    monkeypatch.setenv("RENTAL_STORE_PATH", str(tmp_path / "worker-data.pkl"))
    monkeypatch.delitem(sys.modules, "make_celery", raising=False)
    make_celery = importlib.import_module("make_celery")

    assert make_celery.celery_app is make_celery.flask_app.extensions["celery"]
    assert "notifications.send_booking_notifications" in make_celery.celery_app.tasks
