"""
Celery worker entry point.

Start a worker that sends the booking notification emails with:

    celery -A make_celery worker --loglevel INFO

Broker and mail settings come from the same RENTAL_* environment variables
as the web app (e.g. RENTAL_CELERY__broker_url, RENTAL_MAIL_SERVER).
"""

from rental_booking import create_app

flask_app = create_app()
celery_app = flask_app.extensions["celery"]
