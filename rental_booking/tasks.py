"""Celery setup and background tasks."""

from __future__ import annotations

import logging
import smtplib

from celery import Celery, Task, shared_task
from flask import Flask, current_app

from rental_booking.exceptions import NotificationError
from rental_booking.services.email_service import EmailService

logger = logging.getLogger(__name__)

RETRY_BASE_SECONDS = 30


def celery_init_app(app: Flask) -> Celery:
    """Create the Celery app whose tasks run inside the Flask app context."""

    class FlaskTask(Task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery_app = Celery(app.name, task_cls=FlaskTask)
    celery_app.config_from_object(app.config["CELERY"])
    celery_app.set_default()
    app.extensions["celery"] = celery_app
    return celery_app


@shared_task(bind=True, name="notifications.send_booking_notifications",
             max_retries=3, ignore_result=True)
def send_booking_notifications(self, booking: dict, contact: dict) -> dict:
    """
    Email the customer and the rental desk about a confirmed booking.
    Missing addresses are logged and dropped at once. Delivery failures are
    retried with exponential backoff, then logged and dropped.
    """
    code = booking.get("confirmationNumber")
    try:
        sent = EmailService.from_config(current_app.config).send_booking_confirmation(booking, contact)
    except NotificationError as exc:
        logger.error("Notification for booking %s cannot be sent: %s", code, exc)
        return {"email": False}
    except (smtplib.SMTPException, OSError) as exc:
        if self.request.retries >= self.max_retries:
            logger.error("Notification for booking %s failed permanently: %s", code, exc)
            return {"email": False}
        countdown = RETRY_BASE_SECONDS * (2 ** self.request.retries)
        logger.warning("Notification for booking %s failed (%s); retrying in %ss", code, exc, countdown)
        raise self.retry(exc=exc, countdown=countdown)

    logger.info("Email notification for booking %s: %s", code, "sent" if sent else "failed")
    return {"email": sent}
