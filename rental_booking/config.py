"""
Default configuration.

`create_app()` loads these first, then any ``RENTAL_*`` environment variables
(``RENTAL_SECRET_KEY``, ``RENTAL_STORE_PATH``, ``RENTAL_MAIL_SERVER`` ...),
then the mapping passed as ``test_config``.
"""

from rental_booking.models.store import DEFAULT_DATA_PATH


class DefaultConfig:
    SECRET_KEY = "dev-secret-change-me"
    STORE_PATH = str(DEFAULT_DATA_PATH)
    LOG_LEVEL = "INFO"

    # Notifications
    COMPANY_NAME = "Jawhat Al Sharq Rent A Car"
    DISPLAY_TIMEZONE = "Asia/Dubai"
    MAIL_SERVER = "smtp.gmail.com"
    MAIL_PORT = 587
    MAIL_USE_TLS = True
    MAIL_USERNAME = ""
    MAIL_PASSWORD = ""
    MAIL_SENDER = ""
    ADMIN_EMAIL = ""
    MAIL_TIMEOUT = 10

    CELERY = {
        "broker_url": "redis://localhost:6379/0",
        "result_backend": "redis://localhost:6379/0",
        "task_ignore_result": True,
        "broker_connection_retry_on_startup": True,
        "broker_connection_timeout": 2,
        "broker_transport_options": {"max_retries": 1},
    }
