"""
Booking confirmation emails.

One message goes to the customer, one alert goes to the rental desk. Bodies
are Jinja templates rendered outside of any request, so the Celery worker can
send them without a Flask request context.
"""

import logging
import smtplib
from email.message import EmailMessage

from jinja2 import Environment, DictLoader, select_autoescape

from rental_booking.exceptions import NotificationError
from rental_booking.utils.filters import fmt_date, fmt_iso_local, phone_digits

logger = logging.getLogger(__name__)

CUSTOMER_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto;">
  <h2 style="color:#28a745;">Booking Confirmed</h2>
  <p>Dear <strong>{{ contact.name }}</strong>,</p>
  <p>Your car booking has been confirmed. Here are your details:</p>
  <div style="background:#f4f4f4; padding:15px; border-radius:6px;">
    <p><strong>Car:</strong> {{ booking.carName or "N/A" }}</p>
    <p><strong>Pick-up:</strong> {{ booking.startDate | fmt_date }}</p>
    <p><strong>Return:</strong> {{ booking.endDate | fmt_date }}</p>
    <p><strong>Total Price:</strong> AED {{ booking.totalPrice }}</p>
    <p><strong>Confirmation Number:</strong> {{ booking.confirmationNumber }}</p>
    <p><strong>Booked at:</strong> {{ booking.createdAt | fmt_local }}</p>
  </div>
  <h4>Please Bring:</h4>
  <ul>
    <li>Valid Driving License</li>
    <li>Emirates ID / Passport</li>
    <li>Security Deposit: AED 1000 (Refundable)</li>
  </ul>
  <p style="margin-top:20px;">Thank you for choosing <strong>{{ company }}</strong>.</p>
</div>
"""

ADMIN_TEMPLATE = """\
<h2>New Booking Alert</h2>
<p><strong>Car:</strong> {{ booking.carName or "N/A" }}</p>
<p><strong>Booking type:</strong> {{ booking.bookingType }}</p>
<p><strong>Customer:</strong> {{ contact.name }}</p>
<p><strong>Phone:</strong> {{ contact.phone }}</p>
<p><strong>Email:</strong> {{ contact.email }}</p>
<p><strong>Total:</strong> AED {{ booking.totalPrice }}</p>
<p><strong>Dates:</strong> {{ booking.startDate | fmt_date }} &rarr; {{ booking.endDate | fmt_date }}</p>
<p><strong>Confirmation Number:</strong> {{ booking.confirmationNumber }}</p>
<hr />
{% if contact.phone %}
<p><a href="https://wa.me/{{ contact.phone | phone_digits }}">Contact on WhatsApp</a></p>
{% endif %}
"""


def _build_env(tz_name: str) -> Environment:
    env = Environment(
        loader=DictLoader({"customer.html": CUSTOMER_TEMPLATE, "admin.html": ADMIN_TEMPLATE}),
        autoescape=select_autoescape(default=True),
    )
    env.filters["fmt_date"] = fmt_date
    env.filters["fmt_local"] = lambda v: fmt_iso_local(v, tz_name)
    env.filters["phone_digits"] = phone_digits
    return env


class EmailService:
    """SMTP sender for booking confirmations."""

    def __init__(self, server: str, port: int = 587, use_tls: bool = True,
                 username: str = "", password: str = "", sender: str = "",
                 admin_email: str = "", company_name: str = "",
                 timezone: str = "UTC", timeout: float = 10):
        self.server = server
        self.port = int(port)
        self.use_tls = use_tls
        self.username = username
        self.password = password
        self.sender = sender or username
        self.admin_email = admin_email or username
        self.company_name = company_name
        self.timeout = timeout
        self.env = _build_env(timezone)

    @classmethod
    def from_config(cls, config) -> "EmailService":
        return cls(
            server=config.get("MAIL_SERVER", ""),
            port=config.get("MAIL_PORT", 587),
            use_tls=config.get("MAIL_USE_TLS", True),
            username=config.get("MAIL_USERNAME", ""),
            password=config.get("MAIL_PASSWORD", ""),
            sender=config.get("MAIL_SENDER", ""),
            admin_email=config.get("ADMIN_EMAIL", ""),
            company_name=config.get("COMPANY_NAME", ""),
            timezone=config.get("DISPLAY_TIMEZONE", "UTC"),
            timeout=config.get("MAIL_TIMEOUT", 10),
        )

    def customer_email(self, booking: dict, contact: dict) -> EmailMessage:
        car = booking.get("carName") or "Your Car"
        return self._message(
            to=contact["email"],
            subject=f"Booking Confirmed - {car}",
            html=self.env.get_template("customer.html").render(
                booking=booking, contact=contact, company=self.company_name),
        )

    def admin_email_message(self, booking: dict, contact: dict) -> EmailMessage:
        return self._message(
            to=self.admin_email,
            subject="New Booking Received",
            html=self.env.get_template("admin.html").render(booking=booking, contact=contact),
        )

    def send_booking_confirmation(self, booking: dict, contact: dict) -> bool:
        """
        Send the customer confirmation and the admin alert.
        Raises NotificationError when an address is missing; SMTP errors propagate.
        """
        if not contact or not contact.get("email"):
            raise NotificationError("Customer email is missing")
        if not self.admin_email:
            raise NotificationError("Admin email (ADMIN_EMAIL) is not configured")

        logger.info("Sending customer email to %s", contact["email"])
        logger.info("Sending admin email to %s", self.admin_email)
        messages = [
            self.customer_email(booking, contact),
            self.admin_email_message(booking, contact),
        ]
        self._send(messages)
        logger.info("Emails sent for booking %s", booking.get("confirmationNumber"))
        return True

    def _message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f'"{self.company_name}" <{self.sender}>' if self.company_name else self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def _send(self, messages) -> None:
        with smtplib.SMTP(self.server, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            for msg in messages:
                smtp.send_message(msg)
