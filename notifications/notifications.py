# notifications/notifications.py

import logging
from typing import Any, Dict

from fastapi import Request
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from config import Settings

logger = logging.getLogger(__name__)


def render_booking_email(booking: Dict[str, Any]) -> str:
    return (
        "New booking received:\n"
        f"Name: {booking['name']}\n"
        f"Phone: {booking['phone']}\n"
        f"Check-in: {booking['checkin']:%Y-%m-%d}\n"
        f"Check-out: {booking['checkout']:%Y-%m-%d}\n"
        f"Adults: {booking['adults']}\n"
        f"Children: {booking['children']}\n"
        f"Rooms: {booking['rooms']}\n"
        f"Location: {booking['location']}\n"
        f"Total Amount: ₹{booking['totalAmount']:.2f}\n"
    )


class BookingNotifier:
    """Mails the property owner about new bookings. Never raises."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _mailer(self) -> FastMail:
        conf = ConnectionConfig(
            MAIL_USERNAME=self.settings.SMTP_USER,
            MAIL_PASSWORD=self.settings.SMTP_PASS,
            MAIL_FROM=self.settings.SMTP_USER,
            MAIL_PORT=self.settings.SMTP_PORT,
            MAIL_SERVER=self.settings.SMTP_SERVER,
            MAIL_STARTTLS=True,
            MAIL_SSL_TLS=False,
            USE_CREDENTIALS=True,
        )
        return FastMail(conf)

    async def notify(self, booking: Dict[str, Any]) -> None:
        if not self.settings.mail_configured:
            logger.warning("Mail is not configured, skipping notification for booking %s", booking.get("_id"))
            return
        try:
            message = MessageSchema(
                subject=f"New Booking Received - {self.settings.HOTEL_NAME}",
                recipients=[self.settings.OWNER_EMAIL],
                body=render_booking_email(booking),
                subtype=MessageType.plain,
            )
            await self._mailer().send_message(message)
        except Exception:
            logger.exception("Error sending notification email for booking %s", booking.get("_id"))


def get_notifier(request: Request) -> BookingNotifier:
    return request.app.state.notifier
