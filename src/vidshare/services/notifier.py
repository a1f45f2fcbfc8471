"""Notifiers — out-of-band delivery of verification codes.

Delivery is best-effort.  Callers must treat any exception or a
``False`` result as non-fatal.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage

import aiosmtplib

from vidshare.config import Settings

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Abstract delivery channel for one-time codes."""

    @abstractmethod
    async def deliver(self, destination: str, message: str) -> bool:
        """Send *message* to *destination*.

        Returns ``True`` when the channel accepted the message.  May raise.
        """


class LoggingNotifier(Notifier):
    """Simulated SMS channel: writes the message to the log."""

    async def deliver(self, destination: str, message: str) -> bool:
        logger.info("[SIMULATED SMS] To: %s, Message: %s", destination, message)
        return True


class EmailGatewayNotifier(Notifier):
    """Sends SMS through an email-to-SMS gateway using async SMTP.

    The recipient address is ``<destination>@<sms_gateway_domain>``.
    """

    def __init__(self, config: Settings) -> None:
        self._config = config

    def _build_message(self, destination: str, message: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = f"Your {self._config.app_name} verification code"
        msg["From"] = self._config.email_from
        msg["To"] = f"{destination}@{self._config.sms_gateway_domain}"
        msg.set_content(message)
        msg.add_alternative(f"<strong>{message}</strong>", subtype="html")
        return msg

    async def deliver(self, destination: str, message: str) -> bool:
        msg = self._build_message(destination, message)
        logger.info("Sending SMS (via email) to %s", destination)
        try:
            await aiosmtplib.send(
                msg,
                hostname=self._config.smtp_host,
                port=self._config.smtp_port,
                username=self._config.smtp_username or None,
                password=self._config.smtp_password or None,
                start_tls=self._config.smtp_start_tls,
            )
        except (aiosmtplib.SMTPException, OSError):
            logger.exception("SMS gateway delivery to %s failed", destination)
            logger.info("[FALLBACK SMS] To: %s, Message: %s", destination, message)
            return False

        logger.info("SMS (via email) sent to %s", destination)
        return True


def build_notifier(config: Settings) -> Notifier:
    """Return the gateway notifier when SMTP is configured, else a logger."""
    if config.smtp_host:
        return EmailGatewayNotifier(config)
    logger.warning("SMTP_HOST not set — SMS delivery will be simulated")
    return LoggingNotifier()
