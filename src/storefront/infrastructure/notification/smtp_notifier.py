"""SMTP implementation of the Notifier port.

Each notification opens its own connection, bounded by ``timeout``.
Transport failures are logged and reported as ``sent=False``.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.utils import make_msgid

from storefront.domain.model.order import Order
from storefront.domain.notifier import NotificationResult, Notifier
from storefront.infrastructure.config import Settings
from storefront.infrastructure.notification.order_email import build_order_email

logger = logging.getLogger(__name__)


class SmtpNotifier(Notifier):

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        recipient: str,
        use_ssl: bool = False,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._recipient = recipient
        self._use_ssl = use_ssl
        self._timeout = timeout
        logger.info(
            "Mail transport configured: host=%s port=%s ssl=%s", host, port, use_ssl
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SmtpNotifier:
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_pass,
            sender=settings.sender,
            recipient=settings.order_notify_to,
            use_ssl=settings.smtp_use_ssl,
            timeout=settings.smtp_timeout,
        )

    @property
    def is_configured(self) -> bool:
        return True

    def notify(self, order: Order) -> NotificationResult:
        message = build_order_email(order, self._sender, self._recipient)
        message["Message-ID"] = make_msgid()
        try:
            with self._connect() as smtp:
                smtp.login(self._username, self._password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Mail send failed for order %s: %s", order.id, exc)
            return NotificationResult(sent=False)

        logger.info("Mail sent for order %s: %s", order.id, message["Message-ID"])
        return NotificationResult(sent=True, message_id=message["Message-ID"])

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self._use_ssl:
            return smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=context
            )
        smtp = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()
        except BaseException:
            smtp.close()
            raise
        return smtp


class NullNotifier(Notifier):
    """Used when no mail transport is configured; never sends."""

    def __init__(self) -> None:
        logger.warning("Mail transport not configured; order emails are disabled")

    @property
    def is_configured(self) -> bool:
        return False

    def notify(self, order: Order) -> NotificationResult:
        return NotificationResult(sent=False)
