"""
Email rendering and delivery.

``Mailer`` renders a Jinja2 template pair (``<name>.html`` and ``<name>.txt``)
and hands the result to a transport:

- ``SMTPTransport``: any SMTP server, through ``aiosmtplib``.
- ``SendGridTransport``: the SendGrid v3 mail API, through ``httpx``.
- ``NullTransport``: used when no provider is configured; every send fails.

Delivery problems never propagate to callers: ``Mailer.send`` logs them and
returns ``False`` so that a database change is never undone by a failed email.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate
from typing import Any, Dict, Optional, Protocol

import aiosmtplib
import httpx
from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from jinja2.exceptions import TemplateError

from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.server.core.config import SendGridConfig, Settings, SMTPConfig

logger = get_logger(__name__)

SENDER_NAME = "Talanta Art Gallery"


class MailDeliveryError(Exception):
    """Raised by transports when a message could not be handed over."""


@dataclass
class OutgoingEmail:
    """A rendered email ready for delivery."""

    to: str
    subject: str
    html: str
    text: str
    reply_to: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


class MailTransport(Protocol):
    async def deliver(self, email: OutgoingEmail, from_email: str) -> None: ...


class SMTPTransport:
    """Deliver through an SMTP server.

    ``SMTP_SECURE`` selects implicit TLS (usually port 465); otherwise the
    connection is upgraded with STARTTLS when the server offers it.
    """

    def __init__(self, config: SMTPConfig, timeout: float = 30.0) -> None:
        if not config.host:
            raise ValueError("SMTP_HOST is required for SMTP delivery")
        self.config = config
        self.timeout = timeout

    def build_message(self, email: OutgoingEmail, from_email: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = email.subject
        msg["From"] = formataddr((SENDER_NAME, from_email))
        msg["To"] = email.to
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = f"<{uuid.uuid4()}@{from_email.split('@')[-1]}>"
        if email.reply_to:
            msg["Reply-To"] = email.reply_to
        for name, value in email.headers.items():
            msg[name] = value
        msg.attach(MIMEText(email.text, "plain", "utf-8"))
        msg.attach(MIMEText(email.html, "html", "utf-8"))
        return msg

    async def deliver(self, email: OutgoingEmail, from_email: str) -> None:
        message = self.build_message(email, from_email)
        smtp = aiosmtplib.SMTP(
            hostname=self.config.host,
            port=self.config.port,
            use_tls=self.config.secure,
            timeout=self.timeout,
        )
        try:
            async with smtp:
                if self.config.user and self.config.password:
                    await smtp.login(self.config.user, self.config.password)
                await smtp.send_message(message)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"SMTP delivery to {email.to} failed: {e}") from e


class SendGridTransport:
    """Deliver through the SendGrid v3 ``mail/send`` endpoint."""

    def __init__(self, config: SendGridConfig, client: Optional[httpx.AsyncClient] = None) -> None:
        if not config.api_key:
            raise ValueError("SENDGRID_API_KEY is required for SendGrid delivery")
        self.config = config
        self._client = client

    def build_payload(self, email: OutgoingEmail, from_email: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "personalizations": [{"to": [{"email": email.to}]}],
            "from": {"email": from_email, "name": SENDER_NAME},
            "subject": email.subject,
            "content": [
                {"type": "text/plain", "value": email.text},
                {"type": "text/html", "value": email.html},
            ],
        }
        if email.reply_to:
            payload["reply_to"] = {"email": email.reply_to}
        if email.headers:
            payload["headers"] = dict(email.headers)
        return payload

    async def deliver(self, email: OutgoingEmail, from_email: str) -> None:
        url = f"{self.config.base_url.rstrip('/')}/v3/mail/send"
        headers = {"Authorization": f"Bearer {self.config.api_key}"}
        payload = self.build_payload(email, from_email)
        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise MailDeliveryError(f"SendGrid delivery to {email.to} failed: {e}") from e


class NullTransport:
    async def deliver(self, email: OutgoingEmail, from_email: str) -> None:
        raise MailDeliveryError("Email delivery is not configured (set SMTP_HOST or SENDGRID_API_KEY)")


def create_template_environment() -> Environment:
    return Environment(
        loader=PackageLoader("talanta_gallery.notifications", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class Mailer:
    """Render templates and deliver them through a transport.

    Args:
        transport: Delivery backend
        from_email: Sender address
        admin_email: Recipient of admin notifications
        site_url: Public site URL used to build links in emails
    """

    def __init__(
        self,
        transport: MailTransport,
        from_email: str,
        admin_email: str,
        site_url: str,
        environment: Optional[Environment] = None,
    ) -> None:
        self.transport = transport
        self.from_email = from_email
        self.admin_email = admin_email
        self.site_url = site_url.rstrip("/")
        self.environment = environment or create_template_environment()

    def render(self, template: str, context: Dict[str, Any]) -> tuple[str, str]:
        """Render ``<template>.html`` and ``<template>.txt`` with the shared context."""
        full_context = {"site_url": self.site_url, "gallery_name": SENDER_NAME, **context}
        html = self.environment.get_template(f"{template}.html").render(full_context)
        text = self.environment.get_template(f"{template}.txt").render(full_context)
        return html, text

    async def send(
        self,
        to: str,
        subject: str,
        template: str,
        context: Dict[str, Any],
        reply_to: Optional[str] = None,
    ) -> bool:
        """Render and deliver one email.

        Returns:
            True if the transport accepted the message, False otherwise
        """
        try:
            html, text = self.render(template, context)
        except TemplateError as e:
            logger.error(f"Failed to render email template '{template}': {e}", exc_info=True)
            return False

        email = OutgoingEmail(to=to, subject=subject, html=html, text=text, reply_to=reply_to)
        try:
            await self.transport.deliver(email, self.from_email)
        except MailDeliveryError as e:
            logger.error(f"Email '{subject}' to {to} was not sent: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending email '{subject}' to {to}: {e}", exc_info=True)
            return False

        logger.info(f"Email '{subject}' sent to {to}")
        return True


def build_transport(settings: Settings) -> MailTransport:
    """Pick the transport configured by ``MAIL_PROVIDER``."""
    mail = settings.mail
    if mail.provider == "sendgrid":
        sendgrid = settings.sendgrid
        if sendgrid.api_key:
            return SendGridTransport(sendgrid)
        logger.warning("MAIL_PROVIDER=sendgrid but SENDGRID_API_KEY is not set; emails will not be sent")
        return NullTransport()

    smtp = settings.smtp
    if smtp.host:
        return SMTPTransport(smtp)
    logger.warning("SMTP_HOST is not set; emails will not be sent")
    return NullTransport()


def build_mailer(settings: Settings) -> Mailer:
    mail = settings.mail
    return Mailer(
        transport=build_transport(settings),
        from_email=mail.from_email,
        admin_email=mail.admin_email,
        site_url=mail.site_url,
    )

