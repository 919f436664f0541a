"""
Mail transport abstraction for the contact form: SMTP and in-memory testing.
"""

from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass, field
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

CONTACT_SUBJECT = "Contact Form Submission - Portfolio"

CONTACT_TEMPLATE = """
<h3>Contact Form Details</h3>
<p><strong>Name:</strong> {full_name}</p>
<p><strong>Email:</strong> {email}</p>
<p><strong>Phone:</strong> {phone}</p>
<p><strong>Message:</strong> {message}</p>
"""


@dataclass
class OutgoingMessage:
    sender_name: str
    recipient: str
    subject: str
    html_body: str
    reply_to: Optional[str] = None


class MailTransport(Protocol):
    """Minimal interface for delivering a rendered message."""

    def send(self, message: OutgoingMessage) -> None:
        ...

    def verify(self) -> bool:
        ...


@dataclass
class InMemoryMailTransport:
    """Collects messages instead of sending them."""

    sent: list[OutgoingMessage] = field(default_factory=list)
    fail_with: Optional[Exception] = None

    def send(self, message: OutgoingMessage) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)

    def verify(self) -> bool:
        return self.fail_with is None


@dataclass
class SmtpMailTransport:
    """SMTP transport using STARTTLS and login credentials."""

    host: str
    port: int
    username: str
    password: str
    timeout: float = 10

    def _connect(self) -> smtplib.SMTP:
        client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        client.starttls()
        client.login(self.username, self.password)
        return client

    def send(self, message: OutgoingMessage) -> None:
        mime = MIMEText(message.html_body, "html", "utf-8")
        mime["Subject"] = message.subject
        mime["From"] = formataddr((message.sender_name, self.username))
        mime["To"] = message.recipient
        if message.reply_to:
            mime["Reply-To"] = message.reply_to
        with self._connect() as client:
            client.sendmail(self.username, [message.recipient], mime.as_string())

    def verify(self) -> bool:
        try:
            with self._connect() as client:
                client.noop()
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("Error setting up the email service: %s", e)
            return False
        return True


def render_contact_message(
    *,
    first_name: str,
    last_name: str,
    email: str,
    phone: str,
    message: str,
    recipient: str,
) -> OutgoingMessage:
    """Fill the fixed contact template; missing values render as empty."""
    full_name = f"{first_name or ''} {last_name or ''}".strip()
    body = CONTACT_TEMPLATE.format(
        full_name=html.escape(full_name),
        email=html.escape(email or ""),
        phone=html.escape(phone or ""),
        message=html.escape(message or ""),
    )
    return OutgoingMessage(
        sender_name=full_name,
        recipient=recipient,
        subject=CONTACT_SUBJECT,
        html_body=body,
        reply_to=email or None,
    )


@dataclass
class ContactRelay:
    """Forwards contact-form submissions to a single recipient."""

    transport: MailTransport
    recipient: str

    def send(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        message: str,
    ) -> bool:
        outgoing = render_contact_message(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            message=message,
            recipient=self.recipient,
        )
        try:
            self.transport.send(outgoing)
        except Exception:
            logger.exception("Failed to relay contact message from %r", email)
            return False
        return True
