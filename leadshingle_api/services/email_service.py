import logging
import smtplib
from dataclasses import dataclass, field
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import parseaddr
from typing import Protocol

import resend

from leadshingle_api.core.config import Settings
from leadshingle_api.core.sanitize import one_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailAttachment:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class OutboundEmail:
    from_email: str
    to: str
    subject: str
    text: str
    html: str
    reply_to: str | None = None
    attachments: list[EmailAttachment] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Header values are single-line.
        self.from_email = one_line(self.from_email)
        self.to = one_line(self.to)
        self.subject = one_line(self.subject)
        if self.reply_to is not None:
            self.reply_to = one_line(self.reply_to)


class EmailSender(Protocol):
    def send(self, message: OutboundEmail) -> None: ...


class ResendEmailSender:
    """Send through the Resend HTTP API."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def send(self, message: OutboundEmail) -> None:
        resend.api_key = self.api_key
        email_data = {
            "from": message.from_email,
            "to": [message.to],
            "subject": message.subject,
            "text": message.text,
            "html": message.html,
        }
        if message.reply_to:
            email_data["reply_to"] = message.reply_to
        if message.attachments:
            email_data["attachments"] = [
                {
                    "filename": a.filename,
                    "content": list(a.content),
                    "content_type": a.content_type,
                }
                for a in message.attachments
            ]
        response = resend.Emails.send(email_data)
        logger.info("Email sent via Resend to %s: %s", message.to, response)


class SmtpEmailSender:
    """Send over SMTP with STARTTLS (blocking)."""

    def __init__(self, host: str, port: int, user: str, password: str) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def build_mime(self, message: OutboundEmail) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["Subject"] = message.subject
        msg["From"] = message.from_email
        msg["To"] = message.to
        if message.reply_to:
            msg["Reply-To"] = message.reply_to
        body = MIMEMultipart("alternative")
        body.attach(MIMEText(message.text, "plain", "utf-8"))
        body.attach(MIMEText(message.html, "html", "utf-8"))
        msg.attach(body)
        for a in message.attachments:
            maintype, _, subtype = a.content_type.partition("/")
            part = MIMEBase(maintype, subtype or "octet-stream")
            part.set_payload(a.content)
            encoders.encode_base64(part)
            part.add_header("Content-Disposition", "attachment", filename=a.filename)
            msg.attach(part)
        return msg

    def send(self, message: OutboundEmail) -> None:
        msg = self.build_mime(message)
        envelope_from = parseaddr(message.from_email)[1] or message.from_email
        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.sendmail(envelope_from, [message.to], msg.as_string())
        logger.info("Email sent via SMTP to %s", message.to)


def build_email_sender(settings: Settings) -> EmailSender | None:
    """Pick the configured transport: Resend first, then SMTP. None if neither is set."""
    if settings.resend_api_key:
        return ResendEmailSender(settings.resend_api_key)
    if settings.smtp_enabled:
        return SmtpEmailSender(
            settings.smtp_host,
            settings.smtp_port,
            settings.smtp_user,
            settings.smtp_password,
        )
    logger.debug("Email disabled (no Resend key and SMTP not configured)")
    return None
