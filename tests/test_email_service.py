"""Tests for the email transports and the rendered bodies."""

from email import message_from_string
from unittest.mock import MagicMock, patch

from leadshingle_api.core.config import Settings
from leadshingle_api.services.email_service import (
    EmailAttachment,
    OutboundEmail,
    ResendEmailSender,
    SmtpEmailSender,
    build_email_sender,
)
from leadshingle_api.services.email_templates import fmt_long_date, fmt_time
from leadshingle_api.services.slot_service import validate_slot


def _message(**overrides):
    values = dict(
        from_email="Support <support@leadshingle.com>",
        to="jane@example.com",
        subject="Hello",
        text="plain body",
        html="<p>html body</p>",
        reply_to="demos@leadshingle.com",
        attachments=[EmailAttachment("LeadShingle-Demo.ics", b"BEGIN:VCALENDAR\r\n", "text/calendar")],
    )
    values.update(overrides)
    return OutboundEmail(**values)


class TestBuildEmailSender:
    def test_resend_preferred(self):
        settings = Settings(_env_file=None, resend_api_key="re_x", smtp_host="smtp", smtp_user="u", smtp_password="p")
        assert isinstance(build_email_sender(settings), ResendEmailSender)

    def test_smtp_fallback(self):
        settings = Settings(_env_file=None, resend_api_key="", smtp_host="smtp", smtp_user="u", smtp_password="p")
        assert isinstance(build_email_sender(settings), SmtpEmailSender)

    def test_nothing_configured(self):
        settings = Settings(_env_file=None, resend_api_key="", smtp_host="")
        assert build_email_sender(settings) is None


class TestResendEmailSender:
    def test_payload(self):
        with patch("leadshingle_api.services.email_service.resend") as resend_mod:
            ResendEmailSender("re_key").send(_message())
        assert resend_mod.api_key == "re_key"
        (payload,), _ = resend_mod.Emails.send.call_args
        assert payload["from"] == "Support <support@leadshingle.com>"
        assert payload["to"] == ["jane@example.com"]
        assert payload["reply_to"] == "demos@leadshingle.com"
        (attachment,) = payload["attachments"]
        assert attachment["filename"] == "LeadShingle-Demo.ics"
        assert bytes(attachment["content"]) == b"BEGIN:VCALENDAR\r\n"
        assert attachment["content_type"] == "text/calendar"

    def test_no_optional_keys(self):
        with patch("leadshingle_api.services.email_service.resend") as resend_mod:
            ResendEmailSender("re_key").send(_message(reply_to=None, attachments=[]))
        (payload,), _ = resend_mod.Emails.send.call_args
        assert "reply_to" not in payload
        assert "attachments" not in payload


class TestSmtpEmailSender:
    def test_mime_layout(self):
        sender = SmtpEmailSender("smtp.example.com", 587, "user", "pw")
        parsed = message_from_string(sender.build_mime(_message()).as_string())
        assert parsed["Reply-To"] == "demos@leadshingle.com"
        parts = [p.get_content_type() for p in parsed.walk()]
        assert parts == ["multipart/mixed", "multipart/alternative", "text/plain", "text/html", "text/calendar"]
        ics = [p for p in parsed.walk() if p.get_content_type() == "text/calendar"][0]
        assert ics.get_filename() == "LeadShingle-Demo.ics"
        assert ics.get_payload(decode=True) == b"BEGIN:VCALENDAR\r\n"

    def test_send_uses_starttls_and_bare_envelope_address(self):
        server = MagicMock()
        with patch("leadshingle_api.services.email_service.smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = server
            SmtpEmailSender("smtp.example.com", 587, "user", "pw").send(_message())
        smtp_cls.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("user", "pw")
        envelope_from, recipients, _ = server.sendmail.call_args.args
        assert envelope_from == "support@leadshingle.com"
        assert recipients == ["jane@example.com"]


class TestFormatting:
    def test_times(self):
        interval = validate_slot("2025-03-10", "15:00").interval
        assert fmt_time(interval.start) == "3:00PM"
        assert fmt_time(interval.end) == "3:30PM"
        assert fmt_long_date(interval.start) == "Monday, Mar 10 2025"

    def test_noon(self):
        assert fmt_time(validate_slot("2025-03-10", "12:00").interval.start) == "12:00PM"
