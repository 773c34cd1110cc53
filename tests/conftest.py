import pytest
from fastapi.testclient import TestClient

from leadshingle_api.core.config import Settings
from leadshingle_api.main import create_app


class FakeEmailSender:
    """Records outbound emails; optionally fails on the Nth send (1-based)."""

    def __init__(self, fail_on: int | None = None):
        self.sent = []
        self.fail_on = fail_on
        self.calls = 0

    def send(self, message):
        self.calls += 1
        if self.fail_on is not None and self.calls == self.fail_on:
            raise RuntimeError("smtp exploded: secret-token-123")
        self.sent.append(message)


def make_settings(**overrides) -> Settings:
    values = {
        "resend_api_key": "re_test",
        "allow_origin": "https://leadshingle.com",
        "organizer_email": "demos@leadshingle.com",
        "organizer_name": "LeadShingle Demos",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def sender():
    return FakeEmailSender()


@pytest.fixture
def client(settings, sender):
    return TestClient(create_app(settings=settings, email_sender=sender))


@pytest.fixture
def make_sender():
    return FakeEmailSender


@pytest.fixture
def make_client():
    def _make(sender=None, **overrides):
        return TestClient(create_app(settings=make_settings(**overrides), email_sender=sender))

    return _make


@pytest.fixture
def booking_body():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "company": "Acme Roofing",
        "date": "2025-03-10",
        "time_slot": "10:00",
        "consent": True,
    }


@pytest.fixture
def contact_body():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "company": "Acme Roofing",
        "website": "https://acme.example",
        "service_area": "Boston",
        "message": "Need more leads.\nAsap.",
        "consent": True,
    }
