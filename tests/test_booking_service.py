"""Tests for the demo booking flow below the HTTP layer."""

import asyncio

import pytest

from leadshingle_api.api.schemas.forms import BookingRequest
from leadshingle_api.core.errors import DispatchError, SlotRejectedError
from leadshingle_api.services.booking_service import schedule_demo
from leadshingle_api.services.email_templates import ClientMeta
from leadshingle_api.services.slot_service import RejectionReason


@pytest.fixture
def booking(booking_body):
    return BookingRequest.model_validate(booking_body)


def test_returns_interval(booking, settings, sender):
    interval = asyncio.run(schedule_demo(booking, ClientMeta(), settings, sender))
    assert (interval.start.hour, interval.end.minute) == (10, 30)
    assert [m.to for m in sender.sent] == ["jane@example.com", "demos@leadshingle.com"]


def test_rejected_slot(booking_body, settings, sender):
    booking = BookingRequest.model_validate({**booking_body, "date": "2025-03-09"})
    with pytest.raises(SlotRejectedError) as exc_info:
        asyncio.run(schedule_demo(booking, ClientMeta(), settings, sender))
    assert exc_info.value.reason == RejectionReason.WEEKEND_NOT_ALLOWED
    assert sender.sent == []


def test_notification_failure_reports_delivered_confirmation(booking, settings, make_sender):
    sender = make_sender(fail_on=2)
    with pytest.raises(DispatchError) as exc_info:
        asyncio.run(schedule_demo(booking, ClientMeta(), settings, sender))
    assert exc_info.value.delivered == ["confirmation"]
    assert exc_info.value.message == "Unable to schedule right now"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_confirmation_failure_reports_nothing_delivered(booking, settings, make_sender):
    with pytest.raises(DispatchError) as exc_info:
        asyncio.run(schedule_demo(booking, ClientMeta(), settings, make_sender(fail_on=1)))
    assert exc_info.value.delivered == []
