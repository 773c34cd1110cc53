from fastapi import APIRouter, Depends, Request, Response

from leadshingle_api.api.deps import (
    get_client_meta,
    get_email_sender,
    get_settings,
    parse_form,
    read_form_body,
    require_email_sender,
)
from leadshingle_api.api.responses import json_response, preflight_response
from leadshingle_api.api.schemas.forms import BookingRequest
from leadshingle_api.core.config import Settings
from leadshingle_api.services.booking_service import schedule_demo
from leadshingle_api.services.email_service import EmailSender

router = APIRouter(tags=["demo"])


@router.options("/demo")
async def demo_preflight(settings: Settings = Depends(get_settings)) -> Response:
    return preflight_response(settings)


@router.post("/demo")
async def book_demo(
    request: Request,
    settings: Settings = Depends(get_settings),
    sender: EmailSender | None = Depends(get_email_sender),
) -> Response:
    """Book a 30-minute demo (Mon-Fri, 10:00-15:00 ET) and email the .ics invite to both sides."""
    sender = require_email_sender(sender)
    booking = parse_form(BookingRequest, await read_form_body(request))
    await schedule_demo(booking, get_client_meta(request), settings, sender)
    return json_response(settings)
