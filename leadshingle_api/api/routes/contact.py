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
from leadshingle_api.api.schemas.forms import ContactRequest
from leadshingle_api.core.config import Settings
from leadshingle_api.services.contact_service import relay_contact
from leadshingle_api.services.email_service import EmailSender

router = APIRouter(tags=["contact"])


@router.options("/contact")
async def contact_preflight(settings: Settings = Depends(get_settings)) -> Response:
    return preflight_response(settings)


@router.post("/contact")
async def submit_contact(
    request: Request,
    settings: Settings = Depends(get_settings),
    sender: EmailSender | None = Depends(get_email_sender),
) -> Response:
    inquiry = parse_form(ContactRequest, await read_form_body(request))
    sender = require_email_sender(sender)
    await relay_contact(inquiry, get_client_meta(request), settings, sender)
    return json_response(settings)
