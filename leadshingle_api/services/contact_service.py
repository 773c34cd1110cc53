import logging

from starlette.concurrency import run_in_threadpool

from leadshingle_api.api.schemas.forms import ContactRequest
from leadshingle_api.core.config import Settings
from leadshingle_api.core.errors import DispatchError
from leadshingle_api.services.email_service import EmailSender, OutboundEmail
from leadshingle_api.services.email_templates import ClientMeta, render_contact_notification

logger = logging.getLogger(__name__)


async def relay_contact(
    inquiry: ContactRequest,
    meta: ClientMeta,
    settings: Settings,
    sender: EmailSender,
) -> None:
    """Forward a contact-form inquiry to the support inbox; replies go to the requester."""
    rendered = render_contact_notification(
        inquiry.participant,
        website=inquiry.website,
        service_area=inquiry.service_area,
        message=inquiry.message,
        attribution=inquiry.attribution,
        meta=meta,
    )
    message = OutboundEmail(
        from_email=settings.from_email,
        to=settings.contact_destination,
        reply_to=inquiry.email,
        subject=rendered.subject,
        text=rendered.text,
        html=rendered.html,
    )
    try:
        await run_in_threadpool(sender.send, message)
    except Exception as e:
        logger.exception("Contact send failed for %s: %s", inquiry.email, e)
        raise DispatchError() from e
    logger.info("Contact request relayed for %s", inquiry.company)
