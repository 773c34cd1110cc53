import logging

from starlette.concurrency import run_in_threadpool

from leadshingle_api.api.schemas.forms import BookingRequest
from leadshingle_api.core.config import Settings
from leadshingle_api.core.errors import DispatchError, SlotRejectedError
from leadshingle_api.core.sanitize import sanitize
from leadshingle_api.services.email_service import EmailAttachment, EmailSender, OutboundEmail
from leadshingle_api.services.email_templates import (
    ClientMeta,
    render_demo_confirmation,
    render_demo_notification,
)
from leadshingle_api.services.invite_service import (
    ATTACHMENT_CONTENT_TYPE,
    ATTACHMENT_FILENAME,
    Organizer,
    build_invite,
)
from leadshingle_api.services.slot_service import ScheduledInterval, validate_slot

logger = logging.getLogger(__name__)

SCHEDULE_FAILED = "Unable to schedule right now"


async def schedule_demo(
    booking: BookingRequest,
    meta: ClientMeta,
    settings: Settings,
    sender: EmailSender,
) -> ScheduledInterval:
    """Validate the slot, build the invite and email both parties.

    The two sends are sequential and not atomic: if the organizer notification
    fails, the requester confirmation already went out and stays sent.
    """
    decision = validate_slot(booking.date, booking.time_slot)
    if not decision.ok:
        raise SlotRejectedError(decision.reason)
    interval = decision.interval

    organizer = Organizer(name=settings.organizer_name, email=settings.organizer_email)
    invite = build_invite(interval, booking.participant, booking.attribution, organizer)
    attachment = EmailAttachment(
        filename=ATTACHMENT_FILENAME,
        content=invite.to_ical(),
        content_type=ATTACHMENT_CONTENT_TYPE,
    )
    organizer_email = sanitize(settings.organizer_email)

    confirmation = render_demo_confirmation(booking.participant, interval, organizer_email)
    notification = render_demo_notification(booking.participant, interval, booking.attribution, meta)
    sends = [
        (
            "confirmation",
            OutboundEmail(
                from_email=settings.from_email,
                to=booking.email,
                reply_to=organizer_email,
                subject=confirmation.subject,
                text=confirmation.text,
                html=confirmation.html,
                attachments=[attachment],
            ),
        ),
        (
            "organizer_notification",
            OutboundEmail(
                from_email=settings.from_email,
                to=organizer_email,
                reply_to=booking.email,
                subject=notification.subject,
                text=notification.text,
                html=notification.html,
                attachments=[attachment],
            ),
        ),
    ]

    delivered: list[str] = []
    for label, message in sends:
        try:
            await run_in_threadpool(sender.send, message)
        except Exception as e:
            error = DispatchError(SCHEDULE_FAILED, delivered=delivered)
            logger.exception(
                "Demo %s send failed for %s (uid=%s, already delivered: %s): %s",
                label,
                booking.email,
                invite.uid,
                error.delivered or "none",
                e,
            )
            raise error from e
        delivered.append(label)

    logger.info("Demo booked for %s at %s (uid=%s)", booking.company, interval.start.isoformat(), invite.uid)
    return interval
