"""Plain-text and HTML bodies for the outbound notifications.

User-supplied values are HTML-escaped before they go into the HTML bodies.
"""

from dataclasses import dataclass
from datetime import datetime

from leadshingle_api.core.sanitize import html_escape
from leadshingle_api.services.invite_service import Attribution, Participant
from leadshingle_api.services.slot_service import ScheduledInterval


@dataclass(frozen=True)
class ClientMeta:
    ip: str = ""
    user_agent: str = ""


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def fmt_time(dt: datetime) -> str:
    """10:00AM style, no leading zero on the hour."""
    return f"{dt.hour % 12 or 12}:{dt:%M%p}"


def fmt_long_date(dt: datetime) -> str:
    """Monday, Mar 10 2025"""
    return f"{dt:%A, %b} {dt.day} {dt:%Y}"


def fmt_when(interval: ScheduledInterval) -> str:
    return f"{fmt_long_date(interval.start)} {fmt_time(interval.start)}–{fmt_time(interval.end)}"


def _utm_flat(a: Attribution) -> str:
    return (
        f"source={a.utm_source} medium={a.utm_medium} campaign={a.utm_campaign} "
        f"term={a.utm_term} content={a.utm_content}"
    )


def render_contact_notification(
    participant: Participant,
    website: str,
    service_area: str,
    message: str,
    attribution: Attribution,
    meta: ClientMeta,
) -> RenderedEmail:
    subject = f"Custom Lead Strategy Request: {participant.company}"
    text = "\n".join(
        [
            "Custom Lead Strategy Request",
            "",
            f"Name: {participant.name}",
            f"Email: {participant.email}",
            f"Phone: {participant.phone}",
            f"Company: {participant.company}",
            f"Website: {website}",
            f"Service Area: {service_area}",
            "",
            "Message:",
            message,
            "",
            "Attribution:",
            f"Page: {attribution.page_url}",
            f"Referrer: {attribution.referrer}",
            f"CTA: {attribution.cta}",
            f"UTM: {_utm_flat(attribution)}",
            "",
            f"Meta: IP={meta.ip} UA={meta.user_agent}",
        ]
    )
    e = html_escape
    message_html = e(message or "-").replace("\n", "<br/>")
    html = f"""
<h2>Custom Lead Strategy Request</h2>
<p><b>Name:</b> {e(participant.name)}<br/>
   <b>Email:</b> {e(participant.email)}<br/>
   <b>Phone:</b> {e(participant.phone)}</p>
<p><b>Company:</b> {e(participant.company)}<br/>
   <b>Website:</b> {e(website)}<br/>
   <b>Service Area:</b> {e(service_area)}</p>
<p><b>Message:</b><br/>{message_html}</p>
<hr/>
<p style="font-size:12px;color:#6b7280">
  Page: {e(attribution.page_url)}<br/>
  Referrer: {e(attribution.referrer)}<br/>
  CTA: {e(attribution.cta)}<br/>
  UTM: {e(_utm_flat(attribution))}<br/>
  IP: {e(meta.ip)} &middot; UA: {e(meta.user_agent)}
</p>
"""
    return RenderedEmail(subject=subject, text=text, html=html)


def render_demo_confirmation(
    participant: Participant,
    interval: ScheduledInterval,
    organizer_email: str,
) -> RenderedEmail:
    """Confirmation sent to the person who booked."""
    start = interval.start
    subject = f"You're booked: LeadShingle Demo on {start:%a, %b} {start.day} @ {fmt_time(start)} ET"
    text = "\n".join(
        [
            f"Thanks, {participant.name}! Your demo is scheduled.",
            f"Date/Time (ET): {fmt_when(interval)}",
            f"Company: {participant.company}",
            "",
            "Add this to your calendar with the attached invite.",
            "",
            f"If you need changes: {organizer_email}",
        ]
    )
    e = html_escape
    html = f"""
<p>Thanks, <b>{e(participant.name)}</b>! Your demo is scheduled.</p>
<p><b>Date/Time (ET):</b> {fmt_when(interval)}</p>
<p><b>Company:</b> {e(participant.company)}</p>
<p>Add this to your calendar using the attached invite.<br/>
If you need changes, reply to this email.</p>
"""
    return RenderedEmail(subject=subject, text=text, html=html)


def render_demo_notification(
    participant: Participant,
    interval: ScheduledInterval,
    attribution: Attribution,
    meta: ClientMeta,
) -> RenderedEmail:
    """Notification sent to the organizer inbox."""
    start = interval.start
    a = attribution
    subject = (
        f"New Demo Booked: {participant.company} "
        f"({start:%a %b} {start.day} {fmt_time(start)} ET)"
    )
    text = "\n".join(
        [
            "Demo booked",
            f"Name: {participant.name}  Email: {participant.email}  Phone: {participant.phone}",
            f"Company: {participant.company}",
            f"When (ET): {fmt_when(interval)}",
            "",
            f"Page: {a.page_url}  Referrer: {a.referrer}  CTA: {a.cta}",
            f"UTM: {a.utm_line}",
            f"IP: {meta.ip}  UA: {meta.user_agent}",
        ]
    )
    e = html_escape
    html = f"""
<h3>New Demo Booked</h3>
<p><b>Name:</b> {e(participant.name)} &nbsp; <b>Email:</b> {e(participant.email)} &nbsp; <b>Phone:</b> {e(participant.phone)}</p>
<p><b>Company:</b> {e(participant.company)}</p>
<p><b>When (ET):</b> {fmt_when(interval)}</p>
<p><b>Page:</b> {e(a.page_url)} &nbsp; <b>Referrer:</b> {e(a.referrer)} &nbsp; <b>CTA:</b> {e(a.cta)}</p>
<p><b>UTM:</b> {e(a.utm_line)}</p>
"""
    return RenderedEmail(subject=subject, text=text, html=html)
