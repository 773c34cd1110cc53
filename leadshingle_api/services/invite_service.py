"""Build the .ics invite attached to demo booking emails."""

import random
import string
from dataclasses import dataclass
from datetime import UTC, datetime

from icalendar import Calendar, Event, vCalAddress, vText

from leadshingle_api.core.sanitize import one_line, sanitize
from leadshingle_api.services.slot_service import ScheduledInterval

UID_DOMAIN = "leadshingle.com"
UID_SUFFIX_LENGTH = 8
PRODID = "-//LeadShingle//Demo//EN"
LOCATION = "Google Meet (link to follow)"
ATTACHMENT_FILENAME = "LeadShingle-Demo.ics"
ATTACHMENT_CONTENT_TYPE = "text/calendar"

_UID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class Participant:
    name: str
    email: str
    phone: str
    company: str


@dataclass(frozen=True)
class Attribution:
    page_url: str = ""
    referrer: str = ""
    utm_source: str = ""
    utm_medium: str = ""
    utm_campaign: str = ""
    utm_term: str = ""
    utm_content: str = ""
    cta: str = ""

    @property
    def utm_line(self) -> str:
        return (
            f"{self.utm_source} / {self.utm_medium} / {self.utm_campaign} "
            f"{self.utm_term} {self.utm_content}"
        )


@dataclass(frozen=True)
class Organizer:
    name: str
    email: str


@dataclass(frozen=True)
class CalendarInvite:
    uid: str
    dtstamp: datetime
    summary: str
    start: datetime
    end: datetime
    organizer: Organizer
    attendee: Participant
    description: str
    location: str = LOCATION

    def to_ical(self) -> bytes:
        cal = Calendar()
        cal.add("version", "2.0")
        cal.add("prodid", PRODID)
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "REQUEST")

        organizer = vCalAddress(f"MAILTO:{self.organizer.email}")
        organizer.params["cn"] = vText(one_line(self.organizer.name))
        attendee = vCalAddress(f"MAILTO:{self.attendee.email}")
        attendee.params["cn"] = vText(one_line(self.attendee.name))
        attendee.params["rsvp"] = "TRUE"

        event = Event()
        event.add("uid", self.uid)
        event.add("dtstamp", self.dtstamp)
        event.add("summary", self.summary)
        event.add("dtstart", self.start)
        event.add("dtend", self.end)
        event.add("organizer", organizer)
        event.add("attendee", attendee)
        event.add("description", self.description)
        event.add("location", self.location)
        cal.add_component(event)
        # Keep insertion order; some clients are picky about the layout.
        return cal.to_ical(sorted=False)


def make_uid(start: datetime) -> str:
    millis = round(start.timestamp() * 1000)
    suffix = "".join(random.choices(_UID_ALPHABET, k=UID_SUFFIX_LENGTH))
    return f"demo-{millis}-{suffix}@{UID_DOMAIN}"


def build_description(participant: Participant, attribution: Attribution) -> str:
    """Event description. Attribution lines are left out when empty."""
    lines = [
        f"Demo for: {participant.company}",
        f"Name: {participant.name}",
        f"Email: {participant.email}",
        f"Phone: {participant.phone}",
    ]
    if attribution.page_url:
        lines.append(f"Page: {attribution.page_url}")
    if attribution.referrer:
        lines.append(f"Referrer: {attribution.referrer}")
    if attribution.cta:
        lines.append(f"CTA: {attribution.cta}")
    if attribution.utm_source or attribution.utm_medium or attribution.utm_campaign:
        lines.append(f"UTM: {attribution.utm_line}")
    return "\n".join(lines)


def build_invite(
    interval: ScheduledInterval,
    participant: Participant,
    attribution: Attribution,
    organizer: Organizer,
    now: datetime | None = None,
) -> CalendarInvite:
    return CalendarInvite(
        uid=make_uid(interval.start),
        dtstamp=(now or datetime.now(UTC)).astimezone(UTC).replace(microsecond=0),
        summary=f"LeadShingle Demo: {participant.company}",
        start=interval.start,
        end=interval.end,
        organizer=Organizer(name=sanitize(organizer.name), email=sanitize(organizer.email)),
        attendee=participant,
        description=build_description(participant, attribution),
    )
