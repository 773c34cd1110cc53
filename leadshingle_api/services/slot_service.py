from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

BOOKING_ZONE = ZoneInfo("America/New_York")

SLOT_DURATION = timedelta(minutes=30)
MIN_MINUTES = 10 * 60  # 10:00
MAX_MINUTES = 15 * 60  # 15:00, inclusive on the start time
LAST_WEEKDAY = 5  # Friday


class RejectionReason(str, Enum):
    INVALID_DATETIME = "Invalid date/time"
    WEEKEND_NOT_ALLOWED = "Weekend not allowed"
    OUTSIDE_ALLOWED_HOURS = "Outside allowed hours"


@dataclass(frozen=True)
class ScheduledInterval:
    start: datetime
    end: datetime

    @property
    def weekday(self) -> int:
        return self.start.isoweekday()


@dataclass(frozen=True)
class SlotDecision:
    interval: ScheduledInterval | None = None
    reason: RejectionReason | None = None

    @property
    def ok(self) -> bool:
        return self.interval is not None


def _parse_civil(date_str: str, time_str: str, zone: ZoneInfo) -> datetime | None:
    """Civil date + time-of-day as an aware datetime in zone, or None if unparseable."""
    try:
        naive = datetime.fromisoformat(f"{date_str}T{time_str}")
    except (TypeError, ValueError):
        return None
    if naive.tzinfo is not None:
        # The zone is fixed; callers may not smuggle in their own offset.
        return None
    return naive.replace(tzinfo=zone)


def validate_slot(date_str: str, time_str: str, zone: ZoneInfo = BOOKING_ZONE) -> SlotDecision:
    """Decide whether a demo can start at date_str/time_str in zone.

    Weekdays only, starting between 10:00 and 15:00 inclusive. A 15:00 start
    is accepted even though it ends at 15:30.
    """
    if not isinstance(date_str, str) or not isinstance(time_str, str):
        return SlotDecision(reason=RejectionReason.INVALID_DATETIME)
    start = _parse_civil(date_str, time_str, zone)
    if start is None:
        return SlotDecision(reason=RejectionReason.INVALID_DATETIME)

    if start.isoweekday() > LAST_WEEKDAY:
        return SlotDecision(reason=RejectionReason.WEEKEND_NOT_ALLOWED)

    minutes = start.hour * 60 + start.minute
    if minutes < MIN_MINUTES or minutes > MAX_MINUTES:
        return SlotDecision(reason=RejectionReason.OUTSIDE_ALLOWED_HOURS)

    return SlotDecision(interval=ScheduledInterval(start=start, end=start + SLOT_DURATION))
