"""
Slot parsers that pull reservation fields out of free text.

Every parser is total: it never raises, and returns ``None`` when the text
holds nothing it recognises. The dialog engine treats ``None`` as "ask
again", never as an error.

Usage:
    parse_day("this friday please")    # DaySlot(day="Friday", date_label="Friday")
    parse_time("8:30pm")               # "8:30 PM"
    parse_guests("we are 4")           # 4
    parse_phone("call me on 0412 345 678")  # "0412 345 678"
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from src.config import settings

logger = logging.getLogger(__name__)

# Fixed scan order: the first weekday in this list found in the text wins,
# regardless of where it occurs in the text.
DAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

TODAY_LABEL = "Today"
TOMORROW_LABEL = "Tomorrow"

# Hours below this with no am/pm are read as afternoon/evening.
ASSUME_PM_BEFORE_HOUR = 6

_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?", re.IGNORECASE)
_DIGITS_RE = re.compile(r"\d+")
_PHONE_RE = re.compile(
    r"[\d\s\-+()]{%d,}" % settings.dialog.min_phone_length
)


@dataclass(frozen=True)
class DaySlot:
    """A resolved weekday plus the label shown back to the guest."""

    day: str
    date_label: str


def _weekday_name(moment: datetime) -> str:
    # datetime.weekday() counts from Monday; DAYS counts from Sunday.
    return DAYS[(moment.weekday() + 1) % 7].capitalize()


def parse_day(text: str, now: Optional[datetime] = None) -> Optional[DaySlot]:
    """Find a weekday, "today" or "tomorrow" in ``text``."""
    lower = text.lower().strip()

    for day in DAYS:
        if day in lower:
            name = day.capitalize()
            return DaySlot(day=name, date_label=name)

    now = now or datetime.now()
    if "today" in lower:
        return DaySlot(day=_weekday_name(now), date_label=TODAY_LABEL)
    if "tomorrow" in lower:
        return DaySlot(day=_weekday_name(now + timedelta(days=1)), date_label=TOMORROW_LABEL)

    return None


def _clock_time(match: re.Match[str]) -> Optional[str]:
    """Format one time token, or None if it is not a real clock value."""
    hour = int(match.group(1))
    minutes = match.group(2) or "00"
    meridiem = match.group(3).upper() if match.group(3) else None

    if int(minutes) > 59:
        return None
    if meridiem and not 1 <= hour <= 12:
        return None
    if hour > 23:
        return None

    if meridiem == "PM" and hour < 12:
        hour += 12
    if meridiem == "AM" and hour == 12:
        hour = 0
    if meridiem is None and hour < ASSUME_PM_BEFORE_HOUR:
        hour += 12

    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{display_hour}:{minutes} {suffix}"


def parse_time(text: str) -> Optional[str]:
    """
    Parse the first valid ``hour[:minutes][am|pm]`` token into ``H:MM AM|PM``.

    Without a meridiem, hours below 6 are taken as PM ("come at 3" means
    3 PM). Impossible clock values such as "25" or "7:75" are skipped, so
    "the 25th at 7pm" still yields 7 PM.
    """
    for match in _TIME_RE.finditer(text):
        time = _clock_time(match)
        if time is not None:
            return time
        logger.debug("Skipping impossible time token: %r", match.group(0))
    return None


def parse_guests(text: str) -> Optional[int]:
    """Return the first number in ``text`` if it is a valid party size."""
    match = _DIGITS_RE.search(text)
    if not match:
        return None
    guests = int(match.group(0))
    if settings.dialog.min_guests <= guests <= settings.dialog.max_guests:
        return guests
    logger.debug("Guest count out of range: %d", guests)
    return None


def parse_phone(text: str) -> Optional[str]:
    """Return the first phone-like run of digits and separators, trimmed."""
    for match in _PHONE_RE.finditer(text):
        candidate = match.group(0).strip()
        if any(ch.isdigit() for ch in candidate):
            return candidate
    return None


def parse_name(text: str) -> Optional[str]:
    """Accept any name at least ``MIN_NAME_LENGTH`` characters long."""
    name = text.strip()
    if len(name) >= settings.dialog.min_name_length:
        return name
    return None
