"""
Mock table availability system.

In production, this would integrate with OpenTable, SevenRooms, Resy, or
the restaurant's own booking backend via HTTP client. Here every weekday
has the same seatings and a fixed set of seats already taken, so results
are deterministic.
"""

import logging
from datetime import datetime
from typing import Optional, TypedDict

from src.config import settings

logger = logging.getLogger(__name__)


class AvailabilityResult(TypedDict):
    """Result from check_availability."""

    available: bool
    alternatives: list[str]


WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Half-hourly seatings for lunch (12-2 PM) and dinner (7-9 PM)
SERVICE_TIMES = [
    "12:00 PM", "12:30 PM", "1:00 PM", "1:30 PM", "2:00 PM",
    "7:00 PM", "7:30 PM", "8:00 PM", "8:30 PM", "9:00 PM",
]

# Seats already taken per day and seating
RESERVED_SEATS: dict[str, dict[str, int]] = {
    "Friday": {"7:30 PM": 30, "8:00 PM": 38, "8:30 PM": 34},
    "Saturday": {
        "12:00 PM": 25, "12:30 PM": 28, "1:00 PM": 30, "1:30 PM": 26, "2:00 PM": 22,
        "7:00 PM": 34, "7:30 PM": 38, "8:00 PM": 40, "8:30 PM": 40, "9:00 PM": 36,
    },
    "Sunday": {"12:30 PM": 40, "1:00 PM": 40, "1:30 PM": 35},
}

INVALID_DAY_MESSAGE = "Please choose a valid day of the week."
NO_TABLES_MESSAGE = "No tables left for {guests} guests on {day}, please try another day."


def _to_minutes(time: str) -> Optional[int]:
    try:
        parsed = datetime.strptime(time.strip().upper(), "%I:%M %p")
    except ValueError:
        return None
    return parsed.hour * 60 + parsed.minute


def free_seats(day: str, time: str) -> int:
    """Seats still open at a seating; zero if the seating does not exist."""
    if time not in SERVICE_TIMES:
        return 0
    taken = RESERVED_SEATS.get(day, {}).get(time, 0)
    return max(settings.restaurant.seats_per_slot - taken, 0)


def get_open_times(day: str, guests: int) -> list[str]:
    """All seatings on ``day`` that can still seat ``guests``, in service order."""
    return [t for t in SERVICE_TIMES if free_seats(day, t) >= guests]


def check_availability(day: str, time: str, guests: int) -> AvailabilityResult:
    """
    Check whether a party of ``guests`` can be seated on ``day`` at ``time``.

    When the requested seating is full, ``alternatives`` lists the closest
    open seatings that day. When the whole day is full, or ``day`` is not
    a weekday, the single alternative asks for another day instead.
    """
    day = day.strip().capitalize()
    if day not in WEEKDAYS:
        logger.debug("Availability requested for unknown day '%s'", day)
        return {"available": False, "alternatives": [INVALID_DAY_MESSAGE]}

    open_times = get_open_times(day, guests)
    if time in open_times:
        logger.debug("Available: %s at %s for %d", day, time, guests)
        return {"available": True, "alternatives": []}

    if not open_times:
        logger.info("Fully booked: %s for %d guests", day, guests)
        return {
            "available": False,
            "alternatives": [NO_TABLES_MESSAGE.format(guests=guests, day=day)],
        }

    requested = _to_minutes(time)
    if requested is not None:
        open_times.sort(key=lambda t: abs(_to_minutes(t) - requested))

    alternatives = open_times[: settings.dialog.max_alternatives]
    logger.debug("No table at %s on %s; offering %s", time, day, alternatives)
    return {"available": False, "alternatives": alternatives}
