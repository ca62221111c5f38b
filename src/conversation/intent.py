"""
Keyword-based intent classification for idle-state messages.

Each table is an ordered sequence of (label, pattern) pairs and the first
pattern that matches wins. A message mentioning both "cancel" and "menu"
is therefore a MENU request, because MENU is checked first. Keywords are
regex fragments so plurals ("hours", "desserts") match on word boundaries.
"""

import logging
from enum import Enum
from typing import Optional

from src.tools.menu import MenuCategory
from src.utils import keyword_pattern, matches_any

logger = logging.getLogger(__name__)


class Intent(str, Enum):
    """Coarse goal of an idle-state message."""

    RESERVE = "reserve"
    MENU = "menu"
    CANCEL = "cancel"
    MODIFY = "modify"
    HOURS = "hours"
    UNKNOWN = "unknown"


class SmallTalk(str, Enum):
    """Conversational pleasantries answered when no intent matches."""

    GREETING = "greeting"
    THANKS = "thanks"
    FAREWELL = "farewell"


INTENT_KEYWORDS = [
    (Intent.RESERVE, keyword_pattern(
        ["reserve", "book", "tables?", "reservations?", "bookings?", "seats?"]
    )),
    (Intent.MENU, keyword_pattern(
        ["menus?", "dish(es)?", "food", "eat", "starters?", "desserts?", "drinks?", "beverages?",
         "veg", "non.?veg", "vegan", "biryani", "chicken", "paneer"]
    )),
    (Intent.CANCEL, keyword_pattern(["cancel", "remove", "delete"])),
    (Intent.MODIFY, keyword_pattern(["change", "modify", "update", "reschedule"])),
    (Intent.HOURS, keyword_pattern(
        ["hours?", "open(ing)?", "close[ds]?", "timings?", "schedule", "available", "availability"]
    )),
]

MENU_CATEGORY_KEYWORDS = [
    (MenuCategory.STARTER, keyword_pattern(["starters?", "appetizers?"])),
    (MenuCategory.MAIN, keyword_pattern(["mains?", "courses?", "entrees?"])),
    (MenuCategory.DESSERT, keyword_pattern(["desserts?", "sweets?"])),
    (MenuCategory.BEVERAGE, keyword_pattern(["drinks?", "beverages?", "wines?", "beers?"])),
    (MenuCategory.VEGETARIAN, keyword_pattern(["veg", "vegetarian"])),
    (MenuCategory.NON_VEG, keyword_pattern(
        ["non.?veg", "chicken", "mutton", "fish", "prawn", "lamb"]
    )),
    (MenuCategory.VEGAN, keyword_pattern(["vegan"])),
    (MenuCategory.GLUTEN_FREE, keyword_pattern(["gluten"])),
]

SMALL_TALK_KEYWORDS = [
    (SmallTalk.GREETING, keyword_pattern(
        ["hi", "hello", "hey", "good morning", "good evening", "good afternoon"]
    )),
    (SmallTalk.THANKS, keyword_pattern(["thank", "thanks", "thx"])),
    (SmallTalk.FAREWELL, keyword_pattern(["bye", "goodbye", "see you"])),
]

_AFFIRMATIVE = keyword_pattern(
    ["yes", "yeah", "yep", "sure", "confirm", "proceed", "ok", "okay"]
)
_NEGATIVE = keyword_pattern(["no", "nope", "cancel", "nah"])
_CANCEL_AFFIRMATIVE = keyword_pattern(["yes", "yeah", "confirm", "sure"])


def detect_intent(text: str) -> Intent:
    """Classify ``text`` by the first matching intent in priority order."""
    for intent, pattern in INTENT_KEYWORDS:
        if matches_any(pattern, text):
            return intent
    return Intent.UNKNOWN


def detect_booking_followup(text: str) -> Optional[Intent]:
    """
    Find cancel or modify wording in a message already classified RESERVE.

    "change my booking" hits RESERVE first because of "booking"; when the
    guest already holds a reservation the engine uses this to route it to
    the change or cancel flow instead.
    """
    for intent, pattern in INTENT_KEYWORDS:
        if intent in (Intent.CANCEL, Intent.MODIFY) and matches_any(pattern, text):
            return intent
    return None


def detect_menu_category(text: str) -> Optional[MenuCategory]:
    """Pick the menu section a message asks about, if any."""
    lower = text.lower()
    for category, pattern in MENU_CATEGORY_KEYWORDS:
        # "non veg" also contains "veg"; leave it for the NON_VEG entry.
        if category == MenuCategory.VEGETARIAN and "non" in lower:
            continue
        if matches_any(pattern, text):
            return category
    return None


def detect_small_talk(text: str) -> Optional[SmallTalk]:
    for kind, pattern in SMALL_TALK_KEYWORDS:
        if matches_any(pattern, text):
            return kind
    return None


def is_affirmative(text: str) -> bool:
    return matches_any(_AFFIRMATIVE, text)


def is_negative(text: str) -> bool:
    return matches_any(_NEGATIVE, text)


def is_cancel_affirmative(text: str) -> bool:
    """Narrower yes-set used before deleting a confirmed reservation."""
    return matches_any(_CANCEL_AFFIRMATIVE, text)
