"""Tests for intent, menu category, and small-talk classification."""

import pytest

from src.conversation.intent import (
    Intent,
    SmallTalk,
    detect_booking_followup,
    detect_intent,
    detect_menu_category,
    detect_small_talk,
    is_affirmative,
    is_cancel_affirmative,
    is_negative,
)
from src.tools.menu import MenuCategory


class TestDetectIntent:
    @pytest.mark.parametrize("text", [
        "I want to reserve", "Can I book?", "a table for two", "make a reservation",
        "about my booking", "any seats left?",
    ])
    def test_reserve(self, text):
        assert detect_intent(text) == Intent.RESERVE

    @pytest.mark.parametrize("text", [
        "show me the menu", "what dishes do you have", "I want to eat", "any desserts",
        "do you serve drinks", "non-veg options", "vegan?", "is there biryani",
    ])
    def test_menu(self, text):
        assert detect_intent(text) == Intent.MENU

    @pytest.mark.parametrize("text", ["cancel it", "please remove that", "delete"])
    def test_cancel(self, text):
        assert detect_intent(text) == Intent.CANCEL

    @pytest.mark.parametrize("text", ["change it", "I need to modify", "reschedule please"])
    def test_modify(self, text):
        assert detect_intent(text) == Intent.MODIFY

    @pytest.mark.parametrize("text", [
        "what are your opening hours", "when do you open", "are you closed on sunday",
        "timings?", "Check availability",
    ])
    def test_hours(self, text):
        assert detect_intent(text) == Intent.HOURS

    def test_unknown(self):
        assert detect_intent("the weather is nice") == Intent.UNKNOWN

    def test_case_insensitive(self):
        assert detect_intent("BOOK A TABLE") == Intent.RESERVE

    def test_word_boundaries(self):
        assert detect_intent("that's great") == Intent.UNKNOWN
        assert detect_intent("my tablet broke") == Intent.UNKNOWN


class TestIntentPriority:
    def test_menu_beats_cancel(self):
        assert detect_intent("cancel the menu") == Intent.MENU

    def test_reserve_beats_everything(self):
        assert detect_intent("change my booking") == Intent.RESERVE
        assert detect_intent("cancel my reservation") == Intent.RESERVE

    def test_cancel_beats_modify(self):
        assert detect_intent("cancel or change") == Intent.CANCEL

    def test_modify_beats_hours(self):
        assert detect_intent("update the schedule") == Intent.MODIFY


class TestBookingFollowup:
    def test_change(self):
        assert detect_booking_followup("change my booking") == Intent.MODIFY

    def test_cancel(self):
        assert detect_booking_followup("cancel my reservation") == Intent.CANCEL

    def test_plain_booking(self):
        assert detect_booking_followup("book a table") is None


class TestMenuCategory:
    @pytest.mark.parametrize("text,expected", [
        ("any starters?", MenuCategory.STARTER),
        ("what appetizers", MenuCategory.STARTER),
        ("main course please", MenuCategory.MAIN),
        ("dessert menu", MenuCategory.DESSERT),
        ("something sweet", MenuCategory.DESSERT),
        ("wine list", MenuCategory.BEVERAGE),
        ("vegetarian food", MenuCategory.VEGETARIAN),
        ("veg dishes", MenuCategory.VEGETARIAN),
        ("non-veg dishes", MenuCategory.NON_VEG),
        ("anything with chicken", MenuCategory.NON_VEG),
        ("vegan food", MenuCategory.VEGAN),
        ("gluten free food", MenuCategory.GLUTEN_FREE),
    ])
    def test_category(self, text, expected):
        assert detect_menu_category(text) == expected

    def test_non_excludes_vegetarian(self):
        assert detect_menu_category("nonveg food") == MenuCategory.NON_VEG

    def test_no_category(self):
        assert detect_menu_category("show me the menu") is None

    def test_first_category_wins(self):
        assert detect_menu_category("starters and desserts") == MenuCategory.STARTER


class TestSmallTalk:
    @pytest.mark.parametrize("text", ["hi", "Hello there", "hey!", "good morning"])
    def test_greeting(self, text):
        assert detect_small_talk(text) == SmallTalk.GREETING

    @pytest.mark.parametrize("text", ["thanks", "thank you", "thx"])
    def test_thanks(self, text):
        assert detect_small_talk(text) == SmallTalk.THANKS

    @pytest.mark.parametrize("text", ["bye", "goodbye", "see you soon"])
    def test_farewell(self, text):
        assert detect_small_talk(text) == SmallTalk.FAREWELL

    def test_none(self):
        assert detect_small_talk("this is something else") is None


class TestYesNo:
    @pytest.mark.parametrize("text", ["yes", "Yeah sure", "ok", "okay go ahead", "confirm"])
    def test_affirmative(self, text):
        assert is_affirmative(text)

    @pytest.mark.parametrize("text", ["no", "nope", "nah", "cancel that"])
    def test_negative(self, text):
        assert is_negative(text)

    def test_not_is_not_no(self):
        assert not is_negative("not now")
        assert not is_negative("know what")

    def test_cancel_gate_is_narrower(self):
        assert is_affirmative("ok")
        assert not is_cancel_affirmative("ok")
        assert is_cancel_affirmative("yes please")
