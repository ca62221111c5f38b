"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional

import pytest

from src.conversation.dialog_engine import DialogEngine
from src.conversation.session import ChatSession
from src.conversation.state_machine import ConversationStateMachine

# A Monday
FIXED_NOW = datetime(2026, 10, 19, 18, 30)

BOOKING_STEPS = ["book a table", "Friday", "7pm", "4", "Priya Sharma", "9876543210", "yes"]


@pytest.fixture
def state_machine():
    return ConversationStateMachine()


@pytest.fixture
def engine():
    return DialogEngine(clock=lambda: FIXED_NOW)


@pytest.fixture
def booked_engine(engine):
    """Engine holding a confirmed Friday 7 PM reservation for 4."""
    run_turns(engine, BOOKING_STEPS)
    return engine


@pytest.fixture
def chat_session(engine):
    return ChatSession(engine=engine, session_id="CHAT-TEST")


def run_turns(engine: DialogEngine, turns: list[str]) -> Optional[str]:
    """Feed each message to the engine and return the last reply."""
    reply = None
    for text in turns:
        reply = engine.process_message(text)
    return reply


def make_engine(
    availability_result=None,
    availability_error: Optional[Exception] = None,
    menu_error: Optional[Exception] = None,
) -> DialogEngine:
    """Build an engine with stubbed collaborators."""

    def check_availability(day, time, guests):
        if availability_error is not None:
            raise availability_error
        return availability_result

    def menu_listing(*args):
        if menu_error is not None:
            raise menu_error
        return "stub menu"

    return DialogEngine(
        check_availability=check_availability,
        get_menu_summary=menu_listing,
        get_menu_by_category=menu_listing,
        clock=lambda: FIXED_NOW,
    )
