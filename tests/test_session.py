"""Tests for the chat session wrapper and transcript."""

from src.conversation.session import QUICK_ACTIONS, ChatSession
from src.conversation.state_machine import ConversationState
from src.logging_context import get_session_id
from src.schemas.conversation_schema import Speaker
from tests.conftest import BOOKING_STEPS


class TestChatSession:
    def test_greet_records_bot_turn(self, chat_session):
        greeting = chat_session.greet()
        turns = chat_session.turns
        assert len(turns) == 1
        assert turns[0].speaker == Speaker.BOT
        assert turns[0].text == greeting

    def test_send_records_both_sides(self, chat_session):
        reply = chat_session.send("  book a table  ")
        user, bot = chat_session.turns
        assert user.speaker == Speaker.USER
        assert user.text == "book a table"
        assert bot.text == reply
        assert bot.state == ConversationState.ASK_DATE.value

    def test_blank_input_ignored(self, chat_session):
        assert chat_session.send("   ") is None
        assert chat_session.turns == []
        assert chat_session.engine.get_state_trace() == ["idle"]

    def test_sets_session_id(self, chat_session):
        chat_session.send("hello")
        assert get_session_id() == "CHAT-TEST"

    def test_generated_session_id(self):
        assert ChatSession().session_id.startswith("CHAT-")

    def test_turn_ids_unique(self, chat_session):
        chat_session.greet()
        chat_session.send("hi")
        ids = [t.id for t in chat_session.turns]
        assert len(ids) == len(set(ids))


class TestQuickActions:
    def test_actions(self):
        assert QUICK_ACTIONS == ["Book a table", "View menu", "Check availability"]

    def test_book_a_table(self, chat_session):
        chat_session.quick_action(0)
        assert chat_session.engine.state == ConversationState.ASK_DATE

    def test_view_menu(self, chat_session):
        assert "Here's a taste" in chat_session.quick_action(1)

    def test_check_availability(self, chat_session):
        assert "We are open every day" in chat_session.quick_action(2)


class TestTranscript:
    def test_transcript_after_booking(self, chat_session):
        chat_session.greet()
        for step in BOOKING_STEPS:
            chat_session.send(step)

        transcript = chat_session.get_transcript()
        assert transcript.session_id == "CHAT-TEST"
        assert len(transcript.turns) == 1 + 2 * len(BOOKING_STEPS)
        assert transcript.confirmed is not None
        assert transcript.confirmed.guests == 4
        assert transcript.metadata["state_trace"][-1] == "idle"

    def test_transcript_records_transitions(self, chat_session):
        for step in BOOKING_STEPS:
            chat_session.send(step)

        transitions = chat_session.get_transcript().metadata["transitions"]
        assert transitions[0]["trigger"] is None
        assert transitions[1]["state"] == "ask_date"
        assert transitions[1]["trigger"] == "reserve_requested"
        assert transitions[-1]["trigger"] == "booking_confirmed"
        assert [t["state"] for t in transitions] == (
            chat_session.get_transcript().metadata["state_trace"]
        )

    def test_transcript_serializes(self, chat_session):
        chat_session.greet()
        data = chat_session.get_transcript().model_dump(mode="json")
        assert data["turns"][0]["speaker"] == "bot"
        assert data["confirmed"] is None
