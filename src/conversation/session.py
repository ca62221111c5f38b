"""
Chat session wrapper that keeps the message list a front end renders.

The DialogEngine only turns text into replies. ChatSession adds what a
chat window needs around it: a session ID for log correlation, a
transcript of bot and user messages, blank-input filtering, and the quick
action shortcuts shown under the message list.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from src.conversation.dialog_engine import DialogEngine
from src.logging_context import get_session_logger, set_session_id
from src.schemas.conversation_schema import ConversationTranscript, Speaker, TranscriptTurn

logger = get_session_logger(__name__)

QUICK_ACTIONS = ["Book a table", "View menu", "Check availability"]


class ChatSession:
    """One conversation: an engine plus its transcript."""

    def __init__(
        self, engine: Optional[DialogEngine] = None, session_id: Optional[str] = None
    ) -> None:
        self.engine = engine or DialogEngine()
        self.session_id = session_id or f"CHAT-{uuid.uuid4().hex[:8].upper()}"
        self.started_at = datetime.now(timezone.utc)
        self._turns: list[TranscriptTurn] = []

    def _record(self, speaker: Speaker, text: str) -> TranscriptTurn:
        turn = TranscriptTurn(
            id=uuid.uuid4().hex,
            speaker=speaker,
            text=text,
            timestamp=datetime.now(timezone.utc),
            state=self.engine.state.value,
        )
        self._turns.append(turn)
        return turn

    def greet(self) -> str:
        """Record and return the opening message."""
        set_session_id(self.session_id)
        greeting = self.engine.get_greeting()
        self._record(Speaker.BOT, greeting)
        return greeting

    def send(self, text: str) -> Optional[str]:
        """
        Pass one user message to the engine.

        Returns:
            The reply, or None when the message is blank and was ignored.
        """
        message = text.strip()
        if not message:
            return None

        set_session_id(self.session_id)
        self._record(Speaker.USER, message)
        reply = self.engine.process_message(message)
        self._record(Speaker.BOT, reply)
        logger.debug("Turn %d complete, state=%s", len(self._turns) // 2, self.engine.state.value)
        return reply

    def quick_action(self, index: int) -> Optional[str]:
        """Send the quick action at ``index`` as if the user had typed it."""
        return self.send(QUICK_ACTIONS[index])

    @property
    def turns(self) -> list[TranscriptTurn]:
        return list(self._turns)

    def get_transcript(self) -> ConversationTranscript:
        """Snapshot the conversation, including every state transition taken."""
        transitions = [
            {
                "state": entry.state.value,
                "trigger": entry.trigger.value if entry.trigger else None,
                "entered_at": entry.entered_at.isoformat(),
            }
            for entry in self.engine.get_history()
        ]
        return ConversationTranscript(
            session_id=self.session_id,
            started_at=self.started_at,
            turns=self.turns,
            confirmed=self.engine.confirmed,
            metadata={
                "state_trace": self.engine.get_state_trace(),
                "transitions": transitions,
            },
        )
