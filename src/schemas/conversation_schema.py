"""Chat transcript schemas for the message list a front end renders."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from src.schemas.reservation_schema import ConfirmedReservation


class Speaker(str, Enum):
    BOT = "bot"
    USER = "user"


class TranscriptTurn(BaseModel):
    """A single message in a chat transcript."""

    id: str
    speaker: Speaker
    text: str
    timestamp: datetime
    state: Optional[str] = None


class ConversationTranscript(BaseModel):
    """Complete chat record for one session."""

    session_id: str
    started_at: datetime
    turns: list[TranscriptTurn] = Field(default_factory=list)
    confirmed: Optional[ConfirmedReservation] = None
    metadata: Optional[dict[str, Any]] = None
