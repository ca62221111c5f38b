"""
Finite state machine for the reservation dialog.

Defines the conversation states, the triggers that move between them, and
the DialogContext that holds everything a conversation remembers. Every
transition is listed explicitly; guards keep the reservation draft and the
confirmed booking consistent with the state being entered.

Usage:
    sm = ConversationStateMachine()
    sm.transition(TransitionTrigger.RESERVE_REQUESTED)
    assert sm.current_state == ConversationState.ASK_DATE
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from src.schemas.reservation_schema import ConfirmedReservation, ReservationDraft

logger = logging.getLogger(__name__)


class ConversationState(str, Enum):
    """All possible states in a conversation."""
    IDLE = "idle"
    ASK_DATE = "ask_date"
    ASK_TIME = "ask_time"
    ASK_GUESTS = "ask_guests"
    ASK_NAME = "ask_name"
    ASK_PHONE = "ask_phone"
    CONFIRM = "confirm"
    MODIFY_ASK = "modify_ask"
    CANCEL_CONFIRM = "cancel_confirm"


class TransitionTrigger(str, Enum):
    """Events that cause state transitions."""
    RESERVE_REQUESTED = "reserve_requested"
    MODIFY_REQUESTED = "modify_requested"
    CANCEL_REQUESTED = "cancel_requested"
    DAY_PROVIDED = "day_provided"
    TIME_PROVIDED = "time_provided"
    TABLE_AVAILABLE = "table_available"
    TIME_UNAVAILABLE = "time_unavailable"
    DAY_UNAVAILABLE = "day_unavailable"
    NAME_PROVIDED = "name_provided"
    PHONE_PROVIDED = "phone_provided"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_DECLINED = "booking_declined"
    CANCEL_CONFIRMED = "cancel_confirmed"
    CANCEL_ABORTED = "cancel_aborted"


@dataclass
class DialogContext:
    """The whole memory of one conversation."""
    state: ConversationState = ConversationState.IDLE
    draft: ReservationDraft = field(default_factory=ReservationDraft)
    confirmed: Optional[ConfirmedReservation] = None

    def clear_draft(self) -> None:
        self.draft = ReservationDraft()


Guard = Callable[[DialogContext], bool]


def _has_confirmed(ctx: DialogContext) -> bool:
    return ctx.confirmed is not None


def _draft_has(*names: str) -> Guard:
    def guard(ctx: DialogContext) -> bool:
        return all(getattr(ctx.draft, name) is not None for name in names)
    return guard


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: ConversationState
    to_state: ConversationState
    trigger: TransitionTrigger
    guard: Optional[Guard] = None


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: ConversationState
    entered_at: datetime
    trigger: Optional[TransitionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class ConversationStateMachine:
    """
    Deterministic state machine controlling the reservation dialog.

    The machine owns a DialogContext. Callers update the draft first and
    then fire the trigger; a guard rejects any transition that would enter
    a state with an earlier slot still missing.
    """

    TRANSITIONS: list[Transition] = [
        # --- Idle routing ---
        Transition(ConversationState.IDLE, ConversationState.ASK_DATE,
                   TransitionTrigger.RESERVE_REQUESTED),
        Transition(ConversationState.IDLE, ConversationState.ASK_DATE,
                   TransitionTrigger.MODIFY_REQUESTED, _has_confirmed),
        Transition(ConversationState.IDLE, ConversationState.CANCEL_CONFIRM,
                   TransitionTrigger.CANCEL_REQUESTED, _has_confirmed),

        # MODIFY_ASK is never entered but routes exactly like IDLE if set
        Transition(ConversationState.MODIFY_ASK, ConversationState.ASK_DATE,
                   TransitionTrigger.RESERVE_REQUESTED),
        Transition(ConversationState.MODIFY_ASK, ConversationState.ASK_DATE,
                   TransitionTrigger.MODIFY_REQUESTED, _has_confirmed),
        Transition(ConversationState.MODIFY_ASK, ConversationState.CANCEL_CONFIRM,
                   TransitionTrigger.CANCEL_REQUESTED, _has_confirmed),

        # --- Slot collection ---
        Transition(ConversationState.ASK_DATE, ConversationState.ASK_TIME,
                   TransitionTrigger.DAY_PROVIDED, _draft_has("day", "date")),
        Transition(ConversationState.ASK_TIME, ConversationState.ASK_GUESTS,
                   TransitionTrigger.TIME_PROVIDED, _draft_has("day", "time")),

        # --- Availability ---
        Transition(ConversationState.ASK_GUESTS, ConversationState.ASK_NAME,
                   TransitionTrigger.TABLE_AVAILABLE, _draft_has("day", "time", "guests")),
        Transition(ConversationState.ASK_GUESTS, ConversationState.ASK_TIME,
                   TransitionTrigger.TIME_UNAVAILABLE, _draft_has("day")),
        Transition(ConversationState.ASK_GUESTS, ConversationState.ASK_DATE,
                   TransitionTrigger.DAY_UNAVAILABLE),

        # --- Contact details ---
        Transition(ConversationState.ASK_NAME, ConversationState.ASK_PHONE,
                   TransitionTrigger.NAME_PROVIDED,
                   _draft_has("day", "time", "guests", "name")),
        Transition(ConversationState.ASK_PHONE, ConversationState.CONFIRM,
                   TransitionTrigger.PHONE_PROVIDED,
                   _draft_has("day", "time", "guests", "name", "phone")),

        # --- Confirmation gate ---
        Transition(ConversationState.CONFIRM, ConversationState.IDLE,
                   TransitionTrigger.BOOKING_CONFIRMED, _has_confirmed),
        Transition(ConversationState.CONFIRM, ConversationState.IDLE,
                   TransitionTrigger.BOOKING_DECLINED),

        # --- Cancellation gate ---
        Transition(ConversationState.CANCEL_CONFIRM, ConversationState.IDLE,
                   TransitionTrigger.CANCEL_CONFIRMED),
        Transition(ConversationState.CANCEL_CONFIRM, ConversationState.IDLE,
                   TransitionTrigger.CANCEL_ABORTED),
    ]

    def __init__(self, context: Optional[DialogContext] = None) -> None:
        self.context = context or DialogContext()
        self._history: list[StateEntry] = [
            StateEntry(state=self.context.state, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> ConversationState:
        return self.context.state

    def transition(self, trigger: TransitionTrigger) -> ConversationState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new conversation state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self.context.state and t.trigger == trigger:
                if t.guard is not None and not t.guard(self.context):
                    continue

                old_state = self.context.state
                self.context.state = t.to_state

                self._history.append(StateEntry(
                    state=t.to_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, t.to_state.value, trigger.value,
                )
                return t.to_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self.context.state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[TransitionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self.context.state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_collecting(self) -> bool:
        """True while a booking flow or cancellation gate owns the next turn."""
        return self.context.state not in (ConversationState.IDLE, ConversationState.MODIFY_ASK)
