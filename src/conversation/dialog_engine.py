"""
Dialog engine for the restaurant reservation assistant.

One engine instance drives one conversation. Each call to
``process_message`` reads the current state, runs the matching slot
parser or the idle intent router, optionally consults the availability
and menu collaborators, updates the DialogContext, and returns a single
reply string. While a booking flow or a cancellation is in progress,
intent detection is suspended and only the current state's parser applies.

Usage:
    engine = DialogEngine()
    print(engine.get_greeting())
    print(engine.process_message("I'd like to book a table"))
"""

from datetime import datetime
from typing import Callable, Optional

from src.config import settings
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
from src.conversation.slot_parsers import (
    parse_day,
    parse_guests,
    parse_name,
    parse_phone,
    parse_time,
)
from src.conversation.state_machine import (
    ConversationState,
    ConversationStateMachine,
    DialogContext,
    StateEntry,
    TransitionTrigger,
)
from src.logging_context import get_session_logger
from src.schemas.reservation_schema import (
    AvailabilityResponse,
    ConfirmedReservation,
    ReservationDraft,
)
from src.tools import availability, menu
from src.tools.menu import MenuCategory

logger = get_session_logger(__name__)

# Markers in the first alternative meaning the whole day is out, not just the time
DAY_UNAVAILABLE_MARKERS = ("another day", "valid day")

TRY_AGAIN_REPLY = (
    "Sorry, I'm having trouble checking that right now. Could you please try again?"
)


class DialogEngine:
    """Turn-by-turn reservation dialog over a single DialogContext."""

    def __init__(
        self,
        check_availability: Callable[[str, str, int], dict] = availability.check_availability,
        get_menu_summary: Callable[[], str] = menu.get_menu_summary,
        get_menu_by_category: Callable[[str], str] = menu.get_menu_by_category,
        clock: Callable[[], datetime] = datetime.now,
        context: Optional[DialogContext] = None,
    ) -> None:
        self._check_availability = check_availability
        self._get_menu_summary = get_menu_summary
        self._get_menu_by_category = get_menu_by_category
        self._clock = clock
        self._sm = ConversationStateMachine(context)

    @property
    def context(self) -> DialogContext:
        return self._sm.context

    @property
    def state(self) -> ConversationState:
        return self._sm.current_state

    @property
    def draft(self) -> ReservationDraft:
        return self._sm.context.draft

    @property
    def confirmed(self) -> Optional[ConfirmedReservation]:
        return self._sm.context.confirmed

    def get_state_trace(self) -> list[str]:
        return self._sm.get_state_trace()

    def get_history(self) -> list[StateEntry]:
        return self._sm.get_history()

    def get_greeting(self) -> str:
        return (
            f"Welcome to {settings.restaurant.name}! I'm here to help you with table "
            "reservations, menu inquiries, or anything else you need. "
            "How may I assist you today?"
        )

    def process_message(self, user_input: str) -> str:
        """Consume one user turn and return the assistant's reply."""
        text = user_input.strip()
        state = self._sm.current_state
        logger.debug("Turn in state '%s': %r", state.value, text)

        # IDLE, and MODIFY_ASK which no transition enters
        if not self._sm.is_collecting():
            return self._handle_idle(text)

        handlers: dict[ConversationState, Callable[[str], str]] = {
            ConversationState.ASK_DATE: self._handle_ask_date,
            ConversationState.ASK_TIME: self._handle_ask_time,
            ConversationState.ASK_GUESTS: self._handle_ask_guests,
            ConversationState.ASK_NAME: self._handle_ask_name,
            ConversationState.ASK_PHONE: self._handle_ask_phone,
            ConversationState.CONFIRM: self._handle_confirm,
            ConversationState.CANCEL_CONFIRM: self._handle_cancel_confirm,
        }
        return handlers[state](text)

    # ------------------------------------------------------------------ #
    # Slot collection
    # ------------------------------------------------------------------ #

    def _handle_ask_date(self, text: str) -> str:
        parsed = parse_day(text, now=self._clock())
        if parsed is None:
            return (
                "I didn't catch the day. Could you please specify a day like Monday, "
                "Friday, or say 'today' or 'tomorrow'?"
            )
        self.draft.day = parsed.day
        self.draft.date = parsed.date_label
        self._sm.transition(TransitionTrigger.DAY_PROVIDED)
        return (
            f"Great, {parsed.date_label} it is. What time would you prefer? We serve "
            f"lunch ({settings.restaurant.lunch_service}) and dinner "
            f"({settings.restaurant.dinner_service})."
        )

    def _handle_ask_time(self, text: str) -> str:
        time = parse_time(text)
        if time is None:
            return "Could you please provide a time? For example, '7 PM' or '8:30 PM'."
        self.draft.time = time
        self._sm.transition(TransitionTrigger.TIME_PROVIDED)
        return f"{time} works. How many guests will be joining?"

    def _handle_ask_guests(self, text: str) -> str:
        guests = parse_guests(text)
        if guests is None:
            return (
                "Please let me know the number of guests "
                f"({settings.dialog.min_guests}-{settings.dialog.max_guests})."
            )

        result = self._lookup_availability(guests)
        if result is None:
            return TRY_AGAIN_REPLY

        draft = self.draft
        draft.guests = guests

        if result.available:
            self._sm.transition(TransitionTrigger.TABLE_AVAILABLE)
            return (
                f"A table for {guests} on {draft.date} at {draft.time} is available. "
                "May I have your name for the reservation?"
            )

        alternatives = result.alternatives
        if alternatives and any(m in alternatives[0] for m in DAY_UNAVAILABLE_MARKERS):
            self._sm.transition(TransitionTrigger.DAY_UNAVAILABLE)
            return (
                f"Unfortunately, no tables are available on {draft.date} for {guests} "
                "guests. Would you like to try a different day?"
            )

        self._sm.transition(TransitionTrigger.TIME_UNAVAILABLE)
        if not alternatives:
            return (
                f"Unfortunately, {draft.time} is fully booked for {guests} guests. "
                "Could you suggest another time?"
            )
        return (
            f"Unfortunately, {draft.time} is fully booked for {guests} guests. "
            f"I can offer: {', '.join(alternatives)}. Would any of these work?"
        )

    def _handle_ask_name(self, text: str) -> str:
        name = parse_name(text)
        if name is None:
            return "Could you please share your name for the reservation?"
        self.draft.name = name
        self._sm.transition(TransitionTrigger.NAME_PROVIDED)
        return f"Thank you, {name}. Could I have a contact phone number?"

    def _handle_ask_phone(self, text: str) -> str:
        phone = parse_phone(text)
        if phone is None:
            return "Please provide a valid phone number."
        self.draft.phone = phone
        self._sm.transition(TransitionTrigger.PHONE_PROVIDED)
        r = self.draft
        return (
            "Just to confirm:\n"
            f"- **Date:** {r.date} ({r.day})\n"
            f"- **Time:** {r.time}\n"
            f"- **Guests:** {r.guests}\n"
            f"- **Name:** {r.name}\n"
            f"- **Phone:** {r.phone}\n\n"
            "Shall I proceed with the booking? (Yes/No)"
        )

    # ------------------------------------------------------------------ #
    # Confirmation gates
    # ------------------------------------------------------------------ #

    def _handle_confirm(self, text: str) -> str:
        ctx = self.context
        yes, no = is_affirmative(text), is_negative(text)
        if yes and no:
            # Both patterns hit, e.g. "No, I'm not sure"
            logger.debug("Ambiguous confirmation answer: %r", text)
        elif yes:
            ctx.confirmed = ConfirmedReservation(**ctx.draft.model_dump())
            ctx.clear_draft()
            self._sm.transition(TransitionTrigger.BOOKING_CONFIRMED)
            r = ctx.confirmed
            logger.info(
                "Reservation confirmed for %s: %s at %s, %d guests",
                r.name, r.day, r.time, r.guests,
            )
            return (
                "Your reservation is confirmed!\n\n"
                f"- **Date:** {r.date} ({r.day})\n"
                f"- **Time:** {r.time}\n"
                f"- **Guests:** {r.guests}\n"
                f"- **Name:** {r.name}\n\n"
                f"We look forward to welcoming you at {settings.restaurant.name}. "
                "Is there anything else I can help with?"
            )
        elif no:
            ctx.clear_draft()
            self._sm.transition(TransitionTrigger.BOOKING_DECLINED)
            return (
                "No problem, the reservation has been discarded. "
                "Feel free to start over whenever you're ready."
            )
        return "Please confirm with 'Yes' to proceed or 'No' to cancel."

    def _handle_cancel_confirm(self, text: str) -> str:
        ctx = self.context
        if is_cancel_affirmative(text):
            r = ctx.confirmed
            logger.info("Reservation cancelled for %s: %s at %s", r.name, r.day, r.time)
            ctx.confirmed = None
            self._sm.transition(TransitionTrigger.CANCEL_CONFIRMED)
            return (
                "Your reservation has been cancelled. If you'd like to rebook or need "
                "anything else, I'm here to help."
            )
        self._sm.transition(TransitionTrigger.CANCEL_ABORTED)
        return (
            "The cancellation has been aborted. Your reservation remains intact. "
            "Anything else I can assist with?"
        )

    # ------------------------------------------------------------------ #
    # Idle routing
    # ------------------------------------------------------------------ #

    def _handle_idle(self, text: str) -> str:
        intent = detect_intent(text)
        if intent == Intent.RESERVE and self.confirmed is not None:
            intent = detect_booking_followup(text) or intent
        logger.debug("Detected intent: %s", intent.value)

        if intent == Intent.RESERVE:
            self.context.clear_draft()
            self._sm.transition(TransitionTrigger.RESERVE_REQUESTED)
            return (
                "I'd be happy to help with a reservation. "
                "Which day would you like to dine with us?"
            )
        if intent == Intent.MENU:
            return self._handle_menu(text)
        if intent == Intent.CANCEL:
            return self._handle_cancel_request()
        if intent == Intent.MODIFY:
            return self._handle_modify_request()
        if intent == Intent.HOURS:
            return (
                "We are open every day:\n"
                f"- **Lunch:** {settings.restaurant.lunch_hours}\n"
                f"- **Dinner:** {settings.restaurant.dinner_hours}\n\n"
                "Would you like to make a reservation?"
            )
        return self._handle_small_talk(text)

    def _handle_menu(self, text: str) -> str:
        category = detect_menu_category(text)
        listing = self._lookup_menu(category)
        return listing if listing is not None else TRY_AGAIN_REPLY

    def _handle_cancel_request(self) -> str:
        r = self.confirmed
        if r is None:
            return (
                "I don't have any active reservation to cancel. "
                "Would you like to make a new one?"
            )
        self._sm.transition(TransitionTrigger.CANCEL_REQUESTED)
        return (
            f"I have a reservation under **{r.name}** for {r.guests} guests on "
            f"{r.date} at {r.time}. Would you like to cancel it? (Yes/No)"
        )

    def _handle_modify_request(self) -> str:
        ctx = self.context
        if ctx.confirmed is None:
            return (
                "I don't have an active reservation to modify. "
                "Would you like to make a new booking?"
            )
        ctx.draft = ReservationDraft(**ctx.confirmed.model_dump())
        self._sm.transition(TransitionTrigger.MODIFY_REQUESTED)
        return "Sure, let's update your reservation. Which day would you like to change it to?"

    def _handle_small_talk(self, text: str) -> str:
        name = settings.restaurant.name
        kind = detect_small_talk(text)
        if kind == SmallTalk.GREETING:
            return (
                f"Hello! Welcome to {name}. I can help you with reservations, menu "
                "information, or availability. What would you like to do?"
            )
        if kind == SmallTalk.THANKS:
            return "You're welcome! It was a pleasure assisting you. Have a wonderful day!"
        if kind == SmallTalk.FAREWELL:
            return f"Goodbye! We look forward to seeing you at {name}. Have a great day!"
        return (
            "I can help you with:\n"
            "- **Table reservations**: book, modify, or cancel\n"
            "- **Menu information**: dishes, categories, dietary options\n"
            "- **Availability**: check open slots\n\n"
            "What would you like to do?"
        )

    # ------------------------------------------------------------------ #
    # Collaborator calls
    # ------------------------------------------------------------------ #

    def _lookup_availability(self, guests: int) -> Optional[AvailabilityResponse]:
        """Ask the availability oracle; None if it failed or answered nonsense."""
        draft = self.draft
        try:
            raw = self._check_availability(draft.day, draft.time, guests)
            return AvailabilityResponse.model_validate(raw)
        except Exception:
            logger.exception(
                "Availability check failed for %s at %s, %d guests",
                draft.day, draft.time, guests,
            )
            return None

    def _lookup_menu(self, category: Optional[MenuCategory]) -> Optional[str]:
        """Fetch a menu listing; None if the catalog failed."""
        try:
            if category is None:
                listing = self._get_menu_summary()
            else:
                listing = self._get_menu_by_category(category.value)
        except Exception:
            logger.exception("Menu lookup failed for category %s", category)
            return None
        if not isinstance(listing, str):
            logger.warning("Menu catalog returned %s instead of text", type(listing).__name__)
            return None
        return listing
