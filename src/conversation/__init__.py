from src.conversation.dialog_engine import DialogEngine
from src.conversation.intent import Intent, detect_intent
from src.conversation.session import ChatSession
from src.conversation.state_machine import (
    ConversationState,
    ConversationStateMachine,
    DialogContext,
    TransitionTrigger,
)

__all__ = [
    "DialogEngine",
    "ChatSession",
    "ConversationStateMachine",
    "ConversationState",
    "DialogContext",
    "TransitionTrigger",
    "Intent",
    "detect_intent",
]
