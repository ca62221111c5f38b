"""
Offline console demo: chat with the reservation assistant in a terminal.

Runs the real dialog engine, slot parsers, and mock availability and menu
tools. No network calls. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario cancel
"""

import argparse
import re

from src.config import settings
from src.conversation.session import QUICK_ACTIONS, ChatSession

BLUE = "\033[94m"
GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

_BOLD_MARKUP = re.compile(r"\*\*(.+?)\*\*")


def render(text: str) -> str:
    """Turn **bold** markers into ANSI bold for the terminal."""
    return _BOLD_MARKUP.sub(lambda m: f"{BOLD}{m.group(1)}{RESET}{GREEN}", text)


class ConsoleSession:
    """Drives a ChatSession from the keyboard or from a script."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "Hi there",
            "I'd like to book a table",
            "Friday",
            "7pm",
            "4",
            "Priya Sharma",
            "98765 43210",
            "yes",
            "thanks",
        ],
        "menu": [
            "What's on the menu?",
            "Do you have any desserts?",
            "Anything vegan?",
            "What are your opening hours?",
        ],
        "cancel": [
            "book a table",
            "tomorrow",
            "12:30",
            "2",
            "Sam",
            "0412 345 678",
            "yes",
            "I need to cancel my reservation",
            "yes",
        ],
        "modify": [
            "reserve a table for saturday",
            "saturday",
            "8pm",
            "4",
            "7:00 PM",
            "4",
            "Alex Martin",
            "+61 412 345 678",
            "yes",
            "can I change my booking?",
            "Sunday",
            "1pm",
            "6",
        ],
    }

    def __init__(self) -> None:
        self.chat = ChatSession()

    def agent_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[{settings.restaurant.name}]{RESET} {GREEN}{render(text)}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Restaurant: {settings.restaurant.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def _summary(self, title: str) -> None:
        engine = self.chat.engine
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(engine.get_state_trace())}{RESET}")
        if engine.confirmed is not None:
            print(f"{DIM}  Confirmed: {engine.confirmed.model_dump()}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _turn(self, text: str) -> None:
        reply = self.chat.send(text)
        if reply is None:
            return
        self.agent_say(reply)
        self.system_log(f"State: {self.chat.engine.state.value}")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"RESERVATION ASSISTANT - Scenario: {scenario}")
        self.agent_say(self.chat.greet())

        for step in steps:
            print(f"\n{BLUE}[Guest] {RESET}{step}")
            self._turn(step)

        self._summary(f"Scenario '{scenario}' complete.")

    def run(self) -> None:
        self._banner("RESERVATION ASSISTANT - Console Demo")
        shortcuts = ", ".join(f"/{i + 1} {a}" for i, a in enumerate(QUICK_ACTIONS))
        print(f"{DIM}  Type 'quit' to exit. Shortcuts: {shortcuts}{RESET}\n")

        self.agent_say(self.chat.greet())

        while True:
            try:
                user_input = input(f"\n{BLUE}[Guest] {RESET}").strip()
            except EOFError:
                break
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                break

            if len(user_input) > settings.dialog.max_input_length:
                self.agent_say("That was quite long. Could you keep it brief for me?")
                continue

            if user_input.startswith("/") and user_input[1:].isdigit():
                index = int(user_input[1:]) - 1
                if 0 <= index < len(QUICK_ACTIONS):
                    user_input = QUICK_ACTIONS[index]
                    print(f"{DIM}  >> {user_input}{RESET}")

            self._turn(user_input)

        print(f"\n{DIM}Session ended.{RESET}")
        self._summary("Conversation complete.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
