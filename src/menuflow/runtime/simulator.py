"""Offline walk-through of a flow document.

Mirrors how the conversation runtime drives a document so an operator can
try a chatbot before activating it:

- ``greeting`` steps send their message and advance on their own;
- ``menu`` steps send their prompt and wait for a reply that picks an option;
- ``end`` steps send their message and finish the conversation.

An unmatched reply sends the fallback message and the menu again. After
``max_attempts`` consecutive misses the conversation is abandoned.
"""

import logging
from enum import Enum

from menuflow.core.constants import (
    COMPANY_PLACEHOLDER,
    DEFAULT_FALLBACK_MESSAGE,
    DEFAULT_MAX_ATTEMPTS,
)
from menuflow.core.errors import FlowError
from menuflow.flow.models import EndStep, FlowDocument, GreetingStep, MenuStep
from menuflow.runtime.matching import match_option

logger = logging.getLogger(__name__)

# Greeting chains longer than this are treated as a loop
MAX_AUTO_ADVANCE = 50


class SimulatorStatus(str, Enum):
    """Conversation state of a simulator."""

    idle = "idle"
    awaiting = "awaiting"
    finished = "finished"
    abandoned = "abandoned"


def render_menu(step: MenuStep) -> str:
    lines = [f"{option.id} - {option.text}" for option in step.options]
    if not lines:
        return step.message
    return "\n".join([step.message, "", *lines]) if step.message else "\n".join(lines)


class FlowSimulator:
    """Step through a document one reply at a time."""

    def __init__(
        self,
        document: FlowDocument,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        company_name: str = "",
    ):
        self.document = document
        self.fallback_message = fallback_message
        self.max_attempts = max_attempts
        self.company_name = company_name
        self.status = SimulatorStatus.idle
        self.current_step: str | None = None
        self.attempts = 0
        self.history: list[tuple[str, str]] = []

    def _say(self, text: str, outbox: list[str]) -> None:
        if not text:
            return
        if self.company_name:
            text = text.replace(COMPANY_PLACEHOLDER, self.company_name)
        outbox.append(text)
        self.history.append(("bot", text))

    def _enter(self, name: str) -> list[str]:
        outbox: list[str] = []
        for _ in range(MAX_AUTO_ADVANCE):
            step = self.document.get_step(name)
            if step is None:
                raise FlowError("Step not found", step=name)

            logger.debug("Entering step", extra={"step": name, "type": step.type})
            self.current_step = name

            if isinstance(step, GreetingStep):
                self._say(step.message, outbox)
                name = step.next
            elif isinstance(step, MenuStep):
                self._say(render_menu(step), outbox)
                self.status = SimulatorStatus.awaiting
                self.attempts = 0
                return outbox
            elif isinstance(step, EndStep):
                self._say(step.message, outbox)
                self.status = SimulatorStatus.finished
                return outbox

        raise FlowError("Greeting steps loop without reaching a menu or end", step=name)

    def start(self) -> list[str]:
        """Begin a conversation at ``startStep``; returns the messages sent."""
        self.history.clear()
        self.attempts = 0
        return self._enter(self.document.start_step)

    def reply(self, text: str) -> list[str]:
        """Feed a contact reply to the current menu; returns the messages sent.

        Raises:
            FlowError: If the conversation is not waiting for a reply.
        """
        if self.status != SimulatorStatus.awaiting or self.current_step is None:
            raise FlowError("Conversation is not awaiting a reply", status=self.status.value)

        self.history.append(("user", text))
        step = self.document.get_step(self.current_step)
        if not isinstance(step, MenuStep):
            raise FlowError("Current step is not a menu", step=self.current_step)

        option = match_option(text, step.options)
        if option is not None:
            logger.debug(
                "Option selected",
                extra={"step": self.current_step, "option": option.id, "next": option.next},
            )
            return self._enter(option.next)

        self.attempts += 1
        outbox: list[str] = []
        self._say(self.fallback_message, outbox)
        if self.attempts >= self.max_attempts:
            logger.info(
                "Conversation abandoned after invalid replies",
                extra={"step": self.current_step, "attempts": self.attempts},
            )
            self.status = SimulatorStatus.abandoned
            return outbox

        self._say(render_menu(step), outbox)
        return outbox

    @property
    def is_active(self) -> bool:
        return self.status == SimulatorStatus.awaiting
