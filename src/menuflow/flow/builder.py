"""Menu builder: compile an authoring form into a flow document.

The produced graph always has the same shape::

    greeting -> main_menu -> opt_1 .. opt_N -> (main_menu | goodbye)

The builder never rejects input. Blank fields are replaced with defaults so
the result is always runnable. Rejecting an empty option list is the
caller's job (see ``AuthoringForm.require_options``).
"""

import logging

from menuflow.config.models import AuthoringForm, MenuOptionForm
from menuflow.core.constants import (
    DEFAULT_GOODBYE_MESSAGE,
    DEFAULT_GREETING_MESSAGE,
    DEFAULT_MENU_MESSAGE,
    DEFAULT_OPTION_REPLY,
    DEFAULT_OPTION_TEXT,
    END_OPTION_TEXT,
    FLOW_VERSION,
    RETURN_OPTION_TEXT,
    StepName,
    StepType,
    reply_step_name,
)
from menuflow.flow.models import EndStep, FlowDocument, GreetingStep, MenuOption, MenuStep

logger = logging.getLogger(__name__)


def _or_default(value: str, default: str) -> str:
    return value if value and value.strip() else default


def sanitize_options(options: list[MenuOptionForm]) -> list[MenuOptionForm]:
    """Fill blank labels and replies, then drop rows that are still blank."""
    sanitized = []
    for position, option in enumerate(options, start=1):
        text = _or_default(option.text, DEFAULT_OPTION_TEXT.format(position=position))
        reply = _or_default(option.reply, DEFAULT_OPTION_REPLY)
        sanitized.append(MenuOptionForm(id=option.id, text=text, reply=reply))
    return [option for option in sanitized if option.text.strip()]


def _reply_step(name: str, reply: str) -> MenuStep:
    return MenuStep(
        id=name,
        type=StepType.MENU.value,
        message=reply,
        options=[
            MenuOption(id=1, text=RETURN_OPTION_TEXT, next=StepName.MAIN_MENU.value),
            MenuOption(id=2, text=END_OPTION_TEXT, next=StepName.GOODBYE.value),
        ],
    )


def build_flow_from_menu(form: AuthoringForm) -> FlowDocument:
    """Build a ready-to-run flow document from the guided builder fields.

    Pure and deterministic: equal forms give structurally equal documents.

    Args:
        form: Builder fields. ``fallback_message`` and ``max_attempts`` are
            stored next to the document, not inside it.

    Returns:
        FlowDocument starting at ``greeting``.
    """
    options = sanitize_options(form.options)

    menu_options = []
    reply_steps: dict[str, MenuStep] = {}
    for number, option in enumerate(options, start=1):
        step_name = reply_step_name(number)
        menu_options.append(MenuOption(id=number, text=option.text, next=step_name))
        reply_steps[step_name] = _reply_step(step_name, option.reply)

    greeting = StepName.GREETING.value
    main_menu = StepName.MAIN_MENU.value
    goodbye = StepName.GOODBYE.value

    steps: dict[str, GreetingStep | MenuStep | EndStep] = {
        greeting: GreetingStep(
            id=greeting,
            type=StepType.GREETING.value,
            message=_or_default(form.greeting_message, DEFAULT_GREETING_MESSAGE),
            next=main_menu,
        ),
        main_menu: MenuStep(
            id=main_menu,
            type=StepType.MENU.value,
            message=_or_default(form.menu_message, DEFAULT_MENU_MESSAGE),
            options=menu_options,
        ),
        **reply_steps,
        goodbye: EndStep(id=goodbye, type=StepType.END.value, message=DEFAULT_GOODBYE_MESSAGE),
    }

    logger.debug("Built flow from menu", extra={"option_count": len(menu_options)})

    return FlowDocument(version=FLOW_VERSION, start_step=greeting, steps=steps)
