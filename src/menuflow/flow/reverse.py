"""Reverse mapping: recover builder fields from a stored flow document.

This is a convenience projection, not an inverse of the builder. Defaults,
the return/end options of each reply step, the goodbye message and the start
step are not recovered. Documents that do not follow the builder's naming
(``main_menu``, ``opt_N``) map to an empty or partial option list; nothing
here raises.
"""

import logging
from collections.abc import Mapping
from typing import Any

from menuflow.config.models import AuthoringForm, MenuOptionForm
from menuflow.core.constants import StepName
from menuflow.flow.models import FlowDocument

logger = logging.getLogger(__name__)


def _as_mapping(document: Any) -> Mapping[str, Any] | None:
    if isinstance(document, FlowDocument):
        return document.to_dict()
    if isinstance(document, Mapping):
        return document
    return None


def _steps(document: Any) -> Mapping[str, Any]:
    data = _as_mapping(document)
    if data is None:
        return {}
    steps = data.get("steps")
    return steps if isinstance(steps, Mapping) else {}


def _message_of(steps: Mapping[str, Any], name: Any) -> str:
    if not isinstance(name, str):
        return ""
    step = steps.get(name)
    if not isinstance(step, Mapping):
        return ""
    message = step.get("message")
    return message if isinstance(message, str) else ""


def derive_menu_options_from_flow(document: Any) -> list[MenuOptionForm]:
    """Rebuild the builder's option rows from ``document``.

    Args:
        document: A FlowDocument, its dict form, or None.

    Returns:
        One row per option of the ``main_menu`` step, in order. The reply is
        the message of the step the option points to, or "" if absent.
    """
    steps = _steps(document)
    menu = steps.get(StepName.MAIN_MENU.value)
    if not isinstance(menu, Mapping):
        return []
    options = menu.get("options")
    if not isinstance(options, list):
        return []

    rows = []
    for option in options:
        if not isinstance(option, Mapping):
            continue
        text = option.get("text")
        rows.append(
            MenuOptionForm(
                id=str(option.get("id", "")),
                text=text if isinstance(text, str) else "",
                reply=_message_of(steps, option.get("next")),
            )
        )

    if len(rows) != len(options):
        logger.debug(
            "Skipped unmappable menu options",
            extra={"skipped": len(options) - len(rows)},
        )
    return rows


def derive_form_from_flow(document: Any, **fields: Any) -> AuthoringForm:
    """Best-effort AuthoringForm for re-editing ``document``.

    ``fields`` carries the record's sibling values (``fallback_message``,
    ``max_attempts``).
    """
    steps = _steps(document)
    return AuthoringForm(
        greeting_message=_message_of(steps, StepName.GREETING.value),
        menu_message=_message_of(steps, StepName.MAIN_MENU.value),
        options=derive_menu_options_from_flow(document),
        **fields,
    )
