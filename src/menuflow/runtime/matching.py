"""Reply matching for menu steps."""

import re
import unicodedata

from menuflow.flow.models import MenuOption

_NUMBER = re.compile(r"^\d+$")


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and surrounding whitespace."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).strip()


def match_option(reply: str, options: list[MenuOption]) -> MenuOption | None:
    """Find the option chosen by ``reply``.

    A bare number selects the option with that id. Otherwise the reply
    matches an option whose normalised label contains it, or is contained
    in it.
    """
    normalized = normalize_text(reply)
    if not normalized:
        return None

    if _NUMBER.match(normalized):
        for option in options:
            if str(option.id) == str(int(normalized)):
                return option
        return None

    for option in options:
        label = normalize_text(option.text)
        if label and (normalized in label or label in normalized):
            return option
    return None
