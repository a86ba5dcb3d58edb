"""Core constants and enums."""

from enum import Enum

# Version tag written into every built document. Informational only.
FLOW_VERSION = "2.0"


class StepType(str, Enum):
    """Step types understood by the conversation runtime."""

    GREETING = "greeting"
    MENU = "menu"
    END = "end"


class StepName(str, Enum):
    """Fixed step identifiers produced by the builder."""

    GREETING = "greeting"
    MAIN_MENU = "main_menu"
    GOODBYE = "goodbye"


REPLY_STEP_PREFIX = "opt_"

# Placeholder replaced with the business name by the runtime
COMPANY_PLACEHOLDER = "{{empresa}}"

DEFAULT_GREETING_MESSAGE = "Olá! 👋 Seja bem-vindo(a) ao nosso atendimento."
DEFAULT_MENU_MESSAGE = "📋 Menu Principal\n\nEscolha uma opção:"
DEFAULT_OPTION_REPLY = "✅ Recebemos sua solicitação! Em breve retornaremos."
DEFAULT_OPTION_TEXT = "Opção {position}"
DEFAULT_GOODBYE_MESSAGE = (
    f"✅ Obrigado pelo contato com {COMPANY_PLACEHOLDER}! Volte sempre! 👋"
)
DEFAULT_FALLBACK_MESSAGE = (
    "Não entendi 😅\nPor favor, escolha uma opção válida para continuar."
)
DEFAULT_MAX_ATTEMPTS = 3

RETURN_OPTION_TEXT = "↩️ Voltar ao menu principal"
END_OPTION_TEXT = "👋 Encerrar atendimento"


def reply_step_name(position: int) -> str:
    """Identifier of the reply step spawned by the option at ``position``."""
    return f"{REPLY_STEP_PREFIX}{position}"
