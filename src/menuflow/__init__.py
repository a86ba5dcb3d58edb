"""Menuflow - authoring of WhatsApp chatbot menu flows.

A chatbot's conversation is stored as a flow document: a small step graph
(greeting, menu and end steps) read by the conversation runtime. Menuflow
builds that document from simple menu fields, maps it back for editing and
validates hand-written documents before they are saved.

Quick start:
    from menuflow import AuthoringForm, MenuOptionForm, build_flow_from_menu

    form = AuthoringForm(options=[MenuOptionForm(text="Ver preços", reply="Aqui estão...")])
    document = build_flow_from_menu(form)
    print(document.to_json())
"""

from menuflow.__version__ import __version__
from menuflow.config.models import AuthoringForm, ChatbotConfig, MenuOptionForm
from menuflow.core.errors import (
    ConfigError,
    FlowDocumentError,
    FlowValidationError,
    MalformedDocumentError,
    MenuflowError,
)
from menuflow.flow import (
    FlowDocument,
    build_flow_from_menu,
    derive_menu_options_from_flow,
    validate_flow_document,
)

__all__ = [
    "__version__",
    "AuthoringForm",
    "ChatbotConfig",
    "MenuOptionForm",
    "FlowDocument",
    "build_flow_from_menu",
    "derive_menu_options_from_flow",
    "validate_flow_document",
    "MenuflowError",
    "ConfigError",
    "FlowDocumentError",
    "MalformedDocumentError",
    "FlowValidationError",
]
