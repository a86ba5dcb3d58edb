"""Flow document model, builder, reverse mapper and validator."""

from menuflow.flow.builder import build_flow_from_menu
from menuflow.flow.models import EndStep, FlowDocument, GreetingStep, MenuOption, MenuStep, Step
from menuflow.flow.reverse import derive_form_from_flow, derive_menu_options_from_flow
from menuflow.flow.validator import (
    ValidationResult,
    check_flow_document,
    load_flow_text,
    parse_flow_text,
    validate_flow_document,
)

__all__ = [
    "FlowDocument",
    "Step",
    "GreetingStep",
    "MenuStep",
    "EndStep",
    "MenuOption",
    "build_flow_from_menu",
    "derive_menu_options_from_flow",
    "derive_form_from_flow",
    "validate_flow_document",
    "check_flow_document",
    "parse_flow_text",
    "load_flow_text",
    "ValidationResult",
]
