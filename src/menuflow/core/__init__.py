"""Core constants and errors."""

from menuflow.core.constants import FLOW_VERSION, StepName, StepType
from menuflow.core.errors import (
    ConfigError,
    FlowDocumentError,
    FlowError,
    FlowValidationError,
    MalformedDocumentError,
    MenuflowError,
    RecordNotFoundError,
)

__all__ = [
    "FLOW_VERSION",
    "StepName",
    "StepType",
    "MenuflowError",
    "ConfigError",
    "FlowDocumentError",
    "MalformedDocumentError",
    "FlowValidationError",
    "RecordNotFoundError",
    "FlowError",
]
