"""Menuflow error hierarchy."""

from typing import Any


class MenuflowError(Exception):
    """Base class for all Menuflow errors.

    Keyword arguments are kept as context and appended to the message,
    e.g. ``MenuflowError("bad", step="greeting")`` -> ``"bad (step=greeting)"``.
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigError(MenuflowError):
    """Raised when an authoring file or form is invalid."""


class FlowDocumentError(MenuflowError):
    """Base class for errors raised while accepting a flow document."""


class MalformedDocumentError(FlowDocumentError):
    """The document text could not be parsed into any structured value."""


class FlowValidationError(FlowDocumentError):
    """The document parsed but is structurally invalid.

    ``field`` is the dotted path of the offending value and ``reference``
    the unresolved step identifier, when there is one.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        reference: str | None = None,
        **context: Any,
    ):
        if field is not None:
            context["field"] = field
        if reference is not None:
            context["reference"] = reference
        super().__init__(message, **context)
        self.field = field
        self.reference = reference


class RecordNotFoundError(MenuflowError):
    """Raised when a chatbot record does not exist in the store."""


class FlowError(MenuflowError):
    """Raised when a flow cannot be walked by the simulator."""
