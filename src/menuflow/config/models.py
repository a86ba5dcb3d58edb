"""Authoring models.

``AuthoringForm`` is the transient view an operator edits in the guided
builder. It is never stored as such: on save it is compiled into a flow
document, and on re-open it is derived back from the stored document.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from menuflow.core.constants import DEFAULT_FALLBACK_MESSAGE, DEFAULT_MAX_ATTEMPTS
from menuflow.core.errors import ConfigError

SUPPORTED_VERSIONS = frozenset({"1.0"})
CURRENT_VERSION = "1.0"

AuthoringMode = Literal["builder", "raw"]


class MenuOptionForm(BaseModel):
    """One row of the menu builder."""

    id: str = Field(default="", description="Form-local row id, not the option number")
    text: str = Field(default="", description="Option label")
    reply: str = Field(default="", description="Message sent when the option is chosen")


class AuthoringForm(BaseModel):
    """Guided builder fields for a single chatbot."""

    greeting_message: str = Field(default="", description="Welcome message")
    menu_message: str = Field(default="", description="Main menu prompt")
    options: list[MenuOptionForm] = Field(default_factory=list)
    fallback_message: str = Field(
        default=DEFAULT_FALLBACK_MESSAGE, description="Sent when a reply matches no option"
    )
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS, ge=1, description="Invalid replies tolerated per menu"
    )

    def filled_options(self) -> list[MenuOptionForm]:
        return [option for option in self.options if option.text.strip()]

    def require_options(self) -> None:
        """Reject a form with no usable option before it reaches the builder.

        Raises:
            ConfigError: If every option label is blank.
        """
        if not self.filled_options():
            raise ConfigError("Add at least one menu option before saving")


class ChatbotConfig(BaseModel):
    """A chatbot authoring file.

    ``mode`` selects how the flow is produced: ``builder`` compiles ``form``,
    ``raw`` takes ``flow`` as a hand-written document.
    """

    version: str = Field(default=CURRENT_VERSION, description="Authoring file version")
    name: str = Field(description="Chatbot name")
    company_name: str = Field(default="", description="Business name for {{empresa}}")
    mode: AuthoringMode = Field(default="builder")
    form: AuthoringForm = Field(default_factory=AuthoringForm)
    flow: dict[str, Any] | None = Field(default=None, description="Raw flow document")

    def model_post_init(self, __context: object) -> None:
        if self.version not in SUPPORTED_VERSIONS:
            raise ConfigError(
                f"Unsupported authoring file version: {self.version}. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        if self.mode == "raw" and self.flow is None:
            raise ConfigError("mode 'raw' requires a 'flow' document", chatbot=self.name)
