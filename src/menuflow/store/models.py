"""Persisted chatbot record."""

from typing import Any

from pydantic import BaseModel, Field

from menuflow.core.constants import DEFAULT_FALLBACK_MESSAGE, DEFAULT_MAX_ATTEMPTS
from menuflow.flow.models import FlowDocument


class ChatbotRecord(BaseModel):
    """A chatbot as stored by the backend.

    ``flow_config`` is the source of truth for the conversation. The
    authoring form is always derived from it and never stored.
    """

    id: str = Field(description="Chatbot identifier")
    name: str = Field(default="", description="Display name")
    flow_config: FlowDocument | None = Field(default=None, description="Stored flow document")
    fallback_message: str = Field(default=DEFAULT_FALLBACK_MESSAGE)
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    company_name: str = Field(default="", description="Substituted for {{empresa}} at runtime")
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude={"flow_config"})
        data["flow_config"] = self.flow_config.to_dict() if self.flow_config else None
        return data
