"""Settings configuration models.

Defaults applied to new chatbot records, plus CLI runtime options.
"""

from typing import Literal

from pydantic import BaseModel, Field

from menuflow.core.constants import DEFAULT_FALLBACK_MESSAGE, DEFAULT_MAX_ATTEMPTS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseModel):
    """Global settings."""

    fallback_message: str = Field(
        default=DEFAULT_FALLBACK_MESSAGE, description="Default reply for unmatched input"
    )
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    log_level: LogLevel = Field(default="INFO")
    store_path: str = Field(
        default="chatbots", description="Directory used by the file-backed chatbot store"
    )

    @classmethod
    def from_env(cls, environ: dict[str, str]) -> "Settings":
        """Build settings from ``MENUFLOW_*`` environment variables."""
        values: dict[str, str] = {}
        for name in cls.model_fields:
            key = f"MENUFLOW_{name.upper()}"
            if key in environ:
                value = environ[key]
                values[name] = value.upper() if name == "log_level" else value
        return cls.model_validate(values)
