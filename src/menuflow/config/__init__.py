"""Configuration module for Menuflow."""

from menuflow.config.loader import ConfigLoader
from menuflow.config.models import AuthoringForm, ChatbotConfig, MenuOptionForm
from menuflow.config.settings import Settings

__all__ = ["AuthoringForm", "ChatbotConfig", "ConfigLoader", "MenuOptionForm", "Settings"]
