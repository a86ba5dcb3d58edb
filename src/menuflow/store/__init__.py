"""Chatbot record persistence."""

from menuflow.store.backends import (
    ChatbotStore,
    FileChatbotStore,
    InMemoryChatbotStore,
    StoreFactory,
)
from menuflow.store.models import ChatbotRecord

__all__ = [
    "ChatbotRecord",
    "ChatbotStore",
    "InMemoryChatbotStore",
    "FileChatbotStore",
    "StoreFactory",
]
