"""Chatbot editing sessions."""

from menuflow.editor.editor import ChatbotEditor, EditSession

__all__ = ["ChatbotEditor", "EditSession"]
