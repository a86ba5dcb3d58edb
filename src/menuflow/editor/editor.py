"""Chatbot editing sessions.

The stored flow document is the single source of truth. Opening a chatbot
derives a fresh form (and raw text) from it; saving goes through exactly one
path, the guided builder or the raw editor, and replaces the stored document.
Validation always runs before the write, so a failed save leaves the
previous record as it was.
"""

import logging
from dataclasses import dataclass

from menuflow.config.models import AuthoringForm, ChatbotConfig
from menuflow.config.settings import Settings
from menuflow.core.errors import ConfigError
from menuflow.flow.builder import build_flow_from_menu
from menuflow.flow.models import FlowDocument
from menuflow.flow.reverse import derive_form_from_flow
from menuflow.flow.validator import load_flow_text, validate_flow_document
from menuflow.store.backends import ChatbotStore
from menuflow.store.models import ChatbotRecord

logger = logging.getLogger(__name__)


@dataclass
class EditSession:
    """Disposable editing state for one chatbot."""

    chatbot_id: str
    form: AuthoringForm
    raw_text: str = ""
    company_name: str = ""


class ChatbotEditor:
    """Open, create and save chatbots against a store."""

    def __init__(self, store: ChatbotStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or Settings()

    def create(self, chatbot_id: str, config: ChatbotConfig) -> ChatbotRecord:
        """Create or replace a record from an authoring file.

        Fallback message and attempt limit not set in the file come from settings.
        """
        if config.mode == "raw":
            document = validate_flow_document(config.flow)
        else:
            config.form.require_options()
            document = build_flow_from_menu(config.form)

        record = ChatbotRecord(
            id=chatbot_id,
            name=config.name,
            flow_config=document,
            fallback_message=self._form_or_setting(config.form, "fallback_message"),
            max_attempts=self._form_or_setting(config.form, "max_attempts"),
            company_name=config.company_name,
        )
        self.store.save(record)
        logger.info(
            "Chatbot created", extra={"chatbot_id": chatbot_id, "mode": config.mode}
        )
        return record

    def _form_or_setting(self, form: AuthoringForm, name: str):
        if name in form.model_fields_set:
            return getattr(form, name)
        return getattr(self.settings, name)

    def open_for_edit(self, chatbot_id: str) -> EditSession:
        """Derive a fresh editing session from the stored document."""
        record = self.store.get(chatbot_id)
        form = derive_form_from_flow(
            record.flow_config,
            fallback_message=record.fallback_message,
            max_attempts=record.max_attempts,
        )
        raw_text = record.flow_config.to_json() if record.flow_config else ""
        return EditSession(
            chatbot_id=chatbot_id,
            form=form,
            raw_text=raw_text,
            company_name=record.company_name,
        )

    def _persist(
        self,
        chatbot_id: str,
        document: FlowDocument,
        mode: str,
        fallback_message: str | None = None,
        max_attempts: int | None = None,
    ) -> ChatbotRecord:
        record = self.store.get(chatbot_id)
        updates: dict[str, object] = {"flow_config": document}
        if fallback_message is not None:
            updates["fallback_message"] = fallback_message
        if max_attempts is not None:
            if max_attempts < 1:
                raise ConfigError("max_attempts must be at least 1", chatbot_id=chatbot_id)
            updates["max_attempts"] = max_attempts
        updated = record.model_copy(update=updates)
        self.store.save(updated)
        logger.info(
            "Chatbot flow saved",
            extra={"chatbot_id": chatbot_id, "mode": mode, "step_count": len(document.steps)},
        )
        return updated

    def save_from_builder(self, chatbot_id: str, form: AuthoringForm) -> ChatbotRecord:
        """Compile ``form`` and store the result with its sibling fields.

        Raises:
            ConfigError: If the form has no usable option.
        """
        form.require_options()
        document = build_flow_from_menu(form)
        return self._persist(
            chatbot_id,
            document,
            mode="builder",
            fallback_message=form.fallback_message,
            max_attempts=form.max_attempts,
        )

    def save_from_raw(
        self,
        chatbot_id: str,
        text: str,
        fallback_message: str | None = None,
        max_attempts: int | None = None,
    ) -> ChatbotRecord:
        """Store an operator-written document verbatim.

        Raises:
            MalformedDocumentError: If ``text`` is not JSON.
            FlowValidationError: If the document cannot be run.
        """
        document = load_flow_text(text)
        return self._persist(
            chatbot_id,
            document,
            mode="raw",
            fallback_message=fallback_message,
            max_attempts=max_attempts,
        )

    def save(self, session: EditSession, use_raw: bool = False) -> ChatbotRecord:
        """Save ``session`` through the path selected by ``use_raw``.

        The representation not used is left stale; reopen to refresh it.
        """
        if use_raw:
            return self.save_from_raw(
                session.chatbot_id,
                session.raw_text,
                fallback_message=session.form.fallback_message,
                max_attempts=session.form.max_attempts,
            )
        return self.save_from_builder(session.chatbot_id, session.form)
