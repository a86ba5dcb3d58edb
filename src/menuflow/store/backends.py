"""Chatbot record stores.

The editor only needs get/save; the stores here stand in for the hosted
table (``whatsapp_automations``) in tests and for the command line.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from menuflow.config.settings import Settings
from menuflow.core.errors import ConfigError, RecordNotFoundError
from menuflow.store.models import ChatbotRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatbotStore(Protocol):
    """Persistence collaborator keyed by chatbot id."""

    def get(self, chatbot_id: str) -> ChatbotRecord: ...

    def save(self, record: ChatbotRecord) -> None: ...

    def list_all(self) -> list[ChatbotRecord]: ...

    def delete(self, chatbot_id: str) -> None: ...


class InMemoryChatbotStore:
    """Dict-backed store. Records are copied in and out."""

    def __init__(self) -> None:
        self._records: dict[str, ChatbotRecord] = {}

    def get(self, chatbot_id: str) -> ChatbotRecord:
        record = self._records.get(chatbot_id)
        if record is None:
            raise RecordNotFoundError("Chatbot not found", chatbot_id=chatbot_id)
        return record.model_copy(deep=True)

    def save(self, record: ChatbotRecord) -> None:
        self._records[record.id] = record.model_copy(deep=True)

    def list_all(self) -> list[ChatbotRecord]:
        return [record.model_copy(deep=True) for record in self._records.values()]

    def delete(self, chatbot_id: str) -> None:
        if self._records.pop(chatbot_id, None) is None:
            raise RecordNotFoundError("Chatbot not found", chatbot_id=chatbot_id)


class FileChatbotStore:
    """One JSON file per chatbot inside ``directory``."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, chatbot_id: str) -> Path:
        if not chatbot_id or chatbot_id in (".", "..") or any(sep in chatbot_id for sep in "/\\"):
            raise ConfigError("Chatbot id must be a plain file name", chatbot_id=chatbot_id)
        return self.directory / f"{chatbot_id}.json"

    def get(self, chatbot_id: str) -> ChatbotRecord:
        path = self._path(chatbot_id)
        if not path.exists():
            raise RecordNotFoundError("Chatbot not found", chatbot_id=chatbot_id)
        with open(path, encoding="utf-8") as f:
            return ChatbotRecord.model_validate(json.load(f))

    def save(self, record: ChatbotRecord) -> None:
        path = self._path(record.id)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, ensure_ascii=False, indent=2)
        tmp_path.replace(path)
        logger.debug("Chatbot record written", extra={"chatbot_id": record.id, "path": str(path)})

    def list_all(self) -> list[ChatbotRecord]:
        if not self.directory.is_dir():
            return []
        return [self.get(path.stem) for path in sorted(self.directory.glob("*.json"))]

    def delete(self, chatbot_id: str) -> None:
        path = self._path(chatbot_id)
        if not path.exists():
            raise RecordNotFoundError("Chatbot not found", chatbot_id=chatbot_id)
        path.unlink()


class StoreFactory:
    """Create the chatbot store selected by settings."""

    @staticmethod
    def create(settings: Settings, backend: str = "file") -> ChatbotStore:
        if backend == "memory":
            return InMemoryChatbotStore()
        elif backend == "file":
            return FileChatbotStore(settings.store_path)
        else:
            raise ValueError(f"Unsupported store backend: {backend}")
