"""Shared fixtures for Menuflow tests."""

import logging
from pathlib import Path

import pytest

from menuflow.config.models import ChatbotConfig
from menuflow.editor.editor import ChatbotEditor
from menuflow.flow.builder import build_flow_from_menu
from menuflow.flow.models import FlowDocument
from menuflow.store.backends import InMemoryChatbotStore
from tests.factories import make_flow_dict, make_form

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples"


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("menuflow")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture
def support_form():
    """Two-option form from the support/sales scenario."""
    return make_form(
        ("Suporte", "Conectando você ao suporte..."),
        ("Vendas", ""),
    )


@pytest.fixture
def built_document(support_form) -> FlowDocument:
    return build_flow_from_menu(support_form)


@pytest.fixture
def flow_dict() -> dict:
    return make_flow_dict()


@pytest.fixture
def memory_store() -> InMemoryChatbotStore:
    return InMemoryChatbotStore()


@pytest.fixture
def editor(memory_store) -> ChatbotEditor:
    return ChatbotEditor(memory_store)


@pytest.fixture
def support_bot(editor, support_form):
    """A stored chatbot created through the guided builder."""
    config = ChatbotConfig(name="Suporte", company_name="ACME", form=support_form)
    return editor.create("bot-1", config)
