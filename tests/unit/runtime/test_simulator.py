"""Tests for the offline flow simulator."""

import pytest

from menuflow.core.constants import DEFAULT_GREETING_MESSAGE, DEFAULT_OPTION_REPLY
from menuflow.core.errors import FlowError
from menuflow.flow.models import FlowDocument
from menuflow.runtime.simulator import FlowSimulator, SimulatorStatus, render_menu


@pytest.fixture
def simulator(built_document):
    return FlowSimulator(
        built_document, fallback_message="Não entendi", max_attempts=2, company_name="ACME"
    )


def test_start_runs_greeting_then_waits_on_menu(simulator):
    messages = simulator.start()

    assert messages[0] == DEFAULT_GREETING_MESSAGE
    assert "1 - Suporte" in messages[1]
    assert "2 - Vendas" in messages[1]
    assert simulator.status == SimulatorStatus.awaiting
    assert simulator.current_step == "main_menu"


def test_choosing_option_sends_reply_step(simulator):
    simulator.start()

    messages = simulator.reply("2")

    assert messages[0].startswith(DEFAULT_OPTION_REPLY)
    assert simulator.current_step == "opt_2"
    assert simulator.is_active


def test_return_option_goes_back_to_main_menu(simulator):
    simulator.start()
    simulator.reply("1")

    simulator.reply("1")

    assert simulator.current_step == "main_menu"


def test_end_option_finishes_with_company_name(simulator):
    simulator.start()
    simulator.reply("Suporte")

    messages = simulator.reply("2")

    assert simulator.status == SimulatorStatus.finished
    assert "ACME" in messages[-1]
    assert "{{empresa}}" not in messages[-1]
    assert not simulator.is_active


def test_invalid_reply_repeats_menu(simulator):
    simulator.start()

    messages = simulator.reply("banana")

    assert messages[0] == "Não entendi"
    assert "1 - Suporte" in messages[1]
    assert simulator.attempts == 1
    assert simulator.status == SimulatorStatus.awaiting


def test_too_many_invalid_replies_abandon(simulator):
    simulator.start()
    simulator.reply("banana")

    messages = simulator.reply("laranja")

    assert messages == ["Não entendi"]
    assert simulator.status == SimulatorStatus.abandoned


def test_valid_reply_resets_attempts(simulator):
    simulator.start()
    simulator.reply("banana")

    simulator.reply("1")

    assert simulator.attempts == 0


def test_reply_before_start_fails(simulator):
    with pytest.raises(FlowError, match="not awaiting"):
        simulator.reply("1")


def test_reply_after_end_fails(simulator):
    simulator.start()
    simulator.reply("1")
    simulator.reply("2")

    with pytest.raises(FlowError):
        simulator.reply("1")


def test_history_records_both_sides(simulator):
    simulator.start()
    simulator.reply("1")

    speakers = [speaker for speaker, _ in simulator.history]
    assert speakers == ["bot", "bot", "user", "bot"]


def test_greeting_loop_is_detected():
    document = FlowDocument.model_validate(
        {
            "startStep": "a",
            "steps": {
                "a": {"type": "greeting", "message": "A", "next": "b"},
                "b": {"type": "greeting", "message": "B", "next": "a"},
            },
        }
    )

    with pytest.raises(FlowError, match="loop"):
        FlowSimulator(document).start()


def test_hand_written_multilevel_menu(flow_dict):
    simulator = FlowSimulator(FlowDocument.model_validate(flow_dict))
    simulator.start()

    messages = simulator.reply("1")

    assert messages == ["Conectando ao suporte..."]
    assert simulator.status == SimulatorStatus.finished


def test_render_menu_without_message():
    document = FlowDocument.model_validate(
        {
            "startStep": "m",
            "steps": {
                "m": {"type": "menu", "options": [{"id": 1, "text": "A", "next": "m"}]},
            },
        }
    )

    assert render_menu(document.steps["m"]) == "1 - A"
