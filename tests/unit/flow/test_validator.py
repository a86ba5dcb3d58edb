"""Tests for flow document validation."""

import json

import pytest

from menuflow.core.errors import (
    FlowDocumentError,
    FlowValidationError,
    MalformedDocumentError,
)
from menuflow.flow.builder import build_flow_from_menu
from menuflow.flow.models import FlowDocument
from menuflow.flow.validator import (
    check_flow_document,
    load_flow_text,
    parse_flow_text,
    validate_flow_document,
)
from tests.factories import make_flow_dict, make_form


class TestValidateFlowDocument:
    """Structural checks."""

    def test_accepts_hand_written_document(self, flow_dict):
        document = validate_flow_document(flow_dict)

        assert isinstance(document, FlowDocument)
        assert document.start_step == "greeting"

    def test_accepts_builder_output(self, built_document):
        document = validate_flow_document(built_document)

        assert document.to_dict() == built_document.to_dict()

    @pytest.mark.parametrize(
        "options",
        [
            [("A", "a")],
            [("A", ""), ("", "b")],
            [("Ver preços", "Aqui estão..."), ("Suporte", "x"), ("Vendas", "y")],
        ],
    )
    def test_accepts_any_built_form(self, options):
        validate_flow_document(build_flow_from_menu(make_form(*options)))

    def test_rejects_dangling_option_reference(self, built_document):
        """A dangling next is a structural error, not a parse error."""
        # Arrange
        data = built_document.to_dict()
        data["steps"]["main_menu"]["options"][0]["next"] = "does_not_exist"

        # Act
        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(data)

        # Assert
        assert not isinstance(exc_info.value, MalformedDocumentError)
        assert exc_info.value.reference == "does_not_exist"
        assert exc_info.value.field == "steps.main_menu.options.0.next"
        assert "does_not_exist" in str(exc_info.value)

    def test_rejects_dangling_greeting_reference(self, flow_dict):
        flow_dict["steps"]["greeting"]["next"] = "nowhere"

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps.greeting.next"

    def test_rejects_greeting_without_next(self, flow_dict):
        del flow_dict["steps"]["greeting"]["next"]

        with pytest.raises(FlowValidationError, match="non-empty string"):
            validate_flow_document(flow_dict)

    @pytest.mark.parametrize("start_step", [None, "", "   ", 3])
    def test_rejects_missing_start_step(self, flow_dict, start_step):
        flow_dict["startStep"] = start_step

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "startStep"

    def test_rejects_unknown_start_step(self, flow_dict):
        flow_dict["startStep"] = "welcome"

        with pytest.raises(FlowValidationError, match="not defined") as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.reference == "welcome"

    @pytest.mark.parametrize("steps", [None, {}, [], "greeting"])
    def test_rejects_empty_or_non_mapping_steps(self, flow_dict, steps):
        flow_dict["steps"] = steps

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps"

    @pytest.mark.parametrize("step_type", ["transfer", None, ["menu"]])
    def test_rejects_unknown_step_type(self, flow_dict, step_type):
        flow_dict["steps"]["bye"]["type"] = step_type

        with pytest.raises(FlowValidationError, match="Unknown step type") as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps.bye.type"

    def test_rejects_non_object_step(self, flow_dict):
        flow_dict["steps"]["bye"] = "end"

        with pytest.raises(FlowValidationError, match="Step must be an object"):
            validate_flow_document(flow_dict)

    def test_rejects_non_list_options(self, flow_dict):
        flow_dict["steps"]["main_menu"]["options"] = {"1": "support"}

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps.main_menu.options"

    def test_rejects_non_object_document(self):
        with pytest.raises(FlowValidationError, match="must be an object"):
            validate_flow_document(["steps"])

    def test_reports_field_type_errors(self, flow_dict):
        flow_dict["steps"]["bye"]["message"] = {"text": "Até logo!"}

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps.bye.message"

    def test_field_path_omits_step_type(self, flow_dict):
        flow_dict["steps"]["main_menu"]["options"][0]["text"] = 42

        with pytest.raises(FlowValidationError) as exc_info:
            validate_flow_document(flow_dict)

        assert exc_info.value.field == "steps.main_menu.options.0.text"

    def test_tolerates_unknown_fields(self, flow_dict):
        """Extra fields pass through untouched."""
        flow_dict["greetings"] = {"morning": "Bom dia"}
        flow_dict["steps"]["bye"]["transfer_message"] = "Aguarde"
        flow_dict["steps"]["main_menu"]["options"][0]["emoji"] = "🛠️"

        document = validate_flow_document(flow_dict)

        assert document.to_dict() == flow_dict
        assert document.steps["bye"].extras == {"transfer_message": "Aguarde"}

    def test_tolerates_string_and_non_contiguous_option_ids(self, flow_dict):
        options = flow_dict["steps"]["main_menu"]["options"]
        options[0]["id"] = "1"
        options[1]["id"] = 7

        document = validate_flow_document(flow_dict)

        assert document.to_dict()["steps"]["main_menu"]["options"][0]["id"] == "1"
        assert document.steps["main_menu"].options[1].id == 7

    def test_does_not_modify_candidate(self, flow_dict):
        snapshot = json.loads(json.dumps(flow_dict))

        validate_flow_document(flow_dict)

        assert flow_dict == snapshot


class TestParseAndLoad:
    """Text parsing and the two error kinds."""

    def test_parse_returns_structured_value(self):
        assert parse_flow_text('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("text", ["", "   ", "{not json", "{'single': 'quotes'}"])
    def test_parse_rejects_malformed_text(self, text):
        with pytest.raises(MalformedDocumentError):
            parse_flow_text(text)

    def test_malformed_error_reports_position(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            parse_flow_text('{\n  "startStep": \n}')

        assert exc_info.value.context["line"] == 3

    def test_deeply_nested_text_is_malformed(self):
        """Nesting beyond the parser's depth is reported, not raised as RecursionError."""
        text = "[" * 100000 + "]" * 100000

        with pytest.raises(MalformedDocumentError, match="nested too deeply"):
            load_flow_text(text)

    def test_load_distinguishes_malformed_from_invalid(self, flow_dict):
        with pytest.raises(MalformedDocumentError):
            load_flow_text("{")

        flow_dict["startStep"] = "nope"
        with pytest.raises(FlowValidationError):
            load_flow_text(json.dumps(flow_dict))

    def test_both_kinds_share_a_base(self):
        assert issubclass(MalformedDocumentError, FlowDocumentError)
        assert issubclass(FlowValidationError, FlowDocumentError)
        assert not issubclass(MalformedDocumentError, FlowValidationError)

    def test_load_valid_text(self, flow_dict):
        document = load_flow_text(json.dumps(flow_dict, ensure_ascii=False))

        assert document.to_dict() == flow_dict


class TestCheckFlowDocument:
    """Non-raising validation."""

    def test_valid(self, flow_dict):
        result = check_flow_document(flow_dict)

        assert result.is_valid
        assert result.document is not None
        assert result.error is None

    def test_invalid(self):
        result = check_flow_document(make_flow_dict(startStep="x"))

        assert not result.is_valid
        assert result.document is None
        assert isinstance(result.error, FlowValidationError)
