"""Flow document validation.

Two failure kinds are kept apart so the operator gets an actionable message:

- ``MalformedDocumentError``: the text is not JSON at all.
- ``FlowValidationError``: the value parsed but cannot be run (missing start
  step, unknown step type, dangling ``next`` reference, ...).

Validation has no side effects and reports the first problem found.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from menuflow.core.constants import StepType
from menuflow.core.errors import FlowValidationError, MalformedDocumentError
from menuflow.flow.models import FlowDocument

logger = logging.getLogger(__name__)

VALID_STEP_TYPES = frozenset(t.value for t in StepType)


@dataclass(frozen=True)
class ValidationResult:
    """Non-raising outcome of a validation check."""

    is_valid: bool
    document: FlowDocument | None = None
    error: FlowValidationError | None = None


def parse_flow_text(text: str) -> Any:
    """Parse operator-supplied text into a structured value.

    Raises:
        MalformedDocumentError: If the text is not valid JSON.
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedDocumentError("Flow document is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(
            f"Flow document is not well-formed JSON: {e.msg}",
            line=e.lineno,
            column=e.colno,
        ) from e
    except RecursionError as e:
        raise MalformedDocumentError("Flow document is nested too deeply to parse") from e


def _check_reference(target: Any, steps: Mapping[str, Any], field: str) -> None:
    if not isinstance(target, str) or not target:
        raise FlowValidationError("Step reference must be a non-empty string", field=field)
    if target not in steps:
        raise FlowValidationError(
            f"Reference to unknown step '{target}'", field=field, reference=target
        )


def _check_structure(candidate: Any) -> None:
    if not isinstance(candidate, Mapping):
        raise FlowValidationError(
            f"Flow document must be an object, got {type(candidate).__name__}"
        )

    start_step = candidate.get("startStep")
    if not isinstance(start_step, str) or not start_step.strip():
        raise FlowValidationError("startStep must be a non-empty string", field="startStep")

    steps = candidate.get("steps")
    if not isinstance(steps, Mapping) or not steps:
        raise FlowValidationError("steps must be a non-empty object", field="steps")

    if start_step not in steps:
        raise FlowValidationError(
            f"startStep '{start_step}' is not defined in steps",
            field="startStep",
            reference=start_step,
        )

    for name, step in steps.items():
        path = f"steps.{name}"
        if not isinstance(step, Mapping):
            raise FlowValidationError("Step must be an object", field=path)

        step_type = step.get("type")
        if not isinstance(step_type, str) or step_type not in VALID_STEP_TYPES:
            raise FlowValidationError(
                f"Unknown step type '{step_type}'. Valid: {sorted(VALID_STEP_TYPES)}",
                field=f"{path}.type",
            )

        if step_type == StepType.GREETING:
            _check_reference(step.get("next"), steps, f"{path}.next")
        elif step_type == StepType.MENU:
            options = step.get("options", [])
            if not isinstance(options, list):
                raise FlowValidationError("Menu options must be a list", field=f"{path}.options")
            for index, option in enumerate(options):
                option_path = f"{path}.options.{index}"
                if not isinstance(option, Mapping):
                    raise FlowValidationError("Menu option must be an object", field=option_path)
                _check_reference(option.get("next"), steps, f"{option_path}.next")


def _field_path(loc: tuple[Any, ...]) -> str:
    # Step locations carry the union tag after the step name: steps.<name>.<type>...
    parts = list(loc)
    if len(parts) >= 3 and parts[0] == "steps" and parts[2] in VALID_STEP_TYPES:
        del parts[2]
    return ".".join(str(part) for part in parts)


def _build(candidate: Mapping[str, Any]) -> FlowDocument:
    try:
        return FlowDocument.model_validate(candidate)
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise FlowValidationError(
            f"Invalid value: {first['msg']}", field=_field_path(first["loc"])
        ) from e
    except RecursionError as e:
        raise FlowValidationError("Flow document is nested too deeply") from e


def validate_flow_document(candidate: Any) -> FlowDocument:
    """Confirm ``candidate`` can be interpreted by the conversation runtime.

    Args:
        candidate: A parsed document (dict) or an already built FlowDocument.

    Returns:
        The well-formed FlowDocument. Unknown fields are kept as they were.

    Raises:
        FlowValidationError: At the first structural problem found.
    """
    if isinstance(candidate, FlowDocument):
        candidate = candidate.to_dict()
    _check_structure(candidate)
    document = _build(candidate)
    logger.debug(
        "Flow document validated",
        extra={"start_step": document.start_step, "step_count": len(document.steps)},
    )
    return document


def check_flow_document(candidate: Any) -> ValidationResult:
    """Validate without raising; structural errors are returned in the result."""
    try:
        document = validate_flow_document(candidate)
    except FlowValidationError as e:
        return ValidationResult(is_valid=False, error=e)
    return ValidationResult(is_valid=True, document=document)


def load_flow_text(text: str) -> FlowDocument:
    """Parse and validate operator text in one go.

    Raises:
        MalformedDocumentError: If the text is not JSON.
        FlowValidationError: If the parsed value is not a runnable document.
    """
    return validate_flow_document(parse_flow_text(text))
