"""Flow document models.

A flow document is the step graph persisted as ``flow_config`` on a chatbot
record and read by the conversation runtime. Field names are the wire names
the runtime expects, so ``startStep`` keeps its camelCase alias.

Every model accepts unknown fields and keeps them, so documents written for
a richer runtime survive a parse/serialise round trip untouched.
"""

import json
from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from menuflow.core.constants import FLOW_VERSION


class FlowModel(BaseModel):
    """Base for document models: extra fields allowed and preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def extras(self) -> dict[str, Any]:
        """Unknown fields carried alongside the known ones."""
        return dict(self.model_extra or {})


class MenuOption(FlowModel):
    """A numbered transition out of a menu step."""

    id: int | str = Field(description="Option number, 1-based in presentation order")
    text: str = Field(description="Label shown to the contact")
    next: str = Field(description="Step to go to when this option is chosen")


class GreetingStep(FlowModel):
    """One-shot message followed by an unconditional transition."""

    type: Literal["greeting"]
    message: str = Field(default="", description="Message sent on entry")
    next: str = Field(description="Step to advance to automatically")


class MenuStep(FlowModel):
    """Prompt that waits for the contact to pick one of its options."""

    type: Literal["menu"]
    message: str = Field(default="", description="Prompt sent before the options")
    options: list[MenuOption] = Field(default_factory=list)


class EndStep(FlowModel):
    """Terminal message. The conversation finishes here."""

    type: Literal["end"]
    message: str = Field(default="", description="Closing message")


Step = Annotated[GreetingStep | MenuStep | EndStep, Field(discriminator="type")]


class FlowDocument(FlowModel):
    """Portable description of a conversational menu."""

    version: str = Field(default=FLOW_VERSION, description="Informational version tag")
    start_step: str = Field(alias="startStep", description="Step where conversations begin")
    steps: dict[str, Step] = Field(default_factory=dict)

    def get_step(self, name: str) -> GreetingStep | MenuStep | EndStep | None:
        return self.steps.get(name)

    def references(self) -> Iterator[tuple[str, str]]:
        """Yield ``(field_path, target)`` for every outgoing step reference."""
        for name, step in self.steps.items():
            if isinstance(step, GreetingStep):
                yield f"steps.{name}.next", step.next
            elif isinstance(step, MenuStep):
                for index, option in enumerate(step.options):
                    yield f"steps.{name}.options.{index}.next", option.next

    def to_dict(self) -> dict[str, Any]:
        """Wire representation, including any preserved extra fields."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
