"""
Wizard session state.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field

from devterm.core.domain.command_spec import StepSpec
from devterm.core.interfaces.model_bases import DomainModel


class WizardState(str, Enum):
    CREATED = "created"
    COLLECTING = "collecting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WizardSession(DomainModel):
    """Mutable per-conversation wizard state.

    Sessions are mutated by exactly one writer at a time (the wizard service
    holds a per-conversation lock while advancing).
    """

    model_config = ConfigDict(validate_assignment=False)

    conversation_id: str
    command_name: str
    steps: tuple[StepSpec, ...]
    collected_fields: dict[str, str] = Field(default_factory=dict)
    current_step_index: int = 0
    state: WizardState = WizardState.CREATED
    handled_ids: set[str] = Field(default_factory=set)
    project_mention: str | None = None
    selector: bool = False
    rounds: int = 0

    @property
    def current_step(self) -> StepSpec | None:
        if 0 <= self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    @property
    def is_active(self) -> bool:
        return self.state in (WizardState.CREATED, WizardState.COLLECTING)

    @property
    def is_finished(self) -> bool:
        return self.current_step_index >= len(self.steps)

    def begin(self) -> None:
        self.state = WizardState.COLLECTING
        self.current_step_index = 0

    def record(self, value: str | None) -> None:
        """Store the value for the current step and advance."""
        step = self.current_step
        if step is None:
            return
        if value is not None:
            self.collected_fields[step.key] = value
        self.current_step_index += 1
        if self.is_finished:
            self.state = WizardState.COMPLETED

    def cancel(self) -> None:
        self.state = WizardState.CANCELLED

    def restart(self) -> None:
        """Start another collecting round, keeping ``handled_ids``."""
        self.collected_fields = {}
        self.rounds += 1
        self.begin()

    def progress(self) -> dict[str, Any]:
        return {
            "command": self.command_name,
            "step": self.current_step_index + 1,
            "totalSteps": len(self.steps),
        }
