"""
Install task models — tasks, stages, and their outcomes.

A task is a primary Action plus an ordered list of fallback Actions.
A stage groups tasks behind one "do you want this at all?" question.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from lazyboot.core.models.action import Action, Receipt


class Outcome(str, Enum):
    SUCCESS = "success"
    DEGRADED = "degraded"       # a fallback succeeded
    SKIPPED = "skipped"         # declined, or already installed
    FAILED = "failed"           # optional task, every action failed


class InstallTask(BaseModel):
    """One logical install step with its fallback chain."""

    name: str
    label: str = ""
    primary: Action
    fallbacks: list[Action] = Field(default_factory=list)
    required: bool = False
    prompt: str | None = None
    skip_when_present: list[str] = Field(default_factory=list)

    @property
    def actions(self) -> list[Action]:
        """Primary followed by fallbacks, in attempt order."""
        return [self.primary, *self.fallbacks]

    @property
    def display_name(self) -> str:
        return self.label or self.name


class InstallStage(BaseModel):
    """A category of work gated by a single confirmation."""

    name: str
    prompt: str | None = None
    decline_message: str = ""
    tasks: list[InstallTask] = Field(default_factory=list)


class TaskResult(BaseModel):
    """What happened to one task."""

    task: str
    outcome: Outcome
    fallback_index: int | None = None     # set when outcome is DEGRADED
    receipts: list[Receipt] = Field(default_factory=list)
    message: str = ""

    @property
    def used_action(self) -> str | None:
        """ID of the action that succeeded, if any."""
        for r in self.receipts:
            if r.ok:
                return r.action_id
        return None

    def to_dict(self) -> dict:
        return {
            "task": self.task,
            "outcome": self.outcome.value,
            "fallback_index": self.fallback_index,
            "used_action": self.used_action,
            "attempts": [r.action_id for r in self.receipts],
            "message": self.message,
        }
