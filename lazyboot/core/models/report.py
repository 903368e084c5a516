"""
RunReport — summary of one bootstrap run.

Built up by the orchestrator as stages complete and written to
``~/.local/state/lazyboot/last-run.json`` at the end, so a partially
failed run can be inspected before re-running.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from lazyboot.core.models.task import Outcome, TaskResult
from lazyboot.core.models.validation import ValidationResult


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class RunReport(BaseModel):
    """Everything a run did, in order."""

    version: int = 1
    platform: str = ""
    policy: str = ""
    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = ""

    task_results: list[TaskResult] = Field(default_factory=list)
    backups: list[str] = Field(default_factory=list)     # created backup slots
    removed: list[str] = Field(default_factory=list)     # directories deleted
    artifacts: list[str] = Field(default_factory=list)   # files written
    validation: list[ValidationResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def add(self, result: TaskResult) -> None:
        self.task_results.append(result)
        if result.outcome == Outcome.FAILED:
            self.warnings.append(result.message or f"{result.task} failed")

    def finish(self) -> None:
        """Stamp the end time."""
        self.ended_at = _now_iso()

    def result_for(self, task: str) -> TaskResult | None:
        for r in self.task_results:
            if r.task == task:
                return r
        return None

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.task_results if r.outcome == outcome)

    @property
    def status(self) -> str:
        """``ok`` when nothing failed, ``degraded`` otherwise.

        Fatal errors never produce a report status; they abort the run.
        """
        if self.count(Outcome.FAILED) or self.warnings:
            return "degraded"
        return "ok"

    def summary(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "succeeded": self.count(Outcome.SUCCESS),
            "degraded": self.count(Outcome.DEGRADED),
            "skipped": self.count(Outcome.SKIPPED),
            "failed": self.count(Outcome.FAILED),
            "backups": len(self.backups),
            "artifacts": len(self.artifacts),
        }
