"""
Tests for core models — tasks, reports, and errors.
"""

from lazyboot.core.errors import BootstrapError, FatalTaskError, UnsupportedPlatform
from lazyboot.core.models import (
    Action,
    InstallTask,
    Outcome,
    RunReport,
    TaskResult,
    ValidationOutcome,
    ValidationResult,
    ValidationStage,
)
from lazyboot.core.models.action import Receipt


def _action(action_id: str) -> Action:
    return Action(id=action_id, adapter="shell", params={"command": "true"})


class TestInstallTask:
    def test_actions_order(self):
        task = InstallTask(name="t", primary=_action("a"), fallbacks=[_action("b"), _action("c")])
        assert [a.id for a in task.actions] == ["a", "b", "c"]

    def test_display_name(self):
        assert InstallTask(name="t", primary=_action("a")).display_name == "t"
        assert InstallTask(name="t", label="Thing", primary=_action("a")).display_name == "Thing"

    def test_defaults(self):
        task = InstallTask(name="t", primary=_action("a"))
        assert task.required is False
        assert task.fallbacks == []
        assert task.prompt is None


class TestTaskResult:
    def test_used_action(self):
        result = TaskResult(
            task="t",
            outcome=Outcome.DEGRADED,
            fallback_index=0,
            receipts=[
                Receipt.failure(adapter="shell", action_id="a", error="x"),
                Receipt.success(adapter="shell", action_id="b"),
            ],
        )
        assert result.used_action == "b"
        assert result.to_dict()["outcome"] == "degraded"

    def test_no_used_action(self):
        assert TaskResult(task="t", outcome=Outcome.SKIPPED).used_action is None


class TestRunReport:
    def test_ok_status(self):
        report = RunReport()
        report.add(TaskResult(task="a", outcome=Outcome.SUCCESS))
        report.add(TaskResult(task="b", outcome=Outcome.SKIPPED))
        assert report.status == "ok"

    def test_failed_task_degrades_and_warns(self):
        report = RunReport()
        report.add(TaskResult(task="fonts", outcome=Outcome.FAILED, message="fonts failed: offline"))
        assert report.status == "degraded"
        assert report.warnings == ["fonts failed: offline"]

    def test_summary_counts(self):
        report = RunReport()
        for outcome in (Outcome.SUCCESS, Outcome.SUCCESS, Outcome.DEGRADED, Outcome.FAILED):
            report.add(TaskResult(task="t", outcome=outcome))
        summary = report.summary()
        assert summary["succeeded"] == 2
        assert summary["degraded"] == 1
        assert summary["failed"] == 1

    def test_validation_result(self):
        assert ValidationResult(stage=ValidationStage.FULL, outcome=ValidationOutcome.PASS).passed


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(UnsupportedPlatform, BootstrapError)
        assert issubclass(FatalTaskError, BootstrapError)

    def test_fatal_message(self):
        assert str(FatalTaskError("starter", "git failed")) == "Required task 'starter' failed: git failed"
        assert str(FatalTaskError("starter")) == "Required task 'starter' failed"
