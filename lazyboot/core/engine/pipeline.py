"""
Install pipeline — the fallback-chain executor.

Every install step in a bootstrap goes through here:

    stage prompt → task skip checks → task prompt
        → primary → fallbacks[0] → fallbacks[1] → … (first ok wins)

Outcomes:
    success   primary succeeded
    degraded  fallback N succeeded (``fallback_index=N``)
    skipped   declined at a prompt, or the tool is already present
    failed    optional task, every action failed (warning, run continues)

A required task whose actions all fail raises FatalTaskError, which
is the only way out of a stage.
"""

from __future__ import annotations

import logging
import shutil
from typing import Callable

from lazyboot.adapters.registry import AdapterRegistry
from lazyboot.core.errors import FatalTaskError
from lazyboot.core.models.action import Receipt
from lazyboot.core.models.task import InstallStage, InstallTask, Outcome, TaskResult
from lazyboot.core.observability.logging_config import tag

logger = logging.getLogger(__name__)


class InstallPipeline:
    """Runs install tasks through the adapter registry."""

    def __init__(
        self,
        registry: AdapterRegistry,
        gate,
        work_dir: str = ".",
        which: Callable[[str], str | None] = shutil.which,
    ):
        self._registry = registry
        self._gate = gate
        self._work_dir = work_dir
        self._which = which

    def run_stage(self, stage: InstallStage) -> list[TaskResult]:
        """Ask once for the whole stage, then run each task in order."""
        if stage.prompt and not self._gate.ask(stage.prompt):
            logger.info("Skipping %s", stage.name, extra=tag("SKIP"))
            if stage.decline_message:
                logger.warning(stage.decline_message)
            return [
                TaskResult(task=t.name, outcome=Outcome.SKIPPED, message="declined")
                for t in stage.tasks
            ]

        results = []
        for task in stage.tasks:
            results.append(self._run_isolated(task))
        return results

    def run(self, task: InstallTask) -> TaskResult:
        """Run one task: gate, then primary and fallbacks in order.

        Raises:
            FatalTaskError: If ``task.required`` and every action failed.
        """
        if task.skip_when_present and all(self._which(b) for b in task.skip_when_present):
            logger.info(
                "%s already installed (%s)",
                task.display_name, ", ".join(task.skip_when_present),
            )
            return TaskResult(task=task.name, outcome=Outcome.SKIPPED, message="already installed")

        if task.prompt and not self._gate.ask(task.prompt):
            logger.info("Skipping %s", task.display_name, extra=tag("SKIP"))
            return TaskResult(task=task.name, outcome=Outcome.SKIPPED, message="declined")

        receipts: list[Receipt] = []
        for index, action in enumerate(task.actions):
            if index == 0:
                logger.info("%s: %s", task.display_name, action.name or action.id)
            else:
                logger.info("Trying alternative for %s: %s", task.display_name, action.name or action.id)

            receipt = self._registry.execute_action(action, work_dir=self._work_dir)
            receipts.append(receipt)

            if receipt.ok:
                if index == 0:
                    logger.info("%s done", task.display_name, extra=tag("OK"))
                    return TaskResult(task=task.name, outcome=Outcome.SUCCESS, receipts=receipts)
                logger.info(
                    "%s done via fallback %s", task.display_name, action.id, extra=tag("OK"),
                )
                return TaskResult(
                    task=task.name,
                    outcome=Outcome.DEGRADED,
                    fallback_index=index - 1,
                    receipts=receipts,
                )

            logger.debug("%s failed: %s", action.id, receipt.error)

        last_error = receipts[-1].error or "unknown error"
        if task.required:
            logger.error("%s failed: %s", task.display_name, last_error)
            raise FatalTaskError(task.name, last_error)

        message = f"{task.display_name} failed: {last_error}"
        logger.warning(message)
        return TaskResult(task=task.name, outcome=Outcome.FAILED, receipts=receipts, message=message)

    def _run_isolated(self, task: InstallTask) -> TaskResult:
        """Run a task so that only FatalTaskError escapes the stage."""
        try:
            return self.run(task)
        except FatalTaskError:
            raise
        except Exception as e:
            if task.required:
                raise FatalTaskError(task.name, str(e)) from e
            message = f"{task.display_name} failed unexpectedly: {e}"
            logger.warning(message)
            return TaskResult(task=task.name, outcome=Outcome.FAILED, message=message)
