"""
Adapter registry — central dispatch for all external actions.

The pipeline and the validator never talk to adapters directly; they
hand an Action to the registry and get a Receipt back.
"""

from __future__ import annotations

import logging
import shutil
import time

from lazyboot.adapters.base import Adapter, ExecutionContext
from lazyboot.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters.

    Mock mode routes every action to a single mock adapter, which is
    how the tests run whole bootstraps without touching the machine.
    """

    def __init__(self, mock_adapter: Adapter | None = None):
        self._adapters: dict[str, Adapter] = {}
        self._mock_adapter = mock_adapter

    def register(self, adapter: Adapter) -> None:
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def execute_action(self, action: Action, work_dir: str = ".") -> Receipt:
        """Execute an action through the appropriate adapter.

        1. Resolves the adapter (or the mock)
        2. Builds the execution context
        3. Validates the action
        4. Executes
        5. Returns a Receipt (never raises)
        """
        start_time = time.monotonic()

        context = ExecutionContext(
            action=action,
            work_dir=work_dir,
            params=action.params,
        )

        adapter = self._mock_adapter or self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        try:
            is_valid, error_msg = adapter.validate(context)
            if not is_valid:
                return Receipt.failure(
                    adapter=action.adapter,
                    action_id=action.id,
                    error=f"Validation failed: {error_msg}",
                )
        except Exception as e:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation error: {e}",
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt


def build_registry(which=shutil.which) -> AdapterRegistry:
    """Registry wired with the real adapters."""
    from lazyboot.adapters.network.archive import ArchiveAdapter
    from lazyboot.adapters.shell.command import ShellCommandAdapter
    from lazyboot.adapters.shell.filesystem import FilesystemAdapter

    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter(which=which))
    registry.register(FilesystemAdapter())
    registry.register(ArchiveAdapter())
    return registry
