"""
Filesystem adapter — local file and directory operations.

Used for the steps that need no external tool: copying the extracted
Neovim tree into the home directory, detaching the starter config from
git, creating empty tags files.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from lazyboot.adapters.base import Adapter, ExecutionContext
from lazyboot.core.models.action import Receipt

logger = logging.getLogger(__name__)

_OPERATIONS = {"copy_tree", "mkdir", "remove", "touch"}


class FilesystemAdapter(Adapter):
    """File and directory operations with receipts.

    Action params:
        operation (str): One of 'copy_tree', 'mkdir', 'remove', 'touch'.
        path (str): Target path (relative to working_dir or absolute).
        source (str): Source directory (for 'copy_tree'); its contents
            are merged into ``path``.
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_OPERATIONS))}"

        if not context.params.get("path"):
            return False, "Missing required param: 'path'"

        if operation == "copy_tree" and not context.params.get("source"):
            return False, "Missing required param: 'source' for copy_tree operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        target = self._resolve(context, context.params["path"])

        try:
            if operation == "copy_tree":
                return self._copy_tree(context, target)
            elif operation == "mkdir":
                return self._mkdir(context, target)
            elif operation == "remove":
                return self._remove(context, target)
            else:
                return self._touch(context, target)
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Filesystem error: {e}",
                metadata={"operation": operation, "path": str(target)},
            )

    @staticmethod
    def _resolve(context: ExecutionContext, raw: str) -> Path:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = Path(context.working_dir) / path
        return path

    def _copy_tree(self, ctx: ExecutionContext, target: Path) -> Receipt:
        source = self._resolve(ctx, ctx.params["source"])
        if not source.is_dir():
            return Receipt.failure(
                adapter=self.name,
                action_id=ctx.action.id,
                error=f"Source directory not found: {source}",
            )
        shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Copied {source} into {target}",
            metadata={"source": str(source), "path": str(target)},
        )

    def _mkdir(self, ctx: ExecutionContext, target: Path) -> Receipt:
        target.mkdir(parents=True, exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Directory created: {target}",
            metadata={"path": str(target)},
        )

    def _remove(self, ctx: ExecutionContext, target: Path) -> Receipt:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Removed {target}",
            metadata={"path": str(target)},
        )

    def _touch(self, ctx: ExecutionContext, target: Path) -> Receipt:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.touch(exist_ok=True)
        return Receipt.success(
            adapter=self.name,
            action_id=ctx.action.id,
            output=f"Touched {target}",
            metadata={"path": str(target)},
        )
