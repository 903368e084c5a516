"""
Shell command adapter — run package managers, git, curl, sudo cp.

Commands given as a string go through the shell (so ``&&`` chains work);
commands given as a list are executed directly.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from lazyboot.adapters.base import Adapter, ExecutionContext
from lazyboot.core.models.action import Receipt

logger = logging.getLogger(__name__)

# Keep only the tail of long package-manager output
_OUTPUT_TAIL = 2000


class ShellCommandAdapter(Adapter):
    """Execute external commands and capture output.

    Action params:
        command (str | list[str]): The command to execute.
        requires (list[str]): Binaries that must be on PATH; if one is
            missing the action fails without running (presence detection).
        cwd (str): Working directory (default: context.working_dir).
        env (dict[str, str]): Extra environment variables.
        timeout (int | None): Seconds; default None (no timeout).
    """

    def __init__(self, which=shutil.which):
        self._which = which

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.params.get("command")
        if not command:
            return False, "Missing required param: 'command'"

        missing = [b for b in context.params.get("requires", []) if self._which(b) is None]
        if missing:
            return False, f"Required binary not found: {', '.join(missing)}"

        cwd = context.working_dir
        if cwd and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        command = context.params["command"]
        use_shell = isinstance(command, str)
        timeout = context.params.get("timeout")
        cwd = context.working_dir

        env = os.environ.copy()
        for key, value in context.params.get("env", {}).items():
            env[key] = os.path.expandvars(str(value))

        display = command if use_shell else " ".join(command)
        logger.debug("Executing: %s (cwd=%s)", display, cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                shell=use_shell,
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": display, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": display},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()[-_OUTPUT_TAIL:]
        stderr = result.stderr.strip()[-_OUTPUT_TAIL:]

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=output,
                duration_ms=elapsed_ms,
                metadata={
                    "command": display,
                    "return_code": result.returncode,
                    "stderr": stderr,
                },
            )
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={
                "command": display,
                "return_code": result.returncode,
                "stdout": output,
            },
        )
