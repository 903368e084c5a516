"""
Post-install validation — start the editor headless, twice.

1. minimal: ``nvim -u minimal_init.lua --headless +qa`` must exit cleanly
2. full:    ``nvim --headless "+Lazy! install" +qa`` lets lazy.nvim fetch plugins

Both are diagnostics only. A failure is a warning, never an abort.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

from lazyboot.adapters.registry import AdapterRegistry
from lazyboot.core.models.action import Action
from lazyboot.core.models.validation import ValidationOutcome, ValidationResult, ValidationStage

logger = logging.getLogger(__name__)


def default_candidates(home: Path) -> list[Path]:
    """Install locations tried when ``nvim`` is not on PATH."""
    return [
        Path("/opt/nvim/bin/nvim"),
        home / "nvim" / "bin" / "nvim",
        Path("/usr/local/bin/nvim"),
    ]


class Validator:
    """Runs the installed editor in minimal then full mode."""

    def __init__(
        self,
        registry: AdapterRegistry,
        config_root: Path,
        venv_python: Path,
        candidates: list[Path],
        which: Callable[[str], str | None] = shutil.which,
        work_dir: str = ".",
    ):
        self._registry = registry
        self._config_root = config_root
        self._venv_python = venv_python
        self._candidates = candidates
        self._which = which
        self._work_dir = work_dir

    def locate(self) -> str | None:
        """Path of the nvim binary, or None."""
        found = self._which("nvim")
        if found:
            return found
        for candidate in self._candidates:
            if candidate.is_file():
                logger.info("Found Neovim at %s", candidate)
                return str(candidate)
        return None

    def validate(self) -> list[ValidationResult]:
        nvim = self.locate()
        if nvim is None:
            logger.warning("nvim command not found, skipping validation")
            logger.info("Plugin installation will happen automatically on first Neovim start")
            detail = "nvim not found"
            return [
                ValidationResult(stage=ValidationStage.MINIMAL, outcome=ValidationOutcome.FAIL, detail=detail),
                ValidationResult(stage=ValidationStage.FULL, outcome=ValidationOutcome.FAIL, detail=detail),
            ]

        env = {"NVIM_PYTHON_HOST_PROG": str(self._venv_python)}
        minimal_init = self._config_root / "minimal_init.lua"

        logger.info("Validating Neovim installation with minimal config...")
        minimal = self._run(
            ValidationStage.MINIMAL,
            Action(
                id="validate.minimal",
                name="nvim minimal config",
                adapter="shell",
                params={"command": [nvim, "-u", str(minimal_init), "--headless", "+qa"], "env": env},
            ),
        )
        if minimal.passed:
            logger.info("Minimal config validation successful")
        else:
            logger.warning("Minimal config validation had issues, proceeding anyway")

        logger.info("Installing plugins with lazy.nvim...")
        full = self._run(
            ValidationStage.FULL,
            Action(
                id="validate.full",
                name="nvim plugin install",
                adapter="shell",
                params={"command": [nvim, "--headless", "+Lazy! install", "+qa"], "env": env},
            ),
        )
        if full.passed:
            logger.info("Plugin installation started successfully")
            logger.info("Some plugins may continue installing on next start")
        else:
            logger.warning("Plugin installation may have encountered issues")
            logger.info("Plugins will be installed on next start of Neovim")

        return [minimal, full]

    def _run(self, stage: ValidationStage, action: Action) -> ValidationResult:
        receipt = self._registry.execute_action(action, work_dir=self._work_dir)
        if receipt.ok:
            return ValidationResult(stage=stage, outcome=ValidationOutcome.PASS)
        return ValidationResult(
            stage=stage,
            outcome=ValidationOutcome.FAIL,
            detail=receipt.error or "",
        )
