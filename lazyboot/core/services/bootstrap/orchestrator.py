"""
Bootstrap orchestrator — one run, start to finish.

Order (strictly sequential):

    platform → Neovim binary → system deps → Python tools → formatters
      → ctags → backup sweep → starter config → config files → tags
      → fonts → post-install → validation → temp cleanup

Only ``FatalTaskError`` escapes: a required task failed, or the sweep
left the config root in place. Every other problem is logged, recorded
in the RunReport and the run continues.
Platform resolution happens before this is called, in the CLI.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable

from lazyboot.adapters.registry import AdapterRegistry
from lazyboot.core.config.loader import BootstrapConfig
from lazyboot.core.data import load_artifacts, load_home_defaults
from lazyboot.core.engine.pipeline import InstallPipeline
from lazyboot.core.errors import FatalTaskError, MaterializeError
from lazyboot.core.models.platform import PlatformDescriptor
from lazyboot.core.models.report import RunReport
from lazyboot.core.observability.logging_config import tag
from lazyboot.core.persistence.report_file import save_report
from lazyboot.core.services.bootstrap.backup import BackupRotator
from lazyboot.core.services.bootstrap.catalog import TaskCatalog
from lazyboot.core.services.bootstrap.confirmation import ConfirmationGate
from lazyboot.core.services.bootstrap.materializer import ConfigMaterializer
from lazyboot.core.services.bootstrap.validator import Validator, default_candidates

logger = logging.getLogger(__name__)

# Subdirectories the config root must always have
_CONFIG_DIRS = ("lua/config", "lua/plugins", "lua/user")

_SEARCH_TOOLS = {
    "fd": "'fd' command not found. Some plugins might not work correctly.",
    "rg": "'ripgrep' command not found. Some plugins might not work correctly.",
}


def run_bootstrap(
    platform: PlatformDescriptor,
    config: BootstrapConfig,
    gate: ConfirmationGate,
    registry: AdapterRegistry,
    which: Callable[[str], str | None] = shutil.which,
    validate: bool = True,
) -> RunReport:
    """Provision the editor environment.

    Raises:
        FatalTaskError: A required task (Neovim binary, starter config)
            exhausted its fallbacks.
    """
    report = RunReport(platform=platform.label(), policy=gate.policy.mode.value)
    work_dir = Path(tempfile.mkdtemp(prefix="lazyboot-"))
    logger.debug("Work directory: %s", work_dir)

    try:
        pipeline = InstallPipeline(registry, gate, work_dir=str(work_dir), which=which)
        catalog = TaskCatalog(platform, config, work_dir, which=which)

        declined = _install_tools(pipeline, catalog, report, which)
        _replace_config(pipeline, catalog, config, gate, report, declined)

        for result in pipeline.run_stage(catalog.fonts_stage()):
            report.add(result)
        for result in pipeline.run_stage(catalog.post_install_stage()):
            report.add(result)

        if validate:
            validator = Validator(
                registry,
                config.config_root,
                config.venv_python,
                default_candidates(config.home),
                which=which,
                work_dir=str(work_dir),
            )
            report.validation = validator.validate()
    finally:
        logger.info("Removing temporary files...", extra=tag("CLEANUP"))
        shutil.rmtree(work_dir, ignore_errors=True)

    _verify(config, which)
    report.finish()
    save_report(report, config.state_file)
    return report


def _install_tools(pipeline: InstallPipeline, catalog: TaskCatalog, report: RunReport, which) -> set[str]:
    """Run the tool stages; returns the features the user declined."""
    platform = catalog.platform
    logger.info(
        "%s platform detected, architecture: %s",
        "Linux" if platform.is_linux else "macOS", platform.arch.value,
    )
    logger.info("Using download URL: %s", platform.download_url)

    current = which("nvim")
    if current:
        logger.info("Neovim is already installed: %s", current)
    for result in pipeline.run_stage(catalog.neovim_stage()):
        report.add(result)

    deps_results = pipeline.run_stage(catalog.system_deps_stage())
    for result in deps_results:
        report.add(result)
    if any(r.message != "declined" for r in deps_results):
        for binary, warning in _SEARCH_TOOLS.items():
            found = which(binary)
            if found:
                logger.info("'%s' command is available: %s", binary, found, extra=tag("OK"))
            else:
                logger.warning(warning)
                report.warnings.append(warning)

    declined: set[str] = set()
    python_results = pipeline.run_stage(catalog.python_stage())
    for result in python_results:
        report.add(result)
    if python_results and all(r.message == "declined" for r in python_results):
        declined.add("python")

    for stage in (catalog.formatters_stage(), catalog.ctags_stage()):
        for result in pipeline.run_stage(stage):
            report.add(result)
    return declined


def _replace_config(
    pipeline: InstallPipeline,
    catalog: TaskCatalog,
    config: BootstrapConfig,
    gate: ConfirmationGate,
    report: RunReport,
    declined: set[str],
) -> None:
    logger.info("Checking for existing Neovim configuration directories...", extra=tag("CHECK"))
    backups, removed = BackupRotator().sweep(config.backup_targets, gate)
    report.backups = [str(p) for p in backups]
    report.removed = [str(p) for p in removed]

    root = config.config_root
    if root.exists() or root.is_symlink():
        raise FatalTaskError("starter", f"{root} is still in place; refusing to write over it")

    logger.info("Cloning LazyVim starter repository...", extra=tag("CLONE"))
    root.parent.mkdir(parents=True, exist_ok=True)
    for result in pipeline.run_stage(catalog.starter_stage()):
        report.add(result)

    materializer = ConfigMaterializer(root, config.home)
    materializer.ensure_dirs(*_CONFIG_DIRS)
    artifacts = [a for a in load_artifacts() if a.feature not in declined]
    written, errors = materializer.materialize(artifacts)
    report.artifacts = [str(p) for p in written]
    report.warnings.extend(errors)

    for artifact in load_home_defaults():
        try:
            path = materializer.write_if_missing(artifact)
        except MaterializeError as e:
            logger.error(str(e))
            report.warnings.append(str(e))
            continue
        if path is not None:
            report.artifacts.append(str(path))

    logger.info("Creating initial tags files...", extra=tag("SETUP"))
    for result in pipeline.run_stage(catalog.tags_stage()):
        report.add(result)


def _verify(config: BootstrapConfig, which) -> None:
    """Tell the user where Neovim ended up."""
    found = which("nvim")
    if found:
        logger.info("Verification: Neovim is installed at %s", found)
        logger.info("Run Neovim with: nvim", extra=tag("DONE"))
        return

    for location in (Path("/opt/nvim/bin/nvim"), config.home / "nvim" / "bin" / "nvim"):
        if location.is_file():
            logger.info("Neovim installed to %s", location)
            logger.info("You can run it with: %s", location)
            logger.info("Or add %s to your PATH", location.parent)
            return

    logger.warning("Verification failed: 'nvim' command not found in PATH")
    logger.info("You may need to restart your terminal or update your PATH")
