"""
lazyboot — CLI entrypoint.

Usage:
    lazyboot            ask before every optional step
    lazyboot -y         answer yes to everything
    lazyboot -n         answer no to everything
    python -m lazyboot.main --help
"""

from __future__ import annotations

import logging
import os
import sys

import click

from lazyboot import __version__
from lazyboot.adapters.registry import build_registry
from lazyboot.core.config.loader import load_config
from lazyboot.core.errors import BootstrapError, ConfigError, UnsupportedPlatform
from lazyboot.core.models.policy import ConfirmationPolicy
from lazyboot.core.observability.logging_config import setup_logging, tag
from lazyboot.core.services.bootstrap.confirmation import ConfirmationGate
from lazyboot.core.services.bootstrap.orchestrator import run_bootstrap
from lazyboot.core.services.bootstrap.platform_resolver import resolve_platform

logger = logging.getLogger("lazyboot")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--yes", "-y", is_flag=True, help="Automatically answer yes to all prompts.")
@click.option("--no", "-n", "no", is_flag=True, help="Automatically answer no to all prompts.")
def cli(yes: bool, no: bool) -> None:
    """Install Neovim and a LazyVim configuration with Python, formatters,
    ctags and Nerd Fonts.

    Existing configuration directories are backed up (or removed) before
    the fresh configuration is written.
    """
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=os.environ.get("LAZYBOOT_LOG_LEVEL", "INFO"),
        log_file=os.environ.get("LAZYBOOT_LOG_FILE"),
        log_file_level=os.environ.get("LAZYBOOT_LOG_FILE_LEVEL"),
    )

    try:
        policy = ConfirmationPolicy.from_flags(yes=yes, no=no)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("Starting Neovim with LazyVim installation (lazyboot %s)", __version__, extra=tag("START"))

    try:
        platform = resolve_platform()
    except UnsupportedPlatform as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        config = load_config()
        report = run_bootstrap(
            platform,
            config,
            ConfirmationGate(policy),
            build_registry(),
        )
    except BootstrapError as e:
        logger.error(str(e))
        sys.exit(1)

    if report.status == "degraded":
        logger.warning("Installation finished with %d warning(s)", len(report.warnings))
        for warning in report.warnings:
            logger.warning("  %s", warning)

    logger.info("Neovim with LazyVim installation complete!", extra=tag("DONE"))
    logger.info("Your previous configuration was backed up if you chose to do so")
    logger.info("Python tools are installed in %s", config.venv_dir)
    logger.info("For troubleshooting, run: nvim -u %s", config.config_root / "troubleshoot.lua")


if __name__ == "__main__":
    cli()
