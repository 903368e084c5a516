"""
Logging configuration — central setup for the CLI entrypoint.

Called once at startup by main.py. Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Console lines carry a bracketed tag so a long, partially failed run
stays readable::

    [INFO] Linux platform detected, architecture: x86_64
    [BACKUP] Backing up /home/me/.config/nvim to /home/me/.config/nvim.bak
    [WARN] system-deps failed: every action failed
    [OK] Neovim installation complete

The tag defaults to the level name (WARNING → WARN). Pass
``extra=tag("OK")`` to override it for a single record.

Levels are resolved in precedence order:
    LAZYBOOT_LOG_LEVEL env var  >  INFO (default)

Optional file output via LAZYBOOT_LOG_FILE / LAZYBOOT_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

# ── Format strings ──────────────────────────────────────────────

# Console: tag + message
_FMT_CONSOLE = "[%(tag)s] %(message)s"

# DEBUG console: tag plus logger:line
_FMT_DEBUG = "[%(tag)s] %(name)s:%(lineno)d %(message)s"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s [%(tag)s] %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_LEVEL_TAGS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


def tag(name: str) -> dict[str, str]:
    """``extra=`` payload that overrides the console tag of one record."""
    return {"tag": name}


class TaggedFormatter(logging.Formatter):
    """Formatter that fills ``%(tag)s`` from the record or its level."""

    def format(self, record: logging.LogRecord) -> str:
        if not getattr(record, "tag", None):
            record.tag = _LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    fmt = _FMT_DEBUG if numeric_level <= logging.DEBUG else _FMT_CONSOLE

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(TaggedFormatter(fmt))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(TaggedFormatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
