"""
Bootstrap error hierarchy.

Only the conditions listed here ever stop a run. Everything else
(failed optional installs, validation problems) is reported as a
warning and the run carries on.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for errors that abort the bootstrap."""


class ConfigError(BootstrapError):
    """Raised when configuration or CLI flags are invalid."""


class UnsupportedPlatform(BootstrapError):
    """Raised when the (OS, architecture) pair has no Neovim release."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Unsupported platform: {os_name} / {arch}")


class FatalTaskError(BootstrapError):
    """Raised when a required install task exhausts its fallback chain."""

    def __init__(self, task_name: str, error: str = ""):
        self.task_name = task_name
        self.error = error
        msg = f"Required task '{task_name}' failed"
        if error:
            msg += f": {error}"
        super().__init__(msg)


class BackupError(BootstrapError):
    """Raised when a directory could not be copied to its backup slot."""


class MaterializeError(BootstrapError):
    """Raised when a config artifact cannot be written."""
