"""
Platform descriptor — what machine we are provisioning.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OperatingSystem(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"


class Architecture(str, Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"


class PlatformDescriptor(BaseModel):
    """Resolved platform plus the Neovim release to fetch for it.

    Frozen: built once at startup and shared read-only by every stage.
    """

    model_config = ConfigDict(frozen=True)

    os: OperatingSystem
    arch: Architecture
    resolved: bool = True
    download_url: str
    archive_root: str               # top-level directory inside the tarball
    install_strategy: str = "prebuilt-tarball"

    @property
    def is_linux(self) -> bool:
        return self.os == OperatingSystem.LINUX

    @property
    def is_darwin(self) -> bool:
        return self.os == OperatingSystem.DARWIN

    def label(self) -> str:
        """Human label, e.g. ``linux/x86_64``."""
        return f"{self.os.value}/{self.arch.value}"
