"""
Platform resolution — (uname -s, uname -m) → Neovim release.

Pure: reads ``platform`` only when no explicit values are given, and
never touches the network or the filesystem.
"""

from __future__ import annotations

import logging
import platform

from lazyboot.core.errors import UnsupportedPlatform
from lazyboot.core.models.platform import Architecture, OperatingSystem, PlatformDescriptor

logger = logging.getLogger(__name__)

_RELEASE_BASE = "https://github.com/neovim/neovim/releases/latest/download"

# uname -s → (OperatingSystem, release asset OS name)
_OS_MAP: dict[str, tuple[OperatingSystem, str]] = {
    "Linux": (OperatingSystem.LINUX, "linux"),
    "Darwin": (OperatingSystem.DARWIN, "macos"),
}

# Accepted uname -m spellings per OS
_ARCH_MAP: dict[OperatingSystem, dict[str, Architecture]] = {
    OperatingSystem.LINUX: {
        "x86_64": Architecture.X86_64,
        "aarch64": Architecture.ARM64,
        "arm64": Architecture.ARM64,
    },
    OperatingSystem.DARWIN: {
        "x86_64": Architecture.X86_64,
        "arm64": Architecture.ARM64,
    },
}


def resolve_platform(system: str | None = None, machine: str | None = None) -> PlatformDescriptor:
    """Resolve the current (or given) platform.

    Args:
        system: Kernel name as printed by ``uname -s`` (default: this host).
        machine: Machine name as printed by ``uname -m`` (default: this host).

    Raises:
        UnsupportedPlatform: For any pair other than Linux × {x86_64,
            aarch64, arm64} and Darwin × {x86_64, arm64}.
    """
    system = platform.system() if system is None else system
    machine = platform.machine() if machine is None else machine

    if system not in _OS_MAP:
        raise UnsupportedPlatform(system, machine)
    os_enum, asset_os = _OS_MAP[system]

    arch = _ARCH_MAP[os_enum].get(machine)
    if arch is None:
        raise UnsupportedPlatform(system, machine)

    archive_root = f"nvim-{asset_os}-{arch.value}"
    descriptor = PlatformDescriptor(
        os=os_enum,
        arch=arch,
        resolved=True,
        download_url=f"{_RELEASE_BASE}/{archive_root}.tar.gz",
        archive_root=archive_root,
    )
    logger.debug("Resolved platform %s → %s", descriptor.label(), descriptor.download_url)
    return descriptor
