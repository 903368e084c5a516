"""
Tests for platform resolution — (uname -s, uname -m) → Neovim release.
"""

import pytest

from lazyboot.core.errors import BootstrapError, UnsupportedPlatform
from lazyboot.core.models.platform import Architecture, OperatingSystem
from lazyboot.core.services.bootstrap.platform_resolver import resolve_platform

SUPPORTED = [
    ("Linux", "x86_64"),
    ("Linux", "aarch64"),
    ("Linux", "arm64"),
    ("Darwin", "x86_64"),
    ("Darwin", "arm64"),
]


class TestSupportedPlatforms:
    def test_linux_x86_64(self):
        p = resolve_platform("Linux", "x86_64")
        assert p.os == OperatingSystem.LINUX
        assert p.arch == Architecture.X86_64
        assert p.resolved is True
        assert p.download_url == (
            "https://github.com/neovim/neovim/releases/latest/download/nvim-linux-x86_64.tar.gz"
        )
        assert p.archive_root == "nvim-linux-x86_64"

    def test_linux_aarch64_maps_to_arm64(self):
        p = resolve_platform("Linux", "aarch64")
        assert p.arch == Architecture.ARM64
        assert p.download_url.endswith("nvim-linux-arm64.tar.gz")

    def test_darwin_uses_macos_asset(self):
        p = resolve_platform("Darwin", "arm64")
        assert p.os == OperatingSystem.DARWIN
        assert p.is_darwin
        assert p.download_url.endswith("nvim-macos-arm64.tar.gz")
        assert p.archive_root == "nvim-macos-arm64"

    @pytest.mark.parametrize("system,machine", SUPPORTED)
    def test_url_non_empty(self, system, machine):
        p = resolve_platform(system, machine)
        assert p.download_url
        assert p.install_strategy

    def test_distinct_pairs_yield_distinct_urls(self):
        # aarch64 and arm64 are the same Linux architecture
        urls = {resolve_platform(s, m).download_url for s, m in SUPPORTED}
        assert len(urls) == 4

    def test_label(self):
        assert resolve_platform("Linux", "x86_64").label() == "linux/x86_64"


class TestUnsupportedPlatforms:
    @pytest.mark.parametrize("system,machine", [
        ("Linux", "mips"),
        ("Linux", "i686"),
        ("Darwin", "aarch64"),
        ("Windows", "x86_64"),
        ("FreeBSD", "amd64"),
    ])
    def test_rejected(self, system, machine):
        with pytest.raises(UnsupportedPlatform) as exc:
            resolve_platform(system, machine)
        assert exc.value.os_name == system
        assert exc.value.arch == machine

    def test_message_names_pair(self):
        with pytest.raises(BootstrapError, match="Linux / mips"):
            resolve_platform("Linux", "mips")
