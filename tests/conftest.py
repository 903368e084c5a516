"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from lazyboot.adapters.mock import MockAdapter
from lazyboot.adapters.registry import AdapterRegistry
from lazyboot.core.config.loader import BootstrapConfig
from lazyboot.core.models.policy import ConfirmationMode, ConfirmationPolicy
from lazyboot.core.services.bootstrap.confirmation import ConfirmationGate


class FakeWhich:
    """Stand-in for ``shutil.which`` backed by a set of binary names."""

    def __init__(self, *present: str):
        self.present = set(present)

    def __call__(self, name: str) -> str | None:
        if name in self.present:
            return f"/usr/bin/{name}"
        return None


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return an empty temporary home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def config(home: Path) -> BootstrapConfig:
    """Return a bootstrap config rooted in the temporary home."""
    return BootstrapConfig(home=home)


@pytest.fixture
def mock() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def registry(mock: MockAdapter) -> AdapterRegistry:
    """Return a registry that routes every action to the mock."""
    return AdapterRegistry(mock_adapter=mock)


@pytest.fixture
def yes_gate() -> ConfirmationGate:
    return ConfirmationGate(ConfirmationPolicy(mode=ConfirmationMode.ALWAYS_YES))


@pytest.fixture
def no_gate() -> ConfirmationGate:
    return ConfirmationGate(ConfirmationPolicy(mode=ConfirmationMode.ALWAYS_NO))


@pytest.fixture
def make_which():
    """Factory for fake ``which`` callables: ``make_which("git", "nvim")``."""
    return FakeWhich
