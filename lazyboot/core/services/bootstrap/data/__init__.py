"""
L0 Data — static install recipes for the bootstrap catalog.
"""

from lazyboot.core.services.bootstrap.data.recipes import (  # noqa: F401
    GO_TOOLS,
    MANAGER_BINARIES,
    NEOVIM_SYSTEM_PREFIXES,
    PACKAGE_RECIPES,
    VENV_PACKAGES,
)
