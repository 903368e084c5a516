"""
Adapters — the only code that touches the outside world.

    shell       run commands (package managers, git, curl, sudo cp)
    filesystem  local copy / remove / touch / mkdir
    archive     HTTP download + tar/zip extraction
    mock        test double
"""

from lazyboot.adapters.base import Adapter, ExecutionContext
from lazyboot.adapters.mock import MockAdapter
from lazyboot.adapters.registry import AdapterRegistry, build_registry

__all__ = ["Adapter", "AdapterRegistry", "ExecutionContext", "MockAdapter", "build_registry"]
