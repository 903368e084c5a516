"""
Bootstrap services — everything one provisioning run needs.
"""

from lazyboot.core.services.bootstrap.backup import BackupRotator
from lazyboot.core.services.bootstrap.catalog import TaskCatalog
from lazyboot.core.services.bootstrap.confirmation import ConfirmationGate
from lazyboot.core.services.bootstrap.materializer import ConfigMaterializer
from lazyboot.core.services.bootstrap.platform_resolver import resolve_platform
from lazyboot.core.services.bootstrap.validator import Validator
from lazyboot.core.services.bootstrap.orchestrator import run_bootstrap

__all__ = [
    "BackupRotator",
    "ConfigMaterializer",
    "ConfirmationGate",
    "TaskCatalog",
    "Validator",
    "resolve_platform",
    "run_bootstrap",
]
