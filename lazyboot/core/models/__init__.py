"""
Domain models — Pydantic types for the bootstrapper.

All models are re-exported here for convenient access:

    from lazyboot.core.models import Action, Receipt, InstallTask, PlatformDescriptor
"""

from lazyboot.core.models.action import Action, Receipt
from lazyboot.core.models.artifact import ConfigArtifact
from lazyboot.core.models.platform import (
    Architecture,
    OperatingSystem,
    PlatformDescriptor,
)
from lazyboot.core.models.policy import ConfirmationMode, ConfirmationPolicy
from lazyboot.core.models.report import RunReport
from lazyboot.core.models.task import InstallStage, InstallTask, Outcome, TaskResult
from lazyboot.core.models.validation import (
    ValidationOutcome,
    ValidationResult,
    ValidationStage,
)

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # artifact.py
    "ConfigArtifact",
    # platform.py
    "Architecture",
    "OperatingSystem",
    "PlatformDescriptor",
    # policy.py
    "ConfirmationMode",
    "ConfirmationPolicy",
    # report.py
    "RunReport",
    # task.py
    "InstallStage",
    "InstallTask",
    "Outcome",
    "TaskResult",
    # validation.py
    "ValidationOutcome",
    "ValidationResult",
    "ValidationStage",
]
