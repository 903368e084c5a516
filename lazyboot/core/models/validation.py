"""
Validation result model.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ValidationStage(str, Enum):
    MINIMAL = "minimal"
    FULL = "full"


class ValidationOutcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class ValidationResult(BaseModel):
    stage: ValidationStage
    outcome: ValidationOutcome
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.outcome == ValidationOutcome.PASS
