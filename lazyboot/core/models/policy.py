"""
Confirmation policy — how yes/no questions get answered.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from lazyboot.core.errors import ConfigError


class ConfirmationMode(str, Enum):
    ALWAYS_YES = "always_yes"
    ALWAYS_NO = "always_no"
    INTERACTIVE = "interactive"


class ConfirmationPolicy(BaseModel):
    """Immutable answer policy, constructed once from the CLI flags."""

    model_config = ConfigDict(frozen=True)

    mode: ConfirmationMode = ConfirmationMode.INTERACTIVE

    @classmethod
    def from_flags(cls, yes: bool = False, no: bool = False) -> ConfirmationPolicy:
        """Build a policy from ``--yes`` / ``--no``.

        Raises:
            ConfigError: If both flags are set.
        """
        if yes and no:
            raise ConfigError(
                "Cannot specify both -y/--yes and -n/--no at the same time."
            )
        if yes:
            return cls(mode=ConfirmationMode.ALWAYS_YES)
        if no:
            return cls(mode=ConfirmationMode.ALWAYS_NO)
        return cls(mode=ConfirmationMode.INTERACTIVE)

    @property
    def automatic(self) -> bool:
        return self.mode != ConfirmationMode.INTERACTIVE
