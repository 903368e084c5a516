"""
Action and Receipt models — the execution contract.

An Action describes one external step (a command, a download, a file
operation). A Receipt is what came back. The pipeline never looks
inside an Action; it only reads the Receipt status.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A single external step, dispatched to an adapter by name."""

    id: str                         # e.g. "system-deps.apt"
    name: str = ""                  # human-readable description
    adapter: str                    # "shell", "filesystem", "archive"
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Result of executing an Action.

    Adapters never raise: a failed command, a missing binary or a
    network error all end up here with ``status="failed"``.
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )
