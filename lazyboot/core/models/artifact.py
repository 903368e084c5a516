"""
Config artifact model — one generated file.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ConfigArtifact(BaseModel):
    """A named file written verbatim under the config root (or home).

    Content is opaque: it is never parsed, merged or diffed.
    """

    path: str                       # relative to its root
    content: str
    executable: bool = False
    root: Literal["config", "home"] = "config"
    feature: str | None = None      # only written when this install stage ran
