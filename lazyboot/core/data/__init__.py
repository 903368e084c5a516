"""
Static template payloads for the config materializer.

Templates live in ``templates/`` next to this module and are listed in
``templates/artifacts.yml``. They are loaded once and cached for the
process lifetime.

Usage::

    from lazyboot.core.data import load_artifacts, load_home_defaults

    for artifact in load_artifacts():
        print(artifact.path, len(artifact.content))
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from lazyboot.core.models.artifact import ConfigArtifact

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_MANIFEST = "artifacts.yml"


@lru_cache(maxsize=1)
def _manifest() -> dict:
    path = _TEMPLATE_DIR / _MANIFEST
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _build(entries: list[dict], default_root: str) -> list[ConfigArtifact]:
    artifacts = []
    for entry in entries:
        template = _TEMPLATE_DIR / entry["template"]
        artifacts.append(ConfigArtifact(
            path=entry["path"],
            content=template.read_text(encoding="utf-8"),
            executable=entry.get("executable", False),
            root=entry.get("root", default_root),
            feature=entry.get("feature"),
        ))
    return artifacts


def load_artifacts() -> list[ConfigArtifact]:
    """Artifacts written (overwritten) under the config root."""
    return _build(_manifest().get("artifacts", []), "config")


def load_home_defaults() -> list[ConfigArtifact]:
    """Home-level defaults written only when the file is missing."""
    return _build(_manifest().get("home_defaults", []), "home")
