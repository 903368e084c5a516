"""
Config materializer — write template artifacts into the config tree.

Plain overwrite: no merge, no diff, no per-file backup (directory-level
backups already happened in the sweep). Each write is independent.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from lazyboot.core.errors import MaterializeError
from lazyboot.core.models.artifact import ConfigArtifact
from lazyboot.core.observability.logging_config import tag

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class ConfigMaterializer:
    """Writes ConfigArtifacts under the config root or the home directory."""

    def __init__(self, config_root: Path, home: Path):
        self.config_root = config_root
        self.home = home

    def target(self, artifact: ConfigArtifact) -> Path:
        base = self.home if artifact.root == "home" else self.config_root
        return base / artifact.path

    def write(self, artifact: ConfigArtifact) -> Path:
        """Write one artifact, replacing any existing file.

        Raises:
            MaterializeError: On any filesystem error.
        """
        path = self.target(artifact)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(artifact.content, encoding="utf-8")
            if artifact.executable:
                path.chmod(path.stat().st_mode | _EXEC_BITS)
        except OSError as e:
            raise MaterializeError(f"Cannot write {path}: {e}") from e

        logger.debug("Wrote %s (%d bytes)", path, len(artifact.content))
        return path

    def write_if_missing(self, artifact: ConfigArtifact) -> Path | None:
        """Write only when no file exists yet; returns None when skipped."""
        path = self.target(artifact)
        if path.exists():
            logger.debug("Keeping existing %s", path)
            return None
        logger.info("Creating default %s", path, extra=tag("CONFIG"))
        return self.write(artifact)

    def ensure_dirs(self, *relative: str) -> None:
        """Create directories under the config root (existing ones are fine)."""
        for rel in relative:
            (self.config_root / rel).mkdir(parents=True, exist_ok=True)

    def materialize(self, artifacts: list[ConfigArtifact]) -> tuple[list[Path], list[str]]:
        """Write every artifact; a failed write does not stop the others.

        Returns:
            (written paths, error messages)
        """
        written: list[Path] = []
        errors: list[str] = []
        for artifact in artifacts:
            try:
                written.append(self.write(artifact))
            except MaterializeError as e:
                logger.error(str(e))
                errors.append(str(e))
        logger.info(
            "Wrote %d configuration files to %s", len(written), self.config_root,
            extra=tag("CONFIG"),
        )
        return written, errors
