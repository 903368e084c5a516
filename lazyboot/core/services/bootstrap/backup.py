"""
Backup rotation — preserve existing directories before replacing them.

Backups are siblings named ``<dir>.bak``, ``<dir>.bak.1``, ``<dir>.bak.2``…
The first unused name wins; an existing slot is never written to.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from lazyboot.core.errors import BackupError
from lazyboot.core.observability.logging_config import tag

logger = logging.getLogger(__name__)


class BackupRotator:
    """Backs up or removes directories."""

    def next_slot(self, directory: Path) -> Path:
        """First unused backup path for ``directory`` (linear scan)."""
        base = directory.with_name(f"{directory.name}.bak")
        slot = base
        n = 0
        while slot.exists() or slot.is_symlink():
            n += 1
            slot = base.with_name(f"{base.name}.{n}")
        return slot

    def backup(self, directory: Path) -> Path | None:
        """Copy ``directory`` to its next backup slot.

        Returns:
            The slot path, or None if ``directory`` does not exist.

        Raises:
            BackupError: If the copy did not complete.
        """
        if not directory.is_dir():
            logger.info("No directory to backup at %s", directory)
            return None

        slot = self.next_slot(directory)
        logger.info("Backing up %s to %s", directory, slot, extra=tag("BACKUP"))
        try:
            shutil.copytree(directory, slot, symlinks=True, copy_function=shutil.copy2)
        except (OSError, shutil.Error) as e:
            raise BackupError(f"Backup of {directory} to {slot} failed: {e}") from e
        return slot

    def retire_or_delete(self, directory: Path, keep: bool) -> Path | None:
        """Remove ``directory``, backing it up first when ``keep``.

        The original is only deleted after the backup copy completed;
        a BackupError leaves it untouched. A symlinked directory is
        unlinked; the tree it points to is never touched.

        Returns:
            The backup slot, or None when nothing was backed up.
        """
        linked = directory.is_symlink()
        if not linked and not directory.is_dir():
            return None

        slot = None
        if keep:
            slot = self.backup(directory)
        else:
            logger.info("Removing directory: %s", directory, extra=tag("DELETE"))

        if linked:
            directory.unlink()
        else:
            shutil.rmtree(directory)
        return slot

    def sweep(self, targets: list[Path], gate) -> tuple[list[Path], list[Path]]:
        """Handle every existing target: ask, then back up or delete.

        A failed backup is logged and the target is left in place.

        Returns:
            (created backup slots, removed directories)
        """
        backups: list[Path] = []
        removed: list[Path] = []
        for directory in targets:
            if not (directory.is_dir() or directory.is_symlink()):
                continue
            logger.info("Existing directory: %s", directory, extra=tag("FOUND"))
            keep = gate.ask(f"Backup existing {directory}?")
            try:
                slot = self.retire_or_delete(directory, keep=keep)
            except BackupError as e:
                logger.error("%s; keeping %s", e, directory)
                continue
            except OSError as e:
                logger.error("Could not remove %s: %s", directory, e)
                continue
            if slot is not None:
                backups.append(slot)
            removed.append(directory)
        return backups, removed
