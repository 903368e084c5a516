"""
Run report persistence — atomic read/write of the last RunReport.

Writes go to a temp file in the same directory and are then renamed
into place, so an interrupted write never leaves half a report.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from lazyboot.core.models.report import RunReport

logger = logging.getLogger(__name__)


def load_report(path: Path) -> RunReport | None:
    """Load the last run report, or None if missing or unreadable."""
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return RunReport.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning("Corrupt run report %s: %s", path, e)
        return None
    except Exception as e:
        logger.warning("Cannot load run report from %s: %s", path, e)
        return None


def save_report(report: RunReport, path: Path) -> bool:
    """Save a run report (atomic write).

    Returns:
        True on success. Failures are logged, never raised: the report
        is a diagnostic, not part of the install.
    """
    data = report.model_dump(mode="json")
    data["summary"] = report.summary()
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".report_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.warning("Failed to save run report to %s: %s", path, e)
        return False

    logger.debug("Run report saved to %s", path)
    return True
