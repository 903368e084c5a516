"""
Archive adapter — download a release archive and unpack it.

Covers the Neovim tarball, Nerd Font zips and the starter-config
tarball fallback. Downloads land in the run's temp directory.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
import time
import urllib.request
import zipfile
from pathlib import Path, PurePosixPath

from lazyboot import __version__
from lazyboot.adapters.base import Adapter, ExecutionContext
from lazyboot.core.models.action import Receipt
from lazyboot.core.observability.logging_config import tag

logger = logging.getLogger(__name__)

_USER_AGENT = f"lazyboot/{__version__}"


def _archive_format(url: str, explicit: str | None) -> str:
    if explicit:
        return explicit
    if url.endswith(".zip"):
        return "zip"
    return "tar.gz"


class ArchiveAdapter(Adapter):
    """Fetch a URL over HTTP(S) and extract it.

    Action params:
        url (str): What to download.
        dest (str): Directory to extract into (created if missing).
        filename (str): Local name for the download (default: URL basename).
        format (str): 'tar.gz' or 'zip' (default: inferred from the URL).
        strip_components (int): Leading path parts to drop from tar members.
        timeout (int): Network timeout in seconds (default: 60).
    """

    def __init__(self, opener=urllib.request.urlopen):
        self._open = opener

    @property
    def name(self) -> str:
        return "archive"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        url = context.params.get("url", "")
        if not url:
            return False, "Missing required param: 'url'"
        if not url.startswith(("https://", "http://")):
            return False, f"Unsupported URL scheme: {url}"
        if not context.params.get("dest"):
            return False, "Missing required param: 'dest'"
        fmt = _archive_format(url, context.params.get("format"))
        if fmt not in ("tar.gz", "zip"):
            return False, f"Unknown archive format '{fmt}'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        url = context.params["url"]
        dest = Path(context.params["dest"]).expanduser()
        fmt = _archive_format(url, context.params.get("format"))
        filename = context.params.get("filename") or url.rsplit("/", 1)[-1]
        download = Path(context.work_dir) / filename
        timeout = context.params.get("timeout", 60)

        start = time.monotonic()
        try:
            self._download(url, download, timeout)
        except Exception as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Download failed for {url}: {e}",
                metadata={"url": url},
            )

        try:
            dest.mkdir(parents=True, exist_ok=True)
            if fmt == "zip":
                count = self._extract_zip(download, dest)
            else:
                count = self._extract_tar(
                    download, dest, int(context.params.get("strip_components", 0)),
                )
        except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Failed to extract {download.name}: {e}",
                metadata={"url": url, "archive": str(download)},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Extracted {count} entries from {filename} into {dest}",
            duration_ms=elapsed_ms,
            metadata={"url": url, "archive": str(download), "dest": str(dest), "entries": count},
        )

    def _download(self, url: str, target: Path, timeout: int) -> None:
        logger.info("Downloading %s", url, extra=tag("DOWNLOAD"))
        target.parent.mkdir(parents=True, exist_ok=True)
        req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
        with self._open(req, timeout=timeout) as resp, open(target, "wb") as fh:
            shutil.copyfileobj(resp, fh)

    @staticmethod
    def _extract_tar(archive: Path, dest: Path, strip: int) -> int:
        with tarfile.open(archive, "r:*") as tar:
            members = []
            for member in tar.getmembers():
                parts = PurePosixPath(member.name).parts[strip:]
                if not parts:
                    continue
                member.name = str(PurePosixPath(*parts))
                members.append(member)
            tar.extractall(dest, members=members, filter="data")
        return len(members)

    @staticmethod
    def _extract_zip(archive: Path, dest: Path) -> int:
        with zipfile.ZipFile(archive) as zf:
            names = zf.namelist()
            zf.extractall(dest)
        return len(names)
