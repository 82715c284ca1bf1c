"""On-disk cache of raw scanner output, stored as MessagePack."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import msgpack

from .errors import CacheError

logger = logging.getLogger(__name__)

CACHE_VERSION = 2
_SUFFIX = ".msgpack"


class ScanCache:
    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}{_SUFFIX}"

    def load(self, key: str) -> dict[str, Any] | None:
        """Return the cached scan for `key`, or None on any kind of miss."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            obj = msgpack.unpackb(path.read_bytes(), raw=False)
        except Exception as e:  # noqa: BLE001 - a corrupt entry is a miss
            logger.debug("ignoring unreadable cache entry %s: %s", path, e)
            return None
        if not isinstance(obj, dict) or obj.get("cache_version") != CACHE_VERSION:
            return None
        scan = obj.get("scan")
        if not isinstance(scan, dict):
            return None
        logger.debug("cache hit %s", key)
        return scan

    def store(self, key: str, scan: dict[str, Any]) -> Path:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheError(f"cannot create cache directory {self.root}: {e}") from e

        payload = msgpack.packb(
            {"cache_version": CACHE_VERSION, "scan": scan}, use_bin_type=True
        )
        path = self._path(key)
        # Write-then-rename so readers never see a partial entry.
        fd, tmp = tempfile.mkstemp(prefix=".tmp-", suffix=_SUFFIX, dir=str(self.root))
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        return path

    def clear(self) -> list[Path]:
        """Delete every cache entry and return the deleted paths."""
        if not self.root.is_dir():
            return []
        deleted: list[Path] = []
        for p in sorted(self.root.glob(f"*{_SUFFIX}")):
            if p.name.startswith(".tmp-"):
                continue
            p.unlink(missing_ok=True)
            deleted.append(p)
        return deleted
