from __future__ import annotations

import os
from pathlib import Path


def default_cache_root() -> Path:
    """Return the directory holding cached `go/parser` scans.

    Entries are keyed by a fingerprint of the scanned Go sources, so the cache
    can be shared by every directory `gouml render` is pointed at. Set
    `GOUML_CACHE_DIR` to relocate it (e.g. into a CI cache); `--cache-dir`
    overrides both.
    """
    override = os.environ.get("GOUML_CACHE_DIR")
    if override:
        return Path(override)

    if os.name == "nt":
        local = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~")
        return Path(local) / "gouml" / "scans"
    xdg = os.environ.get("XDG_CACHE_HOME") or os.path.expanduser("~/.cache")
    return Path(xdg) / "gouml" / "scans"
