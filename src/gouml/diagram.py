from __future__ import annotations

import logging
from pathlib import Path

from .builder import build_model
from .cache import ScanCache
from .errors import ParseError
from .model import Model
from .paths import default_cache_root
from .render import render
from .resolver import resolve_satisfaction
from .scanner.fingerprint import fingerprint_go_dir
from .scanner.scan import decode_scan, run_scanner

logger = logging.getLogger(__name__)


def load_model(
    directory: str | Path,
    *,
    recursive: bool = False,
    use_cache: bool = True,
    cache_dir: Path | None = None,
    env: dict[str, str] | None = None,
) -> Model:
    """Scan `directory` and return the resolved model.

    Scans are cached by a fingerprint of the Go sources, so an unchanged tree
    skips the `go run` step entirely.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise ParseError(f"not a directory: {directory}")

    raw = None
    cache = None
    key = ""
    if use_cache:
        cache = ScanCache(cache_dir if cache_dir is not None else default_cache_root())
        key = fingerprint_go_dir(directory, recursive=recursive)
        raw = cache.load(key)

    if raw is None:
        raw = run_scanner(directory, recursive=recursive, env=env)
        if cache is not None:
            cache.store(key, raw)

    model = build_model(decode_scan(raw))
    resolve_satisfaction(model)
    return model


def class_diagram(
    directory: str | Path,
    *,
    recursive: bool = False,
    use_cache: bool = True,
    cache_dir: Path | None = None,
    env: dict[str, str] | None = None,
) -> str:
    """Return the PlantUML class diagram of the Go package(s) in `directory`."""
    model = load_model(
        directory,
        recursive=recursive,
        use_cache=use_cache,
        cache_dir=cache_dir,
        env=env,
    )
    return render(model)
