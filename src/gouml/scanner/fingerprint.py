from __future__ import annotations

import hashlib
from pathlib import Path


def _skip_dir(name: str) -> bool:
    # Same rules as the Go scanner's recursive walk.
    return name in {"vendor", "testdata"} or name.startswith((".", "_"))


def go_files(directory: Path, *, recursive: bool = False) -> list[Path]:
    """Return the `*.go` files the scanner would parse, sorted by relative path."""
    directory = Path(directory).resolve()
    if not recursive:
        files = [p for p in directory.glob("*.go") if p.is_file()]
    else:
        files = []
        for p in directory.rglob("*.go"):
            rel_dirs = p.relative_to(directory).parts[:-1]
            if any(_skip_dir(part) for part in rel_dirs):
                continue
            if p.is_file():
                files.append(p)
    return sorted(files, key=lambda p: p.relative_to(directory).as_posix())


def fingerprint_go_dir(directory: Path, *, recursive: bool = False) -> str:
    """Compute a content fingerprint for a scan of `directory`.

    Includes the recursive flag and, for every Go file the scan would see,
    its relative path and bytes.
    """
    directory = Path(directory).resolve()
    h = hashlib.sha256()
    h.update(b"recursive" if recursive else b"flat")
    h.update(b"\x00")

    for p in go_files(directory, recursive=recursive):
        rel = p.relative_to(directory).as_posix()
        h.update(rel.encode("utf-8"))
        h.update(b"\x00")
        with p.open("rb") as f:
            for chunk in iter(lambda: f.read(1024 * 1024), b""):
                h.update(chunk)
        h.update(b"\x00")

    return h.hexdigest()
