from __future__ import annotations

import os
from pathlib import Path

import msgpack
import pytest


def test_cache_store_then_load(tmp_path: Path):
    from gouml.cache import ScanCache

    cache = ScanCache(tmp_path / "c")
    scan = {"packages": [{"name": "pkg", "files": []}]}
    path = cache.store("abc", scan)
    assert path == tmp_path / "c" / "abc.msgpack"
    assert cache.load("abc") == scan
    assert cache.load("missing") is None


def test_cache_ignores_corrupt_and_foreign_entries(tmp_path: Path):
    from gouml.cache import CACHE_VERSION, ScanCache

    root = tmp_path / "c"
    root.mkdir()
    (root / "corrupt.msgpack").write_bytes(b"\xc1\xc1\xc1")
    (root / "old.msgpack").write_bytes(msgpack.packb({"cache_version": CACHE_VERSION - 1, "scan": {"packages": []}}))
    (root / "odd.msgpack").write_bytes(msgpack.packb({"cache_version": CACHE_VERSION, "scan": [1, 2]}))

    cache = ScanCache(root)
    assert cache.load("corrupt") is None
    assert cache.load("old") is None
    assert cache.load("odd") is None


def test_cache_clear(tmp_path: Path):
    from gouml.cache import ScanCache

    cache = ScanCache(tmp_path / "c")
    assert cache.clear() == []
    cache.store("a", {})
    cache.store("b", {})
    deleted = cache.clear()
    assert sorted(p.name for p in deleted) == ["a.msgpack", "b.msgpack"]
    assert cache.load("a") is None


def test_default_cache_root_env_override(monkeypatch, tmp_path: Path):
    from gouml.paths import default_cache_root

    monkeypatch.setenv("GOUML_CACHE_DIR", str(tmp_path / "x"))
    assert default_cache_root() == tmp_path / "x"


def test_default_cache_root_follows_xdg(monkeypatch, tmp_path: Path):
    from gouml.paths import default_cache_root

    if os.name == "nt":
        pytest.skip("XDG_CACHE_HOME is not used on Windows")
    monkeypatch.delenv("GOUML_CACHE_DIR", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert default_cache_root() == tmp_path / "xdg" / "gouml" / "scans"
