from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest

pytestmark = pytest.mark.skipif(
    os.environ.get("GOUML_INTEGRATION") != "1" or shutil.which("go") is None,
    reason="set GOUML_INTEGRATION=1 (and put `go` on PATH) to run integration tests",
)


def _write_go_package(pkg_dir: Path) -> None:
    pkg_dir.mkdir(parents=True, exist_ok=True)
    (pkg_dir / "zoo.go").write_text(
        "\n".join(
            [
                "package zoo",
                "",
                'import "sync"',
                "",
                "type Speaker interface {",
                "    Speak() string",
                "}",
                "",
                "type Engine struct{}",
                "",
                "type Dog struct {",
                "    sync.Mutex",
                "    *Engine",
                "    name string",
                "    Age, Weight int",
                "}",
                "",
                "func (d *Dog) Speak() string { return d.name }",
                "",
                "func (d Dog) DoWork(count int) (int, error) { return count, nil }",
                "",
                "func NewDog() *Dog { return &Dog{} }",
                "",
            ]
        ),
        encoding="utf-8",
    )
    (pkg_dir / "zoo_test.go").write_text(
        "package zoo\n\ntype fixture struct{ hidden bool }\n",
        encoding="utf-8",
    )


def test_scan_real_go_sources(tmp_path: Path):
    from gouml import class_diagram

    pkg_dir = tmp_path / "zoo"
    _write_go_package(pkg_dir)

    out = class_diagram(pkg_dir, use_cache=False)
    assert out == "\n".join(
        [
            "@startuml",
            "namespace zoo {",
            "    interface Speaker {",
            "        + Speak() string",
            "    }",
            "    class Engine {",
            "    }",
            "    class Dog {",
            "        - name string",
            "        + Age int",
            "        + Weight int",
            "        + Speak() string",
            "        + DoWork(count int) (int, error)",
            "    }",
            "}",
            "sync.Mutex *-- zoo.Dog",
            "zoo.Engine *-- zoo.Dog",
            "zoo.Speaker <|-- zoo.Dog",
            "",
            "@enduml",
        ]
    )


def test_scan_recursive(tmp_path: Path):
    from gouml.scanner.scan import scan_directory

    _write_go_package(tmp_path / "zoo")
    (tmp_path / "root.go").write_text("package root\n\ntype R struct{}\n", encoding="utf-8")
    (tmp_path / "vendor").mkdir()
    (tmp_path / "vendor" / "v.go").write_text("package v\n", encoding="utf-8")

    flat = scan_directory(tmp_path)
    deep = scan_directory(tmp_path, recursive=True)
    assert [p.name for p in flat] == ["root"]
    assert [p.name for p in deep] == ["root", "zoo"]


def test_scan_syntax_error_raises_parse_error(tmp_path: Path):
    from gouml.errors import ParseError
    from gouml.scanner.scan import scan_directory

    (tmp_path / "bad.go").write_text("package bad\n\nfunc {\n", encoding="utf-8")
    with pytest.raises(ParseError, match=r"go scan failed"):
        scan_directory(tmp_path)


def test_constraint_interfaces_get_no_implements_edges(tmp_path: Path):
    from gouml import class_diagram

    (tmp_path / "p.go").write_text(
        "\n".join(
            [
                "package p",
                "",
                'import "io"',
                "",
                "type Number interface{ ~int | ~float64 }",
                "",
                "type Key interface{ comparable }",
                "",
                "type Base[T any] struct{ v T }",
                "",
                "type Box struct{ n int }",
                "",
                "type Holder struct{ Base[io.Reader] }",
                "",
            ]
        ),
        encoding="utf-8",
    )

    lines = class_diagram(tmp_path, use_cache=False).splitlines()
    assert "    interface Number {" in lines
    assert "    interface Key {" in lines
    assert not [line for line in lines if "<|--" in line]
    assert "p.Base *-- p.Holder" in lines
    assert not [line for line in lines if "comparable" in line]
