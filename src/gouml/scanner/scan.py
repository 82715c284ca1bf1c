from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any

from ..errors import ParseError
from .decls import (
    DECL_FUNC,
    DECL_GEN,
    SPEC_TYPE,
    TYPE_OTHER,
    FieldDecl,
    FuncDecl,
    GenDecl,
    MemberDecl,
    OtherSpec,
    ParsedFile,
    ParsedPackage,
    TypeSpec,
)

logger = logging.getLogger(__name__)


def scan_directory(
    directory: Path, *, recursive: bool = False, env: dict[str, str] | None = None
) -> list[ParsedPackage]:
    """Parse the Go files of `directory` into top-level declarations."""
    return decode_scan(run_scanner(directory, recursive=recursive, env=env))


def run_scanner(
    directory: Path, *, recursive: bool = False, env: dict[str, str] | None = None
) -> dict[str, Any]:
    """Run the embedded Go scanner and return its raw JSON object.

    Parsing is done by the Go toolchain's own `go/parser`, so the result matches
    what `go build` would see for syntax.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise ParseError(f"not a directory: {directory}")
    directory = directory.resolve()

    with tempfile.TemporaryDirectory(prefix="gouml-goscan-") as td:
        scan_dir = Path(td)
        (scan_dir / "go.mod").write_text(
            "\n".join(
                [
                    "module gouml.goscan",
                    "",
                    "go 1.21",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        (scan_dir / "main.go").write_text(_scanner_go_source(), encoding="utf-8")

        cmd = ["go", "run", ".", "--dir", str(directory)]
        if recursive:
            cmd.append("--recursive")
        logger.debug("scanning %s (recursive=%s)", directory, recursive)
        try:
            proc = subprocess.run(
                cmd,
                cwd=str(scan_dir),
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=False,
                check=False,
            )
        except FileNotFoundError as e:
            raise ParseError(
                "Go toolchain not found (`go` is missing from PATH). "
                "Install Go and ensure `go` is available on PATH."
            ) from e

    stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
    stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
    if proc.returncode != 0:
        out = "\n".join([s for s in [stdout.strip("\n"), stderr.strip("\n")] if s])
        raise ParseError(f"go scan failed\n{out}")

    # Tolerate noise (e.g. a console banner) in front of the JSON document.
    start = stdout.find("{")
    if start < 0:
        raise ParseError(f"go scan produced no output\n{stderr}")
    try:
        obj = json.loads(stdout[start:])
    except Exception as e:  # noqa: BLE001 - boundary parse
        raise ParseError(f"failed to parse go scan output: {e}\n{stdout}") from e
    if not isinstance(obj, dict):
        raise ParseError("go scan output is not a JSON object")
    return obj


def decode_scan(obj: dict[str, Any]) -> list[ParsedPackage]:
    """Decode the scanner's JSON object, skipping malformed entries."""
    packages: list[ParsedPackage] = []
    for p in _list(obj.get("packages")):
        if not isinstance(p, dict):
            continue
        name = p.get("name")
        if not isinstance(name, str) or not name:
            continue
        files: list[ParsedFile] = []
        for f in _list(p.get("files")):
            if not isinstance(f, dict):
                continue
            fname = f.get("name")
            if not isinstance(fname, str):
                continue
            decls: list[GenDecl | FuncDecl] = []
            for d in _list(f.get("decls")):
                decl = _decode_decl(d)
                if decl is not None:
                    decls.append(decl)
            files.append(ParsedFile(name=fname, decls=decls))
        packages.append(ParsedPackage(name=name, files=files))
    return packages


def _list(v: Any) -> list[Any]:
    return v if isinstance(v, list) else []


def _decode_decl(d: Any) -> GenDecl | FuncDecl | None:
    if not isinstance(d, dict):
        return None
    kind = d.get("kind")
    if kind == DECL_GEN:
        specs: list[TypeSpec | OtherSpec] = []
        for s in _list(d.get("specs")):
            if not isinstance(s, dict):
                continue
            name = s.get("name")
            if s.get("kind") == SPEC_TYPE and isinstance(name, str) and name:
                type_kind = s.get("type_kind")
                members = [m for m in map(_decode_member, _list(s.get("members"))) if m is not None]
                specs.append(
                    TypeSpec(
                        name=name,
                        type_kind=type_kind if isinstance(type_kind, str) else TYPE_OTHER,
                        members=members,
                        type_set=s.get("type_set") is True,
                    )
                )
            else:
                specs.append(OtherSpec())
        return GenDecl(specs=specs)
    if kind == DECL_FUNC:
        name = d.get("name")
        recv = d.get("recv")
        if not isinstance(name, str) or not name:
            return None
        if recv is not None and not isinstance(recv, str):
            return None
        return FuncDecl(
            name=name,
            recv=recv or None,
            params=_decode_fields(d.get("params")),
            results=_decode_fields(d.get("results")),
        )
    return None


def _decode_field(f: Any) -> FieldDecl | None:
    if not isinstance(f, dict):
        return None
    t = f.get("type")
    if not isinstance(t, str) or not t:
        return None
    names = [n for n in _list(f.get("names")) if isinstance(n, str) and n]
    return FieldDecl(names=names, type=t)


def _decode_fields(v: Any) -> list[FieldDecl]:
    return [f for f in map(_decode_field, _list(v)) if f is not None]


def _decode_member(m: Any) -> MemberDecl | None:
    base = _decode_field(m)
    if base is None:
        return None
    params = m.get("params")
    results = m.get("results")
    if isinstance(params, list):
        return MemberDecl(
            names=base.names,
            type=base.type,
            params=_decode_fields(params),
            results=_decode_fields(results),
        )
    return MemberDecl(names=base.names, type=base.type)


def _scanner_go_source() -> str:
    # Keep this file stdlib-only so `go run` doesn't need network access.
    return r'''
package main

import (
	"encoding/json"
	"flag"
	"fmt"
	"go/ast"
	"go/parser"
	"go/token"
	"go/types"
	"io/fs"
	"os"
	"path/filepath"
	"sort"
	"strings"
)

type outField struct {
	Names []string `json:"names"`
	Type  string   `json:"type"`
}

type outMember struct {
	Names   []string   `json:"names"`
	Type    string     `json:"type"`
	Params  []outField `json:"params"`
	Results []outField `json:"results"`
}

type outSpec struct {
	Kind     string      `json:"kind"`
	Name     string      `json:"name,omitempty"`
	TypeKind string      `json:"type_kind,omitempty"`
	Members  []outMember `json:"members,omitempty"`
	TypeSet  bool        `json:"type_set,omitempty"`
}

type outDecl struct {
	Kind    string     `json:"kind"`
	Specs   []outSpec  `json:"specs,omitempty"`
	Name    string     `json:"name,omitempty"`
	Recv    *string    `json:"recv,omitempty"`
	Params  []outField `json:"params,omitempty"`
	Results []outField `json:"results,omitempty"`
}

type outFile struct {
	Name  string    `json:"name"`
	Decls []outDecl `json:"decls"`
}

type outPackage struct {
	Name  string    `json:"name"`
	Dir   string    `json:"dir"`
	Files []outFile `json:"files"`
}

type outObj struct {
	Packages []outPackage `json:"packages"`
}

func main() {
	var dir string
	var recursive bool
	flag.StringVar(&dir, "dir", "", "directory to scan")
	flag.BoolVar(&recursive, "recursive", false, "scan sub-directories too")
	flag.Parse()

	if dir == "" {
		fmt.Fprintln(os.Stderr, "missing --dir")
		os.Exit(2)
	}

	dirs := []string{dir}
	if recursive {
		var err error
		dirs, err = listDirs(dir)
		if err != nil {
			fmt.Fprintln(os.Stderr, err.Error())
			os.Exit(1)
		}
	}

	out := outObj{Packages: []outPackage{}}
	for _, d := range dirs {
		fset := token.NewFileSet()
		pkgs, err := parser.ParseDir(fset, d, nil, 0)
		if err != nil {
			fmt.Fprintln(os.Stderr, err.Error())
			os.Exit(1)
		}
		names := make([]string, 0, len(pkgs))
		for n := range pkgs {
			names = append(names, n)
		}
		sort.Strings(names)
		for _, n := range names {
			out.Packages = append(out.Packages, convertPackage(d, pkgs[n]))
		}
	}

	enc := json.NewEncoder(os.Stdout)
	enc.SetEscapeHTML(false)
	if err := enc.Encode(out); err != nil {
		fmt.Fprintln(os.Stderr, err.Error())
		os.Exit(1)
	}
}

func listDirs(root string) ([]string, error) {
	dirs := []string{}
	err := filepath.WalkDir(root, func(path string, d fs.DirEntry, err error) error {
		if err != nil {
			return err
		}
		if !d.IsDir() {
			return nil
		}
		if path != root && skipDir(d.Name()) {
			return filepath.SkipDir
		}
		dirs = append(dirs, path)
		return nil
	})
	return dirs, err
}

func skipDir(name string) bool {
	return name == "vendor" || name == "testdata" || strings.HasPrefix(name, ".") || strings.HasPrefix(name, "_")
}

func convertPackage(dir string, pkg *ast.Package) outPackage {
	fileNames := make([]string, 0, len(pkg.Files))
	for n := range pkg.Files {
		fileNames = append(fileNames, n)
	}
	sort.Strings(fileNames)

	out := outPackage{Name: pkg.Name, Dir: dir, Files: []outFile{}}
	for _, n := range fileNames {
		f := pkg.Files[n]
		decls := []outDecl{}
		for _, d := range f.Decls {
			if od, ok := convertDecl(d); ok {
				decls = append(decls, od)
			}
		}
		out.Files = append(out.Files, outFile{Name: n, Decls: decls})
	}
	return out
}

func convertDecl(decl ast.Decl) (outDecl, bool) {
	switch d := decl.(type) {
	case *ast.GenDecl:
		specs := make([]outSpec, 0, len(d.Specs))
		for _, s := range d.Specs {
			specs = append(specs, convertSpec(s))
		}
		return outDecl{Kind: "gen", Specs: specs}, true
	case *ast.FuncDecl:
		o := outDecl{
			Kind:    "func",
			Name:    d.Name.Name,
			Params:  fieldList(d.Type.Params),
			Results: fieldList(d.Type.Results),
		}
		if d.Recv != nil && len(d.Recv.List) > 0 {
			r := types.ExprString(d.Recv.List[0].Type)
			o.Recv = &r
		}
		return o, true
	}
	return outDecl{}, false
}

func convertSpec(spec ast.Spec) outSpec {
	ts, ok := spec.(*ast.TypeSpec)
	if !ok || ts.Name == nil {
		return outSpec{Kind: "other"}
	}
	o := outSpec{Kind: "type", Name: ts.Name.Name, TypeKind: "other"}
	switch t := ts.Type.(type) {
	case *ast.StructType:
		o.TypeKind = "struct"
		o.Members = structMembers(t.Fields)
	case *ast.InterfaceType:
		o.TypeKind = "interface"
		o.Members, o.TypeSet = interfaceMembers(t.Methods)
	}
	return o
}

func structMembers(fl *ast.FieldList) []outMember {
	out := []outMember{}
	if fl == nil {
		return out
	}
	for _, f := range fl.List {
		out = append(out, outMember{Names: identNames(f.Names), Type: types.ExprString(f.Type)})
	}
	return out
}

func interfaceMembers(fl *ast.FieldList) ([]outMember, bool) {
	out := []outMember{}
	typeSet := false
	if fl == nil {
		return out, typeSet
	}
	for _, f := range fl.List {
		switch t := f.Type.(type) {
		case *ast.FuncType:
			out = append(out, outMember{
				Names:   identNames(f.Names),
				Type:    types.ExprString(t),
				Params:  fieldList(t.Params),
				Results: fieldList(t.Results),
			})
		case *ast.BinaryExpr, *ast.UnaryExpr:
			// Type set terms of constraint interfaces (`~int | ~string`).
			typeSet = true
		default:
			if id, ok := t.(*ast.Ident); ok && id.Name == "comparable" {
				typeSet = true
			}
			out = append(out, outMember{Names: []string{}, Type: types.ExprString(t)})
		}
	}
	return out, typeSet
}

func fieldList(fl *ast.FieldList) []outField {
	out := []outField{}
	if fl == nil {
		return out
	}
	for _, f := range fl.List {
		out = append(out, outField{Names: identNames(f.Names), Type: types.ExprString(f.Type)})
	}
	return out
}

func identNames(idents []*ast.Ident) []string {
	names := []string{}
	for _, id := range idents {
		if id != nil {
			names = append(names, id.Name)
		}
	}
	return names
}
'''
