"""Builders for raw scanner objects, shaped like the Go scanner's JSON output."""

from __future__ import annotations


def field(names: list[str], t: str) -> dict:
    return {"names": names, "type": t}


def struct(name: str, *members: dict) -> dict:
    return {
        "kind": "gen",
        "specs": [{"kind": "type", "name": name, "type_kind": "struct", "members": list(members)}],
    }


def interface(name: str, *members: dict, type_set: bool = False) -> dict:
    spec = {"kind": "type", "name": name, "type_kind": "interface", "members": list(members)}
    if type_set:
        spec["type_set"] = True
    return {"kind": "gen", "specs": [spec]}


def imethod(name: str, params: list[dict] | None = None, results: list[dict] | None = None) -> dict:
    return {"names": [name], "type": "func()", "params": params or [], "results": results or []}


def func(name: str, recv: str | None, params: list[dict] | None = None, results: list[dict] | None = None) -> dict:
    d = {"kind": "func", "name": name, "params": params or [], "results": results or []}
    if recv is not None:
        d["recv"] = recv
    return d


def package(name: str, *decls: dict, file: str = "a.go") -> dict:
    return {"name": name, "files": [{"name": file, "decls": list(decls)}]}


def scan(*packages: dict) -> dict:
    return {"packages": list(packages)}
