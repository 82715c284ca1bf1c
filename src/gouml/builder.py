"""Build the structural model from parsed Go declarations."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .model import KIND_INTERFACE, KIND_RECORD, Field, Method, Model, Parameter, TypeEntity
from .scanner.decls import (
    TYPE_INTERFACE,
    TYPE_STRUCT,
    FieldDecl,
    FuncDecl,
    GenDecl,
    MemberDecl,
    ParsedPackage,
    TypeSpec,
)

logger = logging.getLogger(__name__)

TEST_FILE_SUFFIX = "_test.go"

_TYPE_PARAMS_RE = re.compile(r"\[.*\]$")

# Predeclared interfaces; embedding them adds no relationship.
_PREDECLARED_INTERFACES = frozenset({"any", "comparable", "error"})


def build_model(packages: Iterable[ParsedPackage]) -> Model:
    return ModelBuilder().build(packages)


def receiver_type_name(recv: str) -> str:
    """Normalize a receiver type to the declared type name.

    `*T` -> `T`, `List[T]` -> `List`, `*List[K, V]` -> `List`.
    """
    t = recv.strip()
    if t.startswith("*"):
        t = t[1:].strip()
    return _TYPE_PARAMS_RE.sub("", t)


def _embedded_type_name(t: str) -> str:
    # Embedding follows the same normalization as receivers: `*Base[T]` embeds `Base`.
    return receiver_type_name(t)


def _parameters(fields: list[FieldDecl]) -> list[Parameter]:
    out: list[Parameter] = []
    for f in fields:
        if not f.names:
            out.append(Parameter(name="", type=f.type))
            continue
        for n in f.names:
            out.append(Parameter(name=n, type=f.type))
    return out


def _results(fields: list[FieldDecl]) -> list[str]:
    out: list[str] = []
    for f in fields:
        # `(n, m int)` declares two results.
        out.extend([f.type] * max(len(f.names), 1))
    return out


class ModelBuilder:
    """Populate a Model from parsed packages.

    A builder is single use: `build` returns the model it filled.
    """

    def __init__(self) -> None:
        self._model = Model()
        self._package = ""

    def build(self, packages: Iterable[ParsedPackage]) -> Model:
        for pkg in packages:
            self._add_package(pkg)
        return self._model

    def _add_package(self, pkg: ParsedPackage) -> None:
        self._package = pkg.name
        self._model.namespaces.setdefault(pkg.name, {})
        for f in pkg.files:
            if f.name.endswith(TEST_FILE_SUFFIX):
                continue
            for decl in f.decls:
                if isinstance(decl, GenDecl):
                    self._add_gen_decl(decl)
                elif isinstance(decl, FuncDecl):
                    self._add_func_decl(decl)
        logger.debug(
            "built package %s: %d types", pkg.name, len(self._model.namespaces[pkg.name])
        )

    def _entity(self, name: str) -> TypeEntity:
        return self._model.get_or_create(self._package, name)

    def _add_gen_decl(self, decl: GenDecl) -> None:
        if not decl.specs:
            return
        spec = decl.specs[0]
        if not isinstance(spec, TypeSpec):
            # Imports, vars and consts are not part of a class diagram.
            return
        if len(decl.specs) > 1:
            logger.debug(
                "package %s: type group starting at %s: only the first of %d specs is used",
                self._package,
                spec.name,
                len(decl.specs),
            )

        if spec.type_kind == TYPE_STRUCT:
            entity = self._entity(spec.name)
            for m in spec.members:
                self._add_struct_member(entity, m)
            entity.set_kind(KIND_RECORD)
            kind, registry = KIND_RECORD, self._model.records
        elif spec.type_kind == TYPE_INTERFACE:
            entity = self._entity(spec.name)
            for m in spec.members:
                self._add_interface_member(entity, m)
            entity.set_kind(KIND_INTERFACE)
            kind, registry = KIND_INTERFACE, self._model.interfaces
        else:
            return

        if entity.kind != kind:
            # Redeclared under another kind; the first declaration stands.
            return
        if spec.type_set:
            # Constraint interfaces (`~int | ~float64`) are drawn but never satisfied by records.
            return
        if entity.full_name not in registry:
            registry.append(entity.full_name)

    def _add_struct_member(self, entity: TypeEntity, m: MemberDecl) -> None:
        if not m.names:
            entity.add_composition(_embedded_type_name(m.type))
            return
        for n in m.names:
            entity.add_field(Field(name=n, type=m.type))

    def _add_interface_member(self, entity: TypeEntity, m: MemberDecl) -> None:
        if not m.is_method:
            name = _embedded_type_name(m.type)
            if not m.names and name not in _PREDECLARED_INTERFACES:
                entity.add_composition(name)
            return
        for n in m.names:
            entity.add_method(
                Method(
                    name=n,
                    parameters=_parameters(m.params or []),
                    results=_results(m.results or []),
                )
            )

    def _add_func_decl(self, decl: FuncDecl) -> None:
        if decl.recv is None:
            # Free functions have no place in a class diagram.
            return
        entity = self._entity(receiver_type_name(decl.recv))
        entity.set_kind(KIND_RECORD)
        if entity.kind == KIND_RECORD and entity.full_name not in self._model.records:
            self._model.records.append(entity.full_name)
        entity.add_method(
            Method(
                name=decl.name,
                parameters=_parameters(decl.params),
                results=_results(decl.results),
            )
        )
