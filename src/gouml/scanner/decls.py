from __future__ import annotations

from dataclasses import dataclass

# Top-level declaration kinds.
DECL_GEN = "gen"
DECL_FUNC = "func"

# Spec kinds inside a general declaration.
SPEC_TYPE = "type"
SPEC_OTHER = "other"

# Underlying type kinds of a type spec.
TYPE_STRUCT = "struct"
TYPE_INTERFACE = "interface"
TYPE_OTHER = "other"


@dataclass(frozen=True)
class FieldDecl:
    names: list[str]  # empty for anonymous (embedded) members
    type: str


@dataclass(frozen=True)
class MemberDecl:
    """A struct field or an interface member.

    `params`/`results` are set only for interface methods.
    """

    names: list[str]
    type: str
    params: list[FieldDecl] | None = None
    results: list[FieldDecl] | None = None

    @property
    def is_method(self) -> bool:
        return self.params is not None


@dataclass(frozen=True)
class TypeSpec:
    name: str
    type_kind: str
    members: list[MemberDecl]
    kind: str = SPEC_TYPE
    # Interface with type terms or `comparable`: usable only as a constraint.
    type_set: bool = False


@dataclass(frozen=True)
class OtherSpec:
    kind: str = SPEC_OTHER


@dataclass(frozen=True)
class GenDecl:
    specs: list[TypeSpec | OtherSpec]
    kind: str = DECL_GEN


@dataclass(frozen=True)
class FuncDecl:
    name: str
    recv: str | None  # receiver type text as written, None for free functions
    params: list[FieldDecl]
    results: list[FieldDecl]
    kind: str = DECL_FUNC


@dataclass(frozen=True)
class ParsedFile:
    name: str
    decls: list[GenDecl | FuncDecl]


@dataclass(frozen=True)
class ParsedPackage:
    name: str
    files: list[ParsedFile]
