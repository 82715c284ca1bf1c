"""Structural model of Go type declarations."""

from __future__ import annotations

from dataclasses import dataclass, field

# Kind values double as the PlantUML keyword of the declaration.
KIND_UNSET = ""
KIND_RECORD = "class"
KIND_INTERFACE = "interface"


@dataclass(frozen=True)
class Field:
    name: str
    type: str  # as written: "*T", "[]T", "map[K]V", "pkg.T", ...


@dataclass(frozen=True)
class Parameter:
    name: str  # empty for unnamed parameters
    type: str


@dataclass(frozen=True)
class Method:
    name: str
    parameters: list[Parameter]
    results: list[str]

    def signature(self) -> tuple[str, tuple[str, ...], tuple[str, ...]]:
        """Return the comparable signature: name, parameter types, result types."""
        return (
            self.name,
            tuple(p.type for p in self.parameters),
            tuple(self.results),
        )


@dataclass
class TypeEntity:
    package: str
    name: str
    kind: str = KIND_UNSET
    fields: list[Field] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    # Type references as written; duplicate-free, append order.
    composition: list[str] = field(default_factory=list)
    extends: list[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}"

    def set_kind(self, kind: str) -> None:
        # First assignment wins.
        if self.kind == KIND_UNSET:
            self.kind = kind

    def add_field(self, f: Field) -> None:
        self.fields.append(f)

    def add_method(self, m: Method) -> None:
        self.methods.append(m)

    def add_composition(self, type_name: str) -> None:
        if type_name not in self.composition:
            self.composition.append(type_name)

    def add_extends(self, type_name: str) -> None:
        if type_name not in self.extends:
            self.extends.append(type_name)


@dataclass
class Model:
    # pkg -> typeName -> entity
    namespaces: dict[str, dict[str, TypeEntity]] = field(default_factory=dict)

    # Fully-qualified names of declared structs / interfaces, declaration order.
    records: list[str] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)

    def get(self, full_name: str) -> TypeEntity | None:
        """Return the entity for `pkg.Name`, or None if it was never created."""
        pkg, sep, name = full_name.partition(".")
        if not sep:
            return None
        return self.namespaces.get(pkg, {}).get(name)

    def get_or_create(self, package: str, name: str) -> TypeEntity:
        types = self.namespaces.setdefault(package, {})
        entity = types.get(name)
        if entity is None:
            entity = TypeEntity(package=package, name=name)
            types[name] = entity
        return entity


def is_public(name: str) -> bool:
    # Only a lower-case first letter makes a member private.
    return not (name and name[0].islower())
