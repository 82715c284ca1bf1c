"""Render a Model as a PlantUML class diagram."""

from __future__ import annotations

from .model import KIND_RECORD, Field, Method, Model, TypeEntity, is_public

_TAB = "    "


class _Lines:
    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, depth: int, text: str) -> None:
        self._lines.append(_TAB * depth + text)

    def extend(self, other: "_Lines") -> None:
        self._lines.extend(other._lines)

    def text(self) -> str:
        return "\n".join(self._lines)


def visibility(name: str) -> str:
    """Return the PlantUML visibility marker: `+` public, `-` private."""
    return "+" if is_public(name) else "-"


def _qualify(ref: str, package: str) -> str:
    if "." in ref:
        return ref
    return f"{package}.{ref}"


def format_field(f: Field) -> str:
    return f"{visibility(f.name)} {f.name} {f.type}"


def format_method(m: Method) -> str:
    params = ", ".join(f"{p.name} {p.type}" if p.name else p.type for p in m.parameters)
    line = f"{visibility(m.name)} {m.name}({params})"
    if len(m.results) == 1:
        line += f" {m.results[0]}"
    elif len(m.results) > 1:
        line += f" ({', '.join(m.results)})"
    return line


def _render_entity(out: _Lines, entity: TypeEntity) -> None:
    private_fields = [f for f in entity.fields if not is_public(f.name)]
    public_fields = [f for f in entity.fields if is_public(f.name)]
    private_methods = [m for m in entity.methods if not is_public(m.name)]
    public_methods = [m for m in entity.methods if is_public(m.name)]

    out.write(1, f"{entity.kind or KIND_RECORD} {entity.name} {{")
    for f in private_fields + public_fields:
        out.write(2, format_field(f))
    for m in private_methods + public_methods:
        out.write(2, format_method(m))
    out.write(1, "}")


def render(model: Model) -> str:
    """Serialize `model` to PlantUML.

    Output always starts with `@startuml` and ends with an empty line followed
    by `@enduml`, even for an empty model.
    """
    out = _Lines()
    out.write(0, "@startuml")
    for pkg, types in model.namespaces.items():
        if not types:
            continue
        composition = _Lines()
        extends = _Lines()
        out.write(0, f"namespace {pkg} {{")
        for name, entity in types.items():
            _render_entity(out, entity)
            target = f"{pkg}.{name}"
            for c in entity.composition:
                composition.write(0, f"{_qualify(c, entity.package)} *-- {target}")
            for e in entity.extends:
                extends.write(0, f"{_qualify(e, entity.package)} <|-- {target}")
        out.write(0, "}")
        out.extend(composition)
        out.extend(extends)
    out.write(0, "")
    out.write(0, "@enduml")
    return out.text()
