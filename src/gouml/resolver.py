"""Structural interface satisfaction.

Go interfaces are satisfied implicitly: a type implements an interface when its
method set covers every method of the interface. We approximate that by exact
textual comparison of method signatures (name, parameter types, result types).
"""

from __future__ import annotations

import logging

from .model import KIND_INTERFACE, KIND_RECORD, Model, TypeEntity

logger = logging.getLogger(__name__)

Signature = tuple[str, tuple[str, ...], tuple[str, ...]]


def _signatures(entity: TypeEntity) -> set[Signature]:
    return {m.signature() for m in entity.methods}


def implements(record: TypeEntity, interface: TypeEntity) -> bool:
    """Return True if `record` has every method declared on `interface`."""
    return _signatures(interface) <= _signatures(record)


def _collect(model: Model, names: list[str], kind: str) -> list[tuple[TypeEntity, set[Signature]]]:
    out: list[tuple[TypeEntity, set[Signature]]] = []
    for full_name in names:
        entity = model.get(full_name)
        if entity is None or entity.kind != kind:
            continue
        out.append((entity, _signatures(entity)))
    return out


def resolve_satisfaction(model: Model) -> None:
    """Add an extends edge from every record to every interface it satisfies."""
    records = _collect(model, model.records, KIND_RECORD)
    interfaces = _collect(model, model.interfaces, KIND_INTERFACE)

    edges = 0
    for record, record_sigs in records:
        for interface, interface_sigs in interfaces:
            if interface_sigs <= record_sigs:
                record.add_extends(interface.full_name)
                edges += 1
    logger.debug(
        "resolved %d records against %d interfaces: %d edges",
        len(records),
        len(interfaces),
        edges,
    )
