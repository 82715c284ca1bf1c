"""gouml: PlantUML class diagrams for Go packages."""

from __future__ import annotations

from . import errors
from .builder import build_model
from .diagram import class_diagram, load_model
from .render import render
from .resolver import resolve_satisfaction

__all__ = [
    "build_model",
    "class_diagram",
    "errors",
    "load_model",
    "render",
    "resolve_satisfaction",
]
