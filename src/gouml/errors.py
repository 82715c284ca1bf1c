"""Domain-specific errors for gouml."""

from __future__ import annotations


class GoUmlError(Exception):
    """Base error for gouml."""


class ParseError(GoUmlError):
    """Raised when Go sources cannot be turned into a declaration tree."""


class CacheError(GoUmlError):
    """Raised when the scan cache directory cannot be used."""
