"""
Command-Line Grammar Package.

Field descriptors, the descriptor-string parser and the field registry.

Usage:
    from gscli.grammar import FieldRegistry
    registry = FieldRegistry.from_descriptors({"X": "field,global,last"})
"""

from .errors import GrammarError, ValidationError
from .registry import FieldRegistry, RegistryFrozenError
from .descriptor import parse_descriptor
from .schema import (
    ArgumentKind,
    ArgumentSpec,
    FieldDescriptor,
    FieldKind,
    FieldMode,
    FieldScope,
    Negated,
)

__all__ = [
    "GrammarError",
    "ValidationError",
    "FieldRegistry",
    "RegistryFrozenError",
    "parse_descriptor",
    "ArgumentKind",
    "ArgumentSpec",
    "FieldDescriptor",
    "FieldKind",
    "FieldMode",
    "FieldScope",
    "Negated",
]
