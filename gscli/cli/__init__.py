"""
Command Layer.

Clause parsing, completion, documentation and script generation on top of
a field registry, plus the GSCommand object that ties them together.
"""

from .clauses import ClauseParser, ClauseSet, is_negated, unwrap
from .command import Commander, GSCommand
from .completion import CompletionAnalyzer, CompletionContext, CompletionKind, complete_paths
from .pattern import matches
from .tabular import TabularError, TabularReader, load_table

__all__ = [
    "ClauseParser",
    "ClauseSet",
    "is_negated",
    "unwrap",
    "Commander",
    "GSCommand",
    "CompletionAnalyzer",
    "CompletionContext",
    "CompletionKind",
    "complete_paths",
    "matches",
    "TabularError",
    "TabularReader",
    "load_table",
]
