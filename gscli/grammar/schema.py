"""
Field Descriptor Definitions.

This module defines the dataclasses that describe one configurable field of
a command:
- FieldDescriptor: kind, scope, mode and constraints of one switch
- ArgumentSpec: one positional argument of a multi-argument switch
- Negated: wrapper marking a value produced by a +switch

Descriptors are built once from descriptor strings (see descriptor.py) and
are read-only afterwards. They are the single source of truth for parsing,
completion, help text and generated completion scripts.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Any

from .errors import GrammarError


# =============================================================================
# ARGUMENT-VECTOR GRAMMAR
# =============================================================================

FLAG_MARKER        = "-"
NEGATION_MARKER    = "+"

# A standalone "+" starts a negated clause and a standalone "-" a positive
# one. The mapping looks inverted but is part of the grammar.
NEGATED_SEPARATOR  = "+"
POSITIVE_SEPARATOR = "-"
SEPARATORS         = (NEGATED_SEPARATOR, POSITIVE_SEPARATOR)

# Reserved clause key holding unprefixed tokens in order.
POSITIONAL_KEY     = "_args"

HELP_FLAG            = "-help"
MAN_FLAG             = "-man"
COMPLETE_FLAG        = "-complete"
BASH_COMPLETION_FLAG = "-bash-completion"

RESERVED_FLAGS = (HELP_FLAG, MAN_FLAG, COMPLETE_FLAG, BASH_COMPLETION_FLAG)


class FieldKind(Enum):
    """
    Field kinds, named by their descriptor token.

    - STRING: free text, optionally restricted by enum=
    - FIELD: name of a column in a tabular input file
    - FILE: filesystem path, optionally filtered by suffix=
    - NUMBER: floating point value
    - FLAG: boolean switch taking no value
    - MULTI: switch taking a fixed list of arguments (args=)
    """
    STRING = "string"
    FIELD = "field"
    FILE = "file"
    NUMBER = "number"
    FLAG = "flag"
    MULTI = "multi"


class ArgumentKind(Enum):
    """Kinds of the individual arguments of a MULTI switch."""
    STRING = "string"
    FIELD = "field"
    CONTENT = "content"     # A value found in a tabular field
    FILE = "file"
    NUMBER = "number"


class FieldScope(Enum):
    """Whether a value applies to the whole command or to its clause only."""
    GLOBAL = "global"
    LOCAL = "local"


class FieldMode(Enum):
    """How repeated occurrences of a switch are combined."""
    LAST = "last"   # Overwrite
    LIST = "list"   # Accumulate in order


def flag_name(field_name: str) -> str:
    """
    Convert a field name to its switch spelling.

    A hyphen is inserted before every interior capital letter and the result
    is lower-cased. Underscores become hyphens.

    Examples: "InputFile" -> "-input-file", "X" -> "-x", "max_rows" -> "-max-rows"
    """
    if len(field_name) == 1:
        return FLAG_MARKER + field_name.lower()

    spelled = re.sub(r"(?<!^)([A-Z])", r"-\1", field_name)
    return FLAG_MARKER + spelled.replace("_", "-").lower()


def normalize_flag(token: str) -> Optional[str]:
    """
    Return the positive spelling of a switch token, or None when the token
    is not prefixed or is a standalone separator.
    """
    if len(token) < 2:
        return None
    if token.startswith(NEGATION_MARKER):
        return FLAG_MARKER + token[1:]
    if token.startswith(FLAG_MARKER):
        return token
    return None


def is_prefixed(token: str) -> bool:
    return token.startswith(FLAG_MARKER) or token.startswith(NEGATION_MARKER)


@dataclass(frozen=True)
class ArgumentSpec:
    """One argument of a multi-argument switch. Position is significant."""
    name: str
    kind: ArgumentKind = ArgumentKind.STRING


@dataclass(frozen=True)
class Negated:
    """A value produced by the +switch spelling."""
    value: Any


@dataclass
class FieldDescriptor:  # pylint: disable=too-many-instance-attributes
    """
    Definition of a single command field.

    Attributes:
        name: Field name, unique within a registry (e.g., "Y", "InputFile")
        kind: What the switch's value is
        scope: GLOBAL values are shared by every clause
        mode: LIST accumulates repeated occurrences, LAST overwrites
        args: Ordered argument specs (MULTI only)
        default: Typed default value, None when there is none
        help: Human-readable description
        required: Whether the field must end up with a value
        enum: Allowed values (STRING only)
        suffix: Filename suffix pattern for completion (FILE only)
    """
    name: str
    kind: FieldKind
    scope: FieldScope
    mode: FieldMode
    args: List[ArgumentSpec] = field(default_factory=list)
    default: Any = None
    help: str = ""
    required: bool = False
    enum: List[str] = field(default_factory=list)
    suffix: Optional[str] = None

    def __post_init__(self):
        if self.kind == FieldKind.MULTI and not self.args:
            raise GrammarError("multi-argument field needs at least one argument in args=",
                               field=self.name)

    @property
    def flag(self) -> str:
        return flag_name(self.name)

    @property
    def negated_flag(self) -> str:
        return NEGATION_MARKER + self.flag[1:]

    @property
    def arity(self) -> int:
        """Number of tokens the switch consumes after itself."""
        if self.kind == FieldKind.FLAG:
            return 0
        if self.kind == FieldKind.MULTI:
            return len(self.args)
        return 1

    @property
    def is_global(self) -> bool:
        return self.scope == FieldScope.GLOBAL

    @property
    def accumulates(self) -> bool:
        return self.mode == FieldMode.LIST

    @property
    def metavar(self) -> str:
        """Value placeholder used in help text, e.g. "FIELD CONTENT"."""
        if self.kind == FieldKind.FLAG:
            return ""
        if self.kind == FieldKind.MULTI:
            return " ".join(spec.name.upper() for spec in self.args)
        if self.enum:
            return "{" + ",".join(self.enum) + "}"
        return self.kind.value.upper()
