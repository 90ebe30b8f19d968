"""
Clause Parser.

Turns a raw argument vector into an ordered list of ClauseSets:

    chart data.tsv -x time -y cpu + -y disk -right

    clause 1 (positive): {Argv: "data.tsv", X: "time", Y: ["cpu"], _args: ["data.tsv"]}
    clause 2 (negated):  {Argv: "data.tsv", X: "time", Y: ["disk"], Right: True}

A standalone "+" starts a negated clause and a standalone "-" a positive
one. Values of global fields are collected command-wide and copied into
every clause that lacks them; defaults then fill whatever is still unset.
"""

import dataclasses

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..common import has_extension
from ..printer import cons
from ..state import GSConfig
from ..grammar import FieldRegistry, GrammarError
from ..grammar.errors import arity_error, enum_error, number_error, required_error, unknown_flag_error
from ..grammar.schema import (
    ArgumentKind, FieldDescriptor, FieldKind, Negated,
    NEGATED_SEPARATOR, NEGATION_MARKER, POSITIONAL_KEY, SEPARATORS,
    is_prefixed,
)
from ..grammar.suggest import suggest_similar


@dataclasses.dataclass(frozen=True)
class ClauseSet:
    """
    The values of one clause.

    Attributes:
        fields: Read-only mapping of field name to value. A value is a
            scalar, a list (list-mode fields) or a Negated wrapper.
        negated: Whether the clause was introduced by a standalone "+".
    """
    fields:  Mapping[str, Any]
    negated: bool = False

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @property
    def positionals(self) -> List[str]:
        return list(self.fields.get(POSITIONAL_KEY, []))


def _copy(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value


class ClauseParser:
    def __init__(self, registry: FieldRegistry, config: Optional[GSConfig] = None):
        self.registry = registry
        self.config   = config if config is not None else GSConfig()

    def parse(self, argv: List[str]) -> List[ClauseSet]:
        """
        Parse argv into clauses, in separator order.

        Raises:
            GrammarError: on the first unknown switch, missing value,
                malformed number, enum violation or missing required field.
        """
        pending: List[tuple] = []
        current: Dict[str, Any] = {}
        negated = False
        command_wide: Dict[str, Any] = {}

        i = 0
        while i < len(argv):
            token = argv[i]

            if token in SEPARATORS:
                pending.append((current, negated))
                current, negated = {}, token == NEGATED_SEPARATOR
                i += 1
            elif is_prefixed(token):
                i += self._parse_switch(argv, i, current, command_wide)
            else:
                self._parse_positional(token, current, command_wide)
                i += 1

        pending.append((current, negated))

        clauses = [ self._finish(fields, negated, command_wide) for fields, negated in pending ]
        cons.debug(f"parsed {len(argv)} argument(s) into {len(clauses)} clause(s)")
        return clauses

    def _unknown_switch(self, token: str) -> GrammarError:
        spellings = self.registry.flags()
        if token.startswith(NEGATION_MARKER):
            spellings = [ NEGATION_MARKER + flag[1:] for flag in spellings ]

        return GrammarError(unknown_flag_error(token, suggest_similar(token, spellings)), token=token)

    def _parse_switch(self, argv: List[str], index: int,
                      current: Dict[str, Any], command_wide: Dict[str, Any]) -> int:
        """Store one switch and its values. Returns the number of tokens consumed."""
        token = argv[index]
        descriptor = self.registry.lookup(token)
        if descriptor is None:
            raise self._unknown_switch(token)

        raw = argv[index + 1:index + 1 + descriptor.arity]
        if len(raw) < descriptor.arity:
            raise GrammarError(arity_error(token, descriptor.arity), field=descriptor.name, token=token)

        value = self._convert(descriptor, raw)
        if descriptor.kind != FieldKind.FLAG and token.startswith(NEGATION_MARKER):
            value = Negated(value)

        target = command_wide if descriptor.is_global else current
        if descriptor.accumulates:
            target.setdefault(descriptor.name, []).append(value)
        else:
            target[descriptor.name] = value

        return 1 + descriptor.arity

    def _convert(self, descriptor: FieldDescriptor, raw: List[str]) -> Any:
        if descriptor.kind == FieldKind.FLAG:
            return True

        if descriptor.kind == FieldKind.MULTI:
            values = {}
            for spec, text in zip(descriptor.args, raw):
                if spec.kind == ArgumentKind.NUMBER:
                    values[spec.name] = self._number(descriptor, text)
                else:
                    values[spec.name] = text
            return values

        text = raw[0]
        if descriptor.kind == FieldKind.NUMBER:
            return self._number(descriptor, text)

        if descriptor.kind == FieldKind.STRING and descriptor.enum and text not in descriptor.enum:
            raise GrammarError(enum_error(text, descriptor.enum), field=descriptor.name, token=text)

        return text

    @staticmethod
    def _number(descriptor: FieldDescriptor, text: str) -> float:
        try:
            return float(text)
        except ValueError as exc:
            raise GrammarError(number_error(text), field=descriptor.name, token=text) from exc

    def _parse_positional(self, token: str, current: Dict[str, Any], command_wide: Dict[str, Any]):
        current.setdefault(POSITIONAL_KEY, []).append(token)

        if not has_extension(token, self.config.tabular_extensions):
            return

        primary = self.registry.primary_input
        if primary is None or primary.name in current or primary.name in command_wide:
            return

        target = command_wide if primary.is_global else current
        target[primary.name] = [token] if primary.accumulates else token

    def _finish(self, fields: Dict[str, Any], negated: bool, command_wide: Dict[str, Any]) -> ClauseSet:
        for name, value in command_wide.items():
            if name not in fields:
                fields[name] = _copy(value)

        for descriptor in self.registry:
            if descriptor.name not in fields and descriptor.default is not None:
                fields[descriptor.name] = _copy(descriptor.default)

        for descriptor in self.registry:
            if descriptor.required and descriptor.name not in fields:
                raise GrammarError(required_error(descriptor.flag), field=descriptor.name)

        return ClauseSet(fields=MappingProxyType(fields), negated=negated)


def is_negated(value: Any) -> bool:
    return isinstance(value, Negated)


def unwrap(value: Any) -> Any:
    """Return the value inside a Negated wrapper, or value itself."""
    return value.value if isinstance(value, Negated) else value
