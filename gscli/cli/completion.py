"""
Completion Context Analysis.

Answers "what comes next?" for a partially typed command line. The analyzer
looks at the word under the cursor and scans backwards for the switch that
governs it, then decides what kind of candidates to offer:

    chart data.tsv -y <TAB>          field names from data.tsv
    chart data.tsv -match host <TAB> values of "host" in data.tsv
    chart -type <TAB>                bar line area
    chart -<TAB>                     every switch
    chart <TAB>                      files, tabular ones first

Completion never fails loudly: unreadable files, unknown fields and missing
directories all yield no candidates and are reported through debug output.
"""

import os
import enum
import dataclasses

from typing import Iterable, List, Optional, Tuple

from .pattern import matches
from .tabular import TabularReader, TabularError
from ..common import has_extension
from ..printer import cons
from ..state import GSConfig
from ..grammar import FieldRegistry
from ..grammar.schema import (
    ArgumentKind, ArgumentSpec, FieldDescriptor, FieldKind,
    NEGATION_MARKER, RESERVED_FLAGS, SEPARATORS, is_prefixed,
)


class CompletionKind(enum.Enum):
    FLAG        = "flag"
    FIELD_NAME  = "field-name"
    FIELD_VALUE = "field-value"
    ENUM        = "enum"
    FILE        = "file"
    NONE        = "none"


@dataclasses.dataclass
class CompletionContext:  # pylint: disable=too-many-instance-attributes
    """
    What is being completed at one cursor position.

    Attributes:
        kind: Kind of candidates to produce
        current: The partial word under the cursor
        source: Tabular file found on the command line, if any
        target_field: Field whose values are wanted (FIELD_VALUE)
        arg_index: Position of the word among the governing switch's arguments
        arg_spec: Argument spec of that position (multi switches)
        descriptor: Governing switch, or the primary input for bare files
    """
    kind:         CompletionKind
    current:      str                       = ""
    source:       Optional[str]             = None
    target_field: Optional[str]             = None
    arg_index:    int                       = 0
    arg_spec:     Optional[ArgumentSpec]    = None
    descriptor:   Optional[FieldDescriptor] = None


def _starts_with(candidate: str, partial: str) -> bool:
    return candidate.lower().startswith(partial.lower())


def _filter(candidates: Iterable[str], partial: str) -> List[str]:
    return [ candidate for candidate in candidates if _starts_with(candidate, partial) ]


def _split_partial(partial: str) -> Tuple[str, str]:
    if partial.endswith("/"):
        return partial, ""
    if "/" in partial:
        return os.path.dirname(partial) or "/", os.path.basename(partial)
    return ".", partial


def complete_paths(partial: str, suffix: Optional[str] = None,
                   extensions: Iterable[str] = (".tsv", ".csv")) -> List[str]:
    """
    Complete a filesystem path.

    Files come first (tabular files ahead of the others), then directories
    with a trailing "/". When suffix is given only matching files are kept.
    Hidden entries are skipped unless the partial name starts with ".".
    """
    directory, prefix = _split_partial(partial)

    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as exc:
        cons.debug(f"cannot list {directory}: {exc}")
        return []

    tabular, others, directories = [], [], []
    for entry in entries:
        name = entry.name
        if name.startswith(".") and not prefix.startswith("."):
            continue
        if not _starts_with(name, prefix):
            continue

        path = name if directory == "." else os.path.join(directory, name)

        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False

        if is_dir:
            directories.append(path + "/")
            continue

        if suffix and not matches(name, suffix):
            continue

        if has_extension(name, extensions):
            tabular.append(path)
        else:
            others.append(path)

    return tabular + others + directories


class CompletionAnalyzer:
    """
    Decides and produces completion candidates for one command.

    The analyzer shares its TabularReader (and therefore its caches) with the
    command that owns it.
    """

    def __init__(self, registry: FieldRegistry, reader: Optional[TabularReader] = None,
                 config: Optional[GSConfig] = None):
        self.registry = registry
        self.config   = config if config is not None else GSConfig()
        self.reader   = reader if reader is not None else TabularReader(self.config.scan_depth)

    def _is_tabular(self, token: str) -> bool:
        return has_extension(token, self.config.tabular_extensions)

    def find_tabular_source(self, args: List[str]) -> Optional[str]:
        """
        Return the first tabular file named on the command line, either as
        the value of a file switch or as a bare argument.
        """
        for i, token in enumerate(args):
            if is_prefixed(token) or not self._is_tabular(token):
                continue

            if i == 0:
                return token

            previous = args[i - 1]
            if previous in SEPARATORS or not is_prefixed(previous):
                return token

            descriptor = self.registry.lookup(previous)
            if descriptor is not None and descriptor.kind == FieldKind.FILE:
                return token

        return None

    def find_governing_switch(self, args: List[str], pos: int) -> Tuple[int, Optional[FieldDescriptor]]:
        """
        Scan backwards from pos - 1 for the nearest prefixed token.

        Returns:
            (index, descriptor) of the switch, or (-1, None) when the scan
            hits a separator, an unknown switch or the start of the line.
        """
        for i in range(min(pos, len(args)) - 1, -1, -1):
            token = args[i]
            if not is_prefixed(token):
                continue
            if token in SEPARATORS:
                return -1, None

            descriptor = self.registry.lookup(token)
            if descriptor is None:
                return -1, None
            return i, descriptor

        return -1, None

    def _bare_file_position(self, args: List[str], pos: int) -> bool:
        if pos == 0:
            return True
        if pos - 1 < len(args):
            previous = args[pos - 1]
            return previous in SEPARATORS or not is_prefixed(previous)
        return False

    def analyze(self, args: List[str], pos: int) -> CompletionContext:
        """Classify the word at args[pos] (pos may equal len(args) for a new word)."""
        pos = max(0, min(pos, len(args)))
        current = args[pos] if 0 <= pos < len(args) else ""

        if is_prefixed(current):
            return CompletionContext(kind=CompletionKind.FLAG, current=current)

        context = CompletionContext(kind=CompletionKind.FILE, current=current,
                                    source=self.find_tabular_source(args))

        index, descriptor = self.find_governing_switch(args, pos)
        if descriptor is None:
            if self._bare_file_position(args, pos):
                context.descriptor = self.registry.primary_input
            return context

        arg_index = pos - index - 1
        context.arg_index  = arg_index
        context.descriptor = descriptor

        if descriptor.kind == FieldKind.FIELD and arg_index == 0:
            context.kind = CompletionKind.FIELD_NAME
        elif descriptor.kind == FieldKind.STRING and descriptor.enum and arg_index == 0:
            context.kind = CompletionKind.ENUM
        elif descriptor.kind == FieldKind.MULTI and 0 <= arg_index < len(descriptor.args):
            self._analyze_argument(context, args, index)

        return context

    def _analyze_argument(self, context: CompletionContext, args: List[str], index: int):
        spec = context.descriptor.args[context.arg_index]
        context.arg_spec = spec

        if spec.kind == ArgumentKind.FIELD:
            context.kind = CompletionKind.FIELD_NAME
        elif spec.kind == ArgumentKind.CONTENT:
            context.kind = CompletionKind.FIELD_VALUE
            previous = context.arg_index - 1
            if previous >= 0 and context.descriptor.args[previous].kind == ArgumentKind.FIELD:
                slot = index + context.arg_index
                if slot < len(args):
                    context.target_field = args[slot]
        elif spec.kind == ArgumentKind.FILE:
            context.kind = CompletionKind.FILE
        else:
            context.kind = CompletionKind.NONE

    def complete(self, args: List[str], pos: int) -> List[str]:
        """Return the candidates for args[pos], in presentation order."""
        context = self.analyze(args, pos)
        cons.debug(f"completing {context.current!r} at {pos} as {context.kind.value}")

        if context.kind == CompletionKind.FLAG:
            return self.complete_flags(context.current)
        if context.kind == CompletionKind.FIELD_NAME:
            return self.complete_fields(context.source, context.current)
        if context.kind == CompletionKind.FIELD_VALUE:
            return self.complete_values(context.source, context.target_field, context.current)
        if context.kind == CompletionKind.ENUM:
            return self.complete_enum(context.descriptor, context.current)
        if context.kind == CompletionKind.NONE:
            return []

        suffix = context.descriptor.suffix if context.descriptor is not None else None
        return complete_paths(context.current, suffix, self.config.tabular_extensions)

    def complete_flags(self, partial: str) -> List[str]:
        """Every switch in both spellings, then the reserved built-ins."""
        spellings = []
        for flag in self.registry.flags():
            spellings.append(flag)
            spellings.append(NEGATION_MARKER + flag[1:])
        spellings.extend(RESERVED_FLAGS)

        return _filter(spellings, partial)

    def complete_fields(self, source: Optional[str], partial: str) -> List[str]:
        if source is None:
            cons.debug("no tabular file on the command line")
            return []

        try:
            return _filter(self.reader.field_names(source), partial)
        except TabularError as exc:
            cons.debug(str(exc))
            return []

    def complete_values(self, source: Optional[str], field: Optional[str], partial: str) -> List[str]:
        if source is None or not field:
            cons.debug("no tabular file or field to take values from")
            return []

        try:
            return _filter(self.reader.field_values(source, field), partial)
        except TabularError as exc:
            cons.debug(str(exc))
            return []

    @staticmethod
    def complete_enum(descriptor: Optional[FieldDescriptor], partial: str) -> List[str]:
        if descriptor is None:
            return []
        return _filter(descriptor.enum, partial)
