"""
Command object and built-in dispatch.

A GSCommand is composed from a program name, a registration table of field
descriptors and a Commander holding the business logic:

    command = GSCommand("gs-chart", {
        "X":    "field,global,last,help=Use field for X axis",
        "Y":    "field,local,list,help=Use field for Y axis",
        "Argv": "file,global,last,suffix=.[tc]sv",
    }, commander=ChartCommander())

    command.run(sys.argv[1:])

run() handles the reserved built-ins (-help, -man, -complete,
-bash-completion) when they are the first token, and otherwise parses,
validates and executes.
"""

import abc

from typing import List, Mapping, Optional

from .clauses import ClauseParser, ClauseSet
from .completion import CompletionAnalyzer, CompletionContext
from .completion_gen import generate_bash_completion
from .docs_gen import generate_help, generate_man_page
from .tabular import TabularReader
from ..common import GSException
from ..printer import cons
from ..state import GSConfig
from ..grammar import FieldRegistry, GrammarError
from ..grammar.schema import BASH_COMPLETION_FLAG, COMPLETE_FLAG, HELP_FLAG, MAN_FLAG


HELP_ALIASES = (HELP_FLAG, "--help")


class Commander(abc.ABC):
    """Business logic of a command."""

    @abc.abstractmethod
    def validate(self, clauses: List[ClauseSet]) -> None:
        """Raise ValidationError when the parsed clauses cannot be executed."""

    @abc.abstractmethod
    def execute(self, clauses: List[ClauseSet]) -> None:
        pass


class GSCommand:  # pylint: disable=too-many-instance-attributes
    """
    One command: its registry, its tabular caches, its parser and its
    completion engine.

    Attributes:
        prog: Program name used in help text and completion scripts
        registry: Frozen field registry
        reader: Tabular reader; its caches live as long as the command
        commander: Business logic, or None for parse-only use
    """

    def __init__(self, prog: str, descriptors: Mapping[str, str],
                 commander: Optional[Commander] = None, config: Optional[GSConfig] = None,
                 description: Optional[str] = None, examples: Optional[List[str]] = None):
        self.prog        = prog
        self.config      = config if config is not None else GSConfig()
        self.commander   = commander
        self.description = description
        self.examples    = examples or []

        self.registry = FieldRegistry.from_descriptors(descriptors, self.config.primary_input)
        self.reader   = TabularReader(self.config.scan_depth)
        self.parser   = ClauseParser(self.registry, self.config)
        self.analyzer = CompletionAnalyzer(self.registry, self.reader, self.config)

    def parse(self, argv: List[str]) -> List[ClauseSet]:
        return self.parser.parse(argv)

    def analyze(self, args: List[str], pos: int) -> CompletionContext:
        return self.analyzer.analyze(args, pos)

    def complete(self, args: List[str], pos: int) -> List[str]:
        return self.analyzer.complete(args, pos)

    def help(self) -> str:
        return generate_help(self.prog, self.registry, self.description)

    def man_page(self) -> str:
        return generate_man_page(self.prog, self.registry, self.description, self.examples)

    def bash_completion(self) -> str:
        return generate_bash_completion(self.prog)

    def _run_complete(self, argv: List[str]) -> None:
        if len(argv) < 2:
            raise GrammarError(f"{COMPLETE_FLAG} requires a position", token=COMPLETE_FLAG)

        try:
            pos = int(argv[1])
        except ValueError as exc:
            raise GrammarError(f"invalid completion position: {argv[1]}", token=argv[1]) from exc

        if pos < 0:
            raise GrammarError(f"invalid completion position: {argv[1]}", token=argv[1])

        for candidate in self.complete(argv[2:], pos):
            cons.emit(candidate)

    def run(self, argv: List[str]) -> None:
        """
        Run the command on argv (without the program name).

        Raises:
            GrammarError: on malformed arguments.
            ValidationError: when the commander rejects the clauses.
            GSException: when there is no commander to execute.
        """
        first = argv[0] if argv else None

        if first in HELP_ALIASES:
            cons.emit(self.help())
            return
        if first == MAN_FLAG:
            cons.emit(self.man_page())
            return
        if first == COMPLETE_FLAG:
            self._run_complete(argv)
            return
        if first == BASH_COMPLETION_FLAG:
            cons.emit(self.bash_completion())
            return

        clauses = self.parse(argv)

        if self.commander is None:
            raise GSException(f"{self.prog}: no command logic to execute")

        self.commander.validate(clauses)
        self.commander.execute(clauses)
