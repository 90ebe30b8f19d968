"""
gscli: declarative clause-based argument parsing and tab-completion for
tabular data tools.
"""

from .common  import GSException
from .state   import GSConfig, load_config
from .grammar import FieldRegistry, GrammarError, ValidationError, Negated
from .cli     import ClauseSet, Commander, GSCommand, CompletionKind

__version__ = "0.1"
