"""
Consistent Error Messages for Command-Line Grammar Failures.

Provides the grammar exceptions and utility functions that build their
messages, so the descriptor parser, the clause parser and command
implementations word failures the same way.

Error Message Format
--------------------
- Switch names as typed on the command line: -type
- Offending values in single quotes: 'pie'
- Allowed values comma-separated: bar, line, area

Examples:
- "invalid value 'pie', must be one of: bar, line, area"
- "flag -match requires 2 arguments"
- "unknown flag: -tpye. Did you mean '-type'?"
"""

from typing import Any, List, Optional

from ..common import GSException


class GrammarError(GSException):
    """
    A malformed descriptor, an unknown switch, a wrong argument count,
    a malformed number or a value outside a declared enumeration.

    Always fatal to parsing.
    """

    def __init__(self, message: str, field: Optional[str] = None, token: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.token = token

    def __str__(self) -> str:
        if self.field:
            return f"field {self.field}: {self.message}"
        return self.message


class ValidationError(GSException):
    """A business-level failure signalled by a command after parsing."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return f"validation error for field {self.field}: {self.message}"


def format_value(value: Any) -> str:
    """Format a value for error messages."""
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)


def enum_error(value: str, allowed: List[str]) -> str:
    """
    Create an enumeration violation message.

    Args:
        value: The rejected value
        allowed: The declared enumeration, in declaration order

    Returns:
        Formatted error message.
    """
    return f"invalid value {format_value(value)}, must be one of: {', '.join(allowed)}"


def arity_error(flag: str, required: int) -> str:
    """Create a message for a switch followed by too few tokens."""
    if required == 1:
        return f"flag {flag} requires a value"
    return f"flag {flag} requires {required} arguments"


def number_error(value: str) -> str:
    return f"invalid number {format_value(value)}"


def boolean_error(key: str, value: str) -> str:
    return f"invalid boolean for {key}: {value}"


def unknown_flag_error(flag: str, suggestions: Optional[List[str]] = None) -> str:
    """
    Create an error message for an unknown switch with suggestions.

    Args:
        flag: The unknown switch as typed.
        suggestions: Optional list of similar valid switches.

    Returns:
        Formatted error message with "Did you mean?" if suggestions available.
    """
    base_msg = f"unknown flag: {flag}"
    if suggestions:
        if len(suggestions) == 1:
            return f"{base_msg}. Did you mean {format_value(suggestions[0])}?"
        quoted = [format_value(s) for s in suggestions]
        return f"{base_msg}. Did you mean one of: {', '.join(quoted)}?"
    return base_msg


def required_error(flag: str) -> str:
    return f"flag {flag} is required"
