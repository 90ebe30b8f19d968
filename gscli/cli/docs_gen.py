"""
Generate help text and man pages from field descriptors.

Both outputs are built from the same registry the parser uses, so they
always list exactly the switches the command accepts.
"""

from typing import List, Optional

from ..grammar import FieldRegistry
from ..grammar.schema import FieldDescriptor, FieldKind, RESERVED_FLAGS


_RESERVED_HELP = {
    "-help":            "Show this help text",
    "-man":             "Print the manual page (troff)",
    "-complete":        "Print completion candidates: -complete INDEX ARGS...",
    "-bash-completion": "Print a bash completion script",
}


def _format_default(default) -> str:
    """Format a default value for display."""
    if default is None:
        return ""
    if isinstance(default, list):
        return ", ".join(_format_default(d) for d in default)
    if isinstance(default, bool):
        return "true" if default else "false"
    if isinstance(default, float) and default.is_integer():
        return str(int(default))
    return str(default)


def _switch_label(descriptor: FieldDescriptor) -> str:
    if descriptor.metavar:
        return f"{descriptor.flag} {descriptor.metavar}"
    return descriptor.flag


def _describe(descriptor: FieldDescriptor) -> str:
    """Help text plus the notes derived from the descriptor."""
    notes = []
    if descriptor.is_global:
        notes.append("global")
    if descriptor.accumulates:
        notes.append("repeatable")
    if descriptor.required:
        notes.append("required")
    if descriptor.suffix:
        notes.append(f"files: {descriptor.suffix}")

    default = _format_default(descriptor.default)
    if default:
        notes.append(f"default: {default}")

    text = descriptor.help
    if notes:
        text = f"{text} ({'; '.join(notes)})" if text else f"({'; '.join(notes)})"
    return text


def _synopsis(registry: FieldRegistry) -> str:
    primary = registry.primary_input
    files = f" [{primary.flag[1:]}...]" if primary is not None else ""
    return f"[options]{files} [+|- [options]...]"


def generate_usage(prog: str, registry: FieldRegistry) -> str:
    return f"Usage: {prog} {_synopsis(registry)}"


def generate_help(prog: str, registry: FieldRegistry, description: Optional[str] = None) -> str:
    """
    Generate the -help text.

    Example:
        Usage: gs-chart [options] [argv...] [+|- [options]...]

        Options:
          -x FIELD                 Use field for X axis (global)
          -type {bar,line,area}    Chart type (global; default: bar)
    """
    lines = [generate_usage(prog, registry), ""]
    if description:
        lines.extend([description, ""])

    rows = [ (_switch_label(d), _describe(d)) for d in registry ]
    rows.extend((flag, _RESERVED_HELP[flag]) for flag in RESERVED_FLAGS)

    width = max(len(label) for label, _ in rows) + 2

    lines.append("Options:")
    for label, text in rows:
        lines.append(f"  {label:<{width}} {text}".rstrip())

    lines.extend([
        "",
        "Any -switch may be written +switch to negate its value.",
        "A standalone '-' starts a new clause; a standalone '+' starts a negated clause.",
    ])

    return "\n".join(lines)


def _troff_escape(text: str) -> str:
    text = text.replace("\\", "\\\\").replace("-", "\\-")
    if text.startswith((".", "'")):
        text = "\\&" + text
    return text


def _man_switch(descriptor: FieldDescriptor) -> List[str]:
    lines = [".TP"]
    label = f"\\fB{_troff_escape(descriptor.flag)}\\fR"
    if descriptor.metavar:
        label += f" \\fI{_troff_escape(descriptor.metavar)}\\fR"
    lines.append(label)

    lines.append(_troff_escape(_describe(descriptor)) or "No description.")

    if descriptor.kind == FieldKind.MULTI:
        names = ", ".join(spec.name for spec in descriptor.args)
        lines.append(".br")
        lines.append(_troff_escape(f"Takes {len(descriptor.args)} arguments: {names}."))

    return lines


def generate_man_page(prog: str, registry: FieldRegistry, description: Optional[str] = None,
                      examples: Optional[List[str]] = None) -> str:
    """Generate a man(7) page for the command."""
    title = prog.upper()
    lines = [
        f'.TH {_troff_escape(title)} 1 "" "{_troff_escape(prog)}" "User Commands"',
        ".SH NAME",
        f"{_troff_escape(prog)} \\- {_troff_escape(description or 'clause-based command')}",
        ".SH SYNOPSIS",
        f".B {_troff_escape(prog)}",
        _troff_escape(_synopsis(registry)),
        ".SH DESCRIPTION",
        _troff_escape(description or f"{prog} reads its options as a sequence of clauses."),
        ".SH OPTIONS",
    ]

    for descriptor in registry:
        lines.extend(_man_switch(descriptor))

    for flag in RESERVED_FLAGS:
        lines.extend([".TP", f"\\fB{_troff_escape(flag)}\\fR", _troff_escape(_RESERVED_HELP[flag])])

    lines.extend([
        ".SH CLAUSES",
        "Arguments are grouped into clauses. A standalone",
        ".B \\-",
        "starts a new positive clause and a standalone",
        ".B +",
        "starts a new negated clause.",
        "Global options apply to every clause; local options only to the clause",
        "they appear in. Writing",
        ".BI + switch",
        "instead of",
        ".BI \\- switch",
        "negates the value it introduces.",
    ])

    if examples:
        lines.append(".SH EXAMPLES")
        for example in examples:
            lines.extend([".PP", ".nf", _troff_escape(example), ".fi"])

    return "\n".join(lines)
