"""
Descriptor String Parser.

Turns one compact descriptor string into a FieldDescriptor:

    "kind,scope,mode,key=value,key=value,..."

    "field,global,last,help=Use field for X axis"
    "string,global,last,default=bar,enum=bar:line:area"
    "multi,local,list,args=field:content"
    "file,global,last,suffix=.{tsv,csv}"

Commas inside {...} do not split tokens. A bare token following enum= or
args= continues that list, so "enum=bar,line,area" keeps all three values.
After help= it continues the help text, so help may contain commas. Other
bare tokens are ignored. A missing or unknown kind, scope, mode or key fails
the whole descriptor.
"""

from typing import Any, Dict, List

from .errors import GrammarError, boolean_error, number_error
from .schema import (
    ArgumentKind, ArgumentSpec, FieldDescriptor, FieldKind, FieldMode, FieldScope
)


KNOWN_KEYS = ("help", "default", "required", "enum", "suffix", "args")

# Keys whose value is a list and may be continued by following bare tokens
LIST_KEYS = ("enum", "args")

_TRUE_STRINGS  = ("1", "t", "T", "TRUE", "true", "True")
_FALSE_STRINGS = ("0", "f", "F", "FALSE", "false", "False")


def split_descriptor(text: str) -> List[str]:
    """
    Split a descriptor on commas, keeping commas inside braces.

    "file,global,last,suffix=.{tsv,csv}" -> ["file", "global", "last", "suffix=.{tsv,csv}"]
    """
    parts = []
    current = []
    depth = 0

    for char in text:
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    if current:
        parts.append("".join(current))

    return parts


def parse_bool(key: str, value: str) -> bool:
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise GrammarError(boolean_error(key, value), token=value)


def parse_enum_values(value: str) -> List[str]:
    """Split enum values on "," or ":" ("bar:line:area", "bar,line,area", "single")."""
    separator = "," if "," in value else ":"
    return [part.strip() for part in value.split(separator)]


def parse_argument_kind(name: str) -> ArgumentKind:
    """Map an argument name to its kind. Unknown names are plain strings."""
    for kind in ArgumentKind:
        if kind.value == name:
            return kind
    return ArgumentKind.STRING


def parse_argument_specs(value: str) -> List[ArgumentSpec]:
    """Parse "field:content" or "field,pattern,replacement" into ordered specs."""
    separator = ":" if ":" in value else ","
    specs = []
    for part in value.split(separator):
        part = part.strip()
        if not part:
            raise GrammarError(f"empty argument name in args={value}", token=value)
        specs.append(ArgumentSpec(name=part, kind=parse_argument_kind(part)))
    return specs


def parse_default(value: str, kind: FieldKind) -> Any:
    if kind == FieldKind.NUMBER:
        try:
            return float(value)
        except ValueError as exc:
            raise GrammarError(f"invalid default: {number_error(value)}", token=value) from exc
    if kind == FieldKind.FLAG:
        return parse_bool("default", value)
    return value


def _parse_enum_member(enum_type, token: str, what: str):
    for member in enum_type:
        if member.value == token:
            return member
    if not token:
        raise GrammarError(f"missing field {what}", token=token)
    raise GrammarError(f"unknown field {what}: {token}", token=token)


def parse_descriptor(name: str, text: str) -> FieldDescriptor:
    """
    Parse one descriptor string into a FieldDescriptor.

    Args:
        name: Field name the descriptor belongs to
        text: The descriptor string

    Returns:
        The parsed descriptor.

    Raises:
        GrammarError: naming the field and the offending token.
    """
    try:
        return _parse_descriptor(name, text)
    except GrammarError as exc:
        if exc.field is None:
            raise GrammarError(exc.message, field=name, token=exc.token) from exc
        raise


def _parse_descriptor(name: str, text: str) -> FieldDescriptor:
    raw_tokens = split_descriptor(text)
    tokens = [token.strip() for token in raw_tokens]
    if not any(tokens):
        raise GrammarError("empty descriptor")

    positional = (tokens + ["", "", ""])[:3]
    for token in positional:
        if "=" in token:
            raise GrammarError(f"expected kind, scope and mode before {token}", token=token)

    kind  = _parse_enum_member(FieldKind,  positional[0], "type")
    scope = _parse_enum_member(FieldScope, positional[1], "scope")
    mode  = _parse_enum_member(FieldMode,  positional[2], "mode")

    values: Dict[str, str] = {}
    last_key = None
    for raw, token in zip(raw_tokens[3:], tokens[3:]):
        if not token:
            continue

        if "=" not in token:
            if last_key in LIST_KEYS:
                values[last_key] += f",{token}"
            elif last_key == "help":
                values["help"] += f",{raw.rstrip()}"
            continue

        key, value = (part.strip() for part in token.split("=", 1))
        if key not in KNOWN_KEYS:
            raise GrammarError(f"unknown key in descriptor: {key}", token=token)

        values[key] = value
        last_key = key

    options: Dict[str, Any] = {}
    if "help" in values:
        options["help"] = values["help"]
    if "required" in values:
        options["required"] = parse_bool("required", values["required"])
    if "enum" in values:
        options["enum"] = parse_enum_values(values["enum"])
    if "suffix" in values:
        options["suffix"] = values["suffix"]
    if "args" in values:
        options["args"] = parse_argument_specs(values["args"])
    if "default" in values:
        default = parse_default(values["default"], kind)
        options["default"] = [default] if mode == FieldMode.LIST else default

    return FieldDescriptor(name=name, kind=kind, scope=scope, mode=mode, **options)
