"""
Filename suffix patterns used to filter file completions.

Supported forms, all matched case-insensitively against the end of the name:
- literal suffix:      .tsv
- brace alternation:   .{tsv,csv}
- glob:                .[tc]sv, *.json
"""

import re
import fnmatch

GLOB_CHARS = "*?[]"


def matches(filename: str, pattern: str) -> bool:
    """Return whether filename ends with something matching pattern."""
    filename = filename.lower()
    pattern = pattern.lower()

    if "{" in pattern and "}" in pattern:
        return _matches_braces(filename, pattern)

    if any(char in pattern for char in GLOB_CHARS):
        try:
            return re.match(_glob_to_regex("*" + pattern), filename) is not None
        except re.error:
            return filename.endswith(pattern)

    return filename.endswith(pattern)


def _matches_braces(filename: str, pattern: str) -> bool:
    start = pattern.find("{")
    end = pattern.find("}")
    if start == -1 or end == -1 or start >= end:
        return False

    prefix = pattern[:start]
    suffix = pattern[end + 1:]
    options = pattern[start + 1:end].split(",")

    return any(filename.endswith(prefix + option.strip() + suffix) for option in options)


def _glob_to_regex(pattern: str) -> str:
    # fnmatch.translate quietly treats an unterminated "[" as a literal;
    # a malformed class is rejected here so the caller can fall back.
    if pattern.count("[") != pattern.count("]"):
        raise re.error(f"unbalanced character class in {pattern}")
    return fnmatch.translate(pattern)
