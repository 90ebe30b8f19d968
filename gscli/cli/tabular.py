"""
Tabular data access for completion and for commands.

TabularReader answers the two questions the completion engine asks about a
TSV/CSV file: which fields does it have, and which values does a field take
in its first rows. Answers are cached per reader instance for the life of
the command; the backing file is assumed not to change during one run.

load_table() reads a whole table for commands that consume the data.
"""

import sys
import typing
import contextlib
import dataclasses

from ..common import GSException


DEFAULT_SEPARATOR = "\t"


class TabularError(GSException):
    pass


def detect_separator(line: str) -> str:
    """Return the first character that cannot be part of a field name, or a tab."""
    for char in line:
        if not (char.isalnum() or char == "_"):
            return char
    return DEFAULT_SEPARATOR


def parse_header(line: str) -> typing.Tuple[typing.List[str], str]:
    """
    Split a header line into field names.

    Leading non-alphanumeric characters (e.g. a "#" comment marker) are
    dropped before the separator is detected.

    Returns:
        (field names, separator)
    """
    start = 0
    while start < len(line) and not line[start].isalnum():
        start += 1
    line = line[start:]

    separator = detect_separator(line)
    fields = [ name.strip() for name in line.split(separator) ]
    return [ name for name in fields if name ], separator


def _read_lines(filepath: str) -> typing.Iterator[str]:
    try:
        with open(filepath, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except OSError as exc:
        raise TabularError(f'Failed to read from "{filepath}": {exc}') from exc


def _first_non_empty(lines: typing.Iterator[str], filepath: str) -> str:
    for line in lines:
        if line.strip():
            return line
    raise TabularError(f'File "{filepath}" is empty')


class TabularReader:
    """
    Header and value lookups over tabular files, cached per instance.

    Attributes:
        scan_depth: Maximum number of data rows inspected for values.
        reads: Number of times a file was opened (cache misses).
    """

    def __init__(self, scan_depth: int = 100):
        self.scan_depth = scan_depth
        self.reads = 0
        self._field_cache: typing.Dict[str, typing.List[str]] = {}
        self._value_cache: typing.Dict[str, typing.Dict[str, typing.List[str]]] = {}

    def field_names(self, filepath: str) -> typing.List[str]:
        """
        Return the header names of filepath, in file order.

        Raises:
            TabularError: If the file cannot be read or has no content.
        """
        if filepath in self._field_cache:
            return self._field_cache[filepath]

        self.reads += 1
        with contextlib.closing(_read_lines(filepath)) as lines:
            fields, _ = parse_header(_first_non_empty(lines, filepath))

        self._field_cache[filepath] = fields
        return fields

    def field_values(self, filepath: str, field: str) -> typing.List[str]:
        """
        Return the sorted distinct non-empty values of field across the first
        scan_depth data rows. An unknown field yields an empty list.

        Raises:
            TabularError: If the file cannot be read or has no content.
        """
        file_cache = self._value_cache.setdefault(filepath, {})
        if field in file_cache:
            return file_cache[field]

        self.reads += 1
        with contextlib.closing(_read_lines(filepath)) as lines:
            fields, separator = parse_header(_first_non_empty(lines, filepath))

            if field not in fields:
                file_cache[field] = []
                return []

            index = fields.index(field)
            values = set()
            rows = 0
            for line in lines:
                if rows >= self.scan_depth:
                    break
                if not line.strip():
                    continue
                rows += 1

                parts = line.split(separator)
                if index < len(parts):
                    value = parts[index].strip()
                    if value:
                        values.add(value)

        result = sorted(values)
        file_cache[field] = result
        return result


@dataclasses.dataclass
class Table:
    headers: typing.List[str]
    rows:    typing.List[typing.List[str]]

    def index(self, field: str) -> int:
        """Return the column of field, or -1."""
        if field in self.headers:
            return self.headers.index(field)
        return -1


def load_table(filepath: str) -> Table:
    """
    Read a whole table. "-" (or an empty path) reads standard input.

    Raises:
        TabularError: If the input cannot be read or is empty.
    """
    if filepath in ("", "-"):
        lines = iter([ line.rstrip("\r\n") for line in sys.stdin ])
        filepath = "<stdin>"
    else:
        lines = _read_lines(filepath)

    header = _first_non_empty(lines, filepath)
    separator = detect_separator(header)
    headers = [ name.strip() for name in header.split(separator) ]

    rows = []
    for line in lines:
        if not line:
            continue
        rows.append([ value.strip() for value in line.split(separator) ])

    return Table(headers=headers, rows=rows)
