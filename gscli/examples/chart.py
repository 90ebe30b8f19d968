"""
gs-chart: render a Chart.js page from a TSV/CSV table.

    gs-chart data.tsv -x time -y cpu -y mem + -y load -right -match host web1

Each clause contributes one dataset per -y field, after filtering rows with
its -match conditions (+match excludes matching rows). The page is printed
on stdout.
"""

import os, re, json, hashlib, typing

import rich.markup

from mako.template import Template

from ..cli     import ClauseSet, Commander, GSCommand, is_negated, load_table, unwrap
from ..cli.tabular import Table
from ..common  import GSException, file_read, has_extension
from ..grammar import ValidationError
from ..main    import run_command
from ..printer import cons
from ..state   import load_config


CHART_TEMPLATE = os.path.join(os.path.dirname(os.path.realpath(__file__)), "templates", "chart.mako")

CHART_FIELDS = {
    "X":      "field,global,last,help=Use field for X axis",
    "Y":      "field,local,list,help=Use field for Y axis",
    "Match":  "multi,local,list,args=field:content,help=Filter data by field matching content",
    "Right":  "flag,local,last,help=Use right-hand scale",
    "Title":  "string,global,last,help=Chart title,default=Chart",
    "Type":   "string,global,last,help=Chart type,default=bar,enum=bar:line:area",
    "Width":  "number,global,last,help=Chart width in pixels,default=800",
    "Height": "number,global,last,help=Chart height in pixels,default=400",
    "Quiet":  "flag,global,last,help=Suppress progress messages,default=true",
    "Argv":   "file,global,last,help=Input TSV file,suffix=.[tc]sv",
}

CHART_EXAMPLES = [
    "gs-chart data.tsv -x time -y cpu -y mem",
    "gs-chart data.tsv -x time -y cpu -match host web1 + -y cpu -match host db1 -right",
    "cat data.csv | gs-chart -x day -y sales -type line",
]


def generate_color(field: str) -> typing.Tuple[str, str]:
    """ Returns (background, border) colours derived from the MD5 of field. """
    digest = hashlib.md5(field.encode("utf-8")).digest()
    r, g, b = digest[0], digest[1], digest[2]

    return f"rgba({r}, {g}, {b}, 0.6)", f"rgb({r}, {g}, {b})"


def _to_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _script_json(data) -> str:
    # Keep "</script>" inside strings from closing the page's script block.
    return json.dumps(data, indent=4).replace("</", "<\\/")


def input_file(clauses: typing.List[ClauseSet], extensions: typing.Iterable[str]) -> str:
    """ Returns the table to read: -argv, else the first bare tabular file, else stdin ("-"). """
    for clause in clauses:
        if clause.get("Argv"):
            return unwrap(clause["Argv"])

    for clause in clauses:
        for arg in clause.positionals:
            if has_extension(arg, extensions):
                return arg

    return "-"


class MatchFilter:
    """ Row filter built from the -match / +match conditions of one clause. """

    def __init__(self, table: Table, conditions: typing.List[typing.Any]):
        self.conditions = []
        for condition in conditions:
            values = unwrap(condition)
            self.conditions.append((
                table.index(values["field"]),
                re.compile(values["content"]),
                is_negated(condition),
            ))

    def accepts(self, row: typing.List[str]) -> bool:
        for index, pattern, exclude in self.conditions:
            found = 0 <= index < len(row) and pattern.search(row[index]) is not None
            if found == exclude:
                return False

        return True


class ChartCommander(Commander):
    def __init__(self, extensions: typing.Iterable[str] = (".tsv", ".csv")):
        self.extensions = list(extensions)

    def validate(self, clauses: typing.List[ClauseSet]) -> None:
        first = clauses[0]

        if not first.get("X"):
            raise ValidationError("X", "X axis field must be specified with -x")

        for name in ("Width", "Height"):
            if unwrap(first.get(name, 0)) <= 0:
                raise ValidationError(name, f"must be positive, got {_format_number(unwrap(first[name]))}")

        for clause in clauses:
            for condition in clause.get("Match", []):
                content = unwrap(condition)["content"]
                try:
                    re.compile(content)
                except re.error as exc:
                    raise ValidationError("Match", f"invalid pattern '{content}': {exc}") from exc

    def build_datasets(self, table: Table, clauses: typing.List[ClauseSet], chart_type: str) -> list:
        datasets = []
        for i, clause in enumerate(clauses):
            verbose = not clause.get("Quiet", True)
            if verbose:
                cons.print(f"Clause {i + 1}{' (negated)' if clause.negated else ''}", highlight=False)
                cons.indent()

            rows = table.rows
            if clause.get("Match"):
                match = MatchFilter(table, clause["Match"])
                rows  = [ row for row in rows if match.accepts(row) ]

            right = bool(clause.get("Right", False))

            for y in clause.get("Y", []):
                y = unwrap(y)
                index = table.index(y)
                if index == -1:
                    cons.print(f"[yellow]Warning[/yellow]: Y field [bold]{rich.markup.escape(y)}[/bold] not found in data")
                    continue

                background, border = generate_color(y)
                datasets.append({
                    "label":           y,
                    "data":            [ _to_float(row[index]) for row in rows if index < len(row) ],
                    "backgroundColor": background,
                    "borderColor":     border,
                    "fill":            chart_type == "area",
                    "yAxisID":         "y1" if right else "y",
                })

                if verbose:
                    cons.print(f"[magenta]{rich.markup.escape(y)}[/magenta]: {len(datasets[-1]['data'])} point(s), {'right' if right else 'left'} axis", highlight=False)

            if verbose:
                cons.unindent()

        return datasets

    def render(self, clauses: typing.List[ClauseSet]) -> str:
        first = clauses[0]
        table = load_table(input_file(clauses, self.extensions))

        x = unwrap(first["X"])
        x_index = table.index(x)
        if x_index == -1:
            raise GSException(f"X field '{x}' not found in data")

        chart_type = unwrap(first["Type"])
        datasets   = self.build_datasets(table, clauses, chart_type)
        labels     = [ row[x_index] for row in table.rows if x_index < len(row) ]

        scales = {
            "x": {"display": True, "title": {"display": True, "text": x}},
            "y": {"type": "linear", "display": True, "position": "left",
                  "title": {"display": True, "text": "Values"}},
        }

        if any(dataset["yAxisID"] == "y1" for dataset in datasets):
            scales["y1"] = {"type": "linear", "display": True, "position": "right",
                            "title": {"display": True, "text": "Right Axis"}}

        options = {
            "responsive": True,
            "scales":     scales,
            "plugins":    {"title": {"display": True, "text": unwrap(first["Title"])}},
        }

        return Template(file_read(CHART_TEMPLATE)).render(
            title        = unwrap(first["Title"]),
            width        = _format_number(unwrap(first["Width"])),
            height       = _format_number(unwrap(first["Height"])),
            chart_type   = "line" if chart_type == "area" else chart_type,
            data_json    = _script_json({"labels": labels, "datasets": datasets}),
            options_json = _script_json(options),
        )

    def execute(self, clauses: typing.List[ClauseSet]) -> None:
        cons.emit(self.render(clauses))


def make_command(config=None) -> GSCommand:
    config = config if config is not None else load_config()

    return GSCommand(
        "gs-chart", CHART_FIELDS,
        commander   = ChartCommander(config.tabular_extensions),
        config      = config,
        description = "render a Chart.js page from a TSV/CSV table",
        examples    = CHART_EXAMPLES,
    )


def main() -> int:
    try:
        command = make_command()
    except GSException as exc:
        cons.print(f"[bold red]Error[/bold red]: {rich.markup.escape(str(exc))}", highlight=False)
        return 1

    return run_command(command)


if __name__ == "__main__":
    raise SystemExit(main())
