"""
Unit tests for cli/docs_gen.py and cli/completion_gen.py.
"""

import unittest
from ..cli.completion_gen import generate_bash_completion
from ..cli.docs_gen import generate_help, generate_man_page, generate_usage
from ..grammar import FieldRegistry


TABLE = {
    "X":      "field,global,last,help=Use field for X axis,required=true",
    "Y":      "field,local,list,help=Use field for Y axis",
    "Match":  "multi,local,list,args=field:content,help=Filter rows",
    "Right":  "flag,local,last",
    "Type":   "string,global,last,help=Chart type,default=bar,enum=bar:line:area",
    "Width":  "number,global,last,default=800",
    "Argv":   "file,global,last,help=Input file,suffix=.[tc]sv",
}


class TestHelp(unittest.TestCase):

    def setUp(self):
        self.registry = FieldRegistry.from_descriptors(TABLE)

    def test_usage(self):
        self.assertEqual(generate_usage("gs-chart", self.registry),
                         "Usage: gs-chart [options] [argv...] [+|- [options]...]")

    def test_every_switch_listed(self):
        text = generate_help("gs-chart", self.registry)

        for flag in self.registry.flags():
            self.assertIn(flag, text)
        self.assertIn("-bash-completion", text)

    def test_rows_carry_metadata(self):
        lines = generate_help("gs-chart", self.registry).splitlines()

        def row(prefix):
            return next(line for line in lines if line.strip().startswith(prefix))

        self.assertIn("{bar,line,area}", row("-type"))
        self.assertIn("default: bar", row("-type"))
        self.assertIn("FIELD CONTENT", row("-match"))
        self.assertIn("required", row("-x FIELD"))
        self.assertIn("repeatable", row("-y FIELD"))
        self.assertIn("default: 800", row("-width"))
        self.assertIn("files: .[tc]sv", row("-argv"))

    def test_description(self):
        text = generate_help("gs-chart", self.registry, "render charts")
        self.assertEqual(text.splitlines()[2], "render charts")


class TestManPage(unittest.TestCase):

    def setUp(self):
        self.registry = FieldRegistry.from_descriptors(TABLE)

    def test_sections(self):
        page = generate_man_page("gs-chart", self.registry, "render charts", ["gs-chart data.tsv -x t"])

        for section in ("NAME", "SYNOPSIS", "DESCRIPTION", "OPTIONS", "CLAUSES", "EXAMPLES"):
            self.assertIn(f".SH {section}", page)

    def test_dashes_escaped(self):
        page = generate_man_page("gs-chart", self.registry)

        self.assertIn("\\fB\\-match\\fR \\fIFIELD CONTENT\\fR", page)
        self.assertNotIn(".SH EXAMPLES", page)

    def test_multi_arguments_described(self):
        page = generate_man_page("gs-chart", self.registry)
        self.assertIn("Takes 2 arguments: field, content.", page)


class TestBashCompletion(unittest.TestCase):

    def test_calls_back_into_command(self):
        script = generate_bash_completion("gs-chart")

        self.assertIn('gs-chart -complete $((COMP_CWORD-1)) "${COMP_WORDS[@]:1}"', script)
        self.assertIn("_gs_chart_completion() {", script)
        self.assertTrue(script.rstrip().endswith("complete -F _gs_chart_completion gs-chart"))


if __name__ == "__main__":
    unittest.main()
