"""
Unit tests for cli/command.py and main.py.

Tests the reserved built-ins, the parse/validate/execute sequence and the
exit statuses returned by run_command.
"""

import io, contextlib, unittest

from ..cli.command import Commander, GSCommand
from ..common import GSException
from ..grammar import GrammarError, ValidationError
from ..main import run_command
from ..printer import cons


TABLE = {
    "X":    "field,global,last,help=Use field for X axis",
    "Y":    "field,local,list,help=Use field for Y axis",
    "Type": "string,global,last,default=bar,enum=bar:line:area",
    "Argv": "file,global,last,suffix=.[tc]sv",
}


class RecordingCommander(Commander):
    def __init__(self, fail_validation=False, explode=False):
        self.calls = []
        self.fail_validation = fail_validation
        self.explode = explode

    def validate(self, clauses):
        self.calls.append(("validate", clauses))
        if self.fail_validation:
            raise ValidationError("X", "X axis field must be specified with -x")

    def execute(self, clauses):
        self.calls.append(("execute", clauses))
        if self.explode:
            raise RuntimeError("boom")


def run_captured(command, argv):
    stdout = io.StringIO()
    with contextlib.redirect_stdout(stdout):
        command.run(argv)
    return stdout.getvalue()


class TestBuiltins(unittest.TestCase):
    """Tests for -help, -man, -complete and -bash-completion."""

    def setUp(self):
        self.command = GSCommand("gs-test", TABLE, description="test command")

    def test_help(self):
        out = run_captured(self.command, ["-help"])

        self.assertIn("Usage: gs-test", out)
        self.assertIn("-x FIELD", out)
        self.assertIn("Use field for X axis", out)

    def test_double_dash_help(self):
        self.assertEqual(run_captured(self.command, ["--help"]), run_captured(self.command, ["-help"]))

    def test_man(self):
        out = run_captured(self.command, ["-man"])

        self.assertTrue(out.startswith(".TH GS\\-TEST 1"))
        self.assertIn(".SH OPTIONS", out)

    def test_bash_completion(self):
        out = run_captured(self.command, ["-bash-completion"])
        self.assertIn("complete -F _gs_test_completion gs-test", out)

    def test_complete_prints_one_candidate_per_line(self):
        out = run_captured(self.command, ["-complete", "1", "-type", ""])
        self.assertEqual(out, "bar\nline\narea\n")

    def test_complete_without_candidates_prints_nothing(self):
        out = run_captured(self.command, ["-complete", "1", "-type", "pie"])
        self.assertEqual(out, "")

    def test_complete_requires_position(self):
        with self.assertRaises(GrammarError):
            self.command.run(["-complete"])

    def test_complete_rejects_non_integer_position(self):
        with self.assertRaises(GrammarError) as ctx:
            self.command.run(["-complete", "one", "-x"])

        self.assertIn("invalid completion position: one", str(ctx.exception))

    def test_complete_rejects_negative_position(self):
        with self.assertRaises(GrammarError) as ctx:
            self.command.run(["-complete", "-1", "x"])

        self.assertIn("invalid completion position: -1", str(ctx.exception))

    def test_builtin_only_recognized_first(self):
        with self.assertRaises(GrammarError) as ctx:
            self.command.run(["-x", "time", "-help"])

        self.assertIn("unknown flag: -help", str(ctx.exception))


class TestExecution(unittest.TestCase):
    """Tests for the parse, validate, execute sequence."""

    def test_validate_then_execute(self):
        commander = RecordingCommander()
        GSCommand("gs-test", TABLE, commander=commander).run(["-x", "time", "-y", "cpu"])

        self.assertEqual([name for name, _ in commander.calls], ["validate", "execute"])
        clauses = commander.calls[1][1]
        self.assertEqual(clauses[0]["X"], "time")
        self.assertEqual(clauses[0]["Type"], "bar")

    def test_validation_error_is_fatal(self):
        commander = RecordingCommander(fail_validation=True)

        with self.assertRaises(ValidationError) as ctx:
            GSCommand("gs-test", TABLE, commander=commander).run([])

        self.assertEqual(str(ctx.exception),
                         "validation error for field X: X axis field must be specified with -x")
        self.assertEqual(len(commander.calls), 1)

    def test_without_commander(self):
        with self.assertRaises(GSException):
            GSCommand("gs-test", TABLE).run(["-x", "time"])

    def test_parse_and_complete_helpers(self):
        command = GSCommand("gs-test", TABLE)

        self.assertEqual(command.parse(["-y", "a", "+"])[1].negated, True)
        self.assertEqual(command.complete(["-type", "b"], 1), ["bar"])
        self.assertIs(command.analyzer.reader, command.reader)


class TestRunCommand(unittest.TestCase):
    """Tests for exit statuses."""

    def tearDown(self):
        cons.verbose = False

    def run_quietly(self, command, argv):
        with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()) as err:
            status = run_command(command, argv)
        return status, err.getvalue()

    def test_success(self):
        status, _ = self.run_quietly(GSCommand("gs-test", TABLE, commander=RecordingCommander()), ["-x", "t"])
        self.assertEqual(status, 0)

    def test_reported_error(self):
        status, err = self.run_quietly(GSCommand("gs-test", TABLE, commander=RecordingCommander()),
                                       ["-type", "pie"])

        self.assertEqual(status, 1)
        self.assertIn("Error", err)
        self.assertIn("invalid value 'pie'", err)

    def test_negative_completion_position_is_reported(self):
        status, err = self.run_quietly(GSCommand("gs-test", TABLE), ["-complete", "-1", "x"])

        self.assertEqual(status, 1)
        self.assertIn("invalid completion position", err)

    def test_unexpected_error(self):
        status, err = self.run_quietly(GSCommand("gs-test", TABLE, commander=RecordingCommander(explode=True)),
                                       ["-x", "t"])

        self.assertEqual(status, 2)
        self.assertIn("boom", err)


if __name__ == "__main__":
    unittest.main()
