"""
Unit tests for grammar/errors.py and grammar/suggest.py.
"""

import unittest
from ..grammar.errors import (
    GrammarError, ValidationError, arity_error, enum_error, format_value,
    required_error, unknown_flag_error,
)
from ..grammar.suggest import suggest_similar


class TestMessages(unittest.TestCase):
    """Tests for the message helpers."""

    def test_format_value(self):
        self.assertEqual(format_value("pie"), "'pie'")
        self.assertEqual(format_value(3.0), "3.0")

    def test_enum_error_lists_allowed_values(self):
        self.assertEqual(
            enum_error("pie", ["bar", "line", "area"]),
            "invalid value 'pie', must be one of: bar, line, area"
        )

    def test_arity_error(self):
        self.assertEqual(arity_error("-x", 1), "flag -x requires a value")
        self.assertEqual(arity_error("-match", 2), "flag -match requires 2 arguments")

    def test_required_error(self):
        self.assertEqual(required_error("-x"), "flag -x is required")

    def test_unknown_flag_without_suggestions(self):
        self.assertEqual(unknown_flag_error("-zzz"), "unknown flag: -zzz")

    def test_unknown_flag_with_one_suggestion(self):
        self.assertEqual(unknown_flag_error("-tpye", ["-type"]),
                         "unknown flag: -tpye. Did you mean '-type'?")

    def test_unknown_flag_with_several_suggestions(self):
        msg = unknown_flag_error("-t", ["-type", "-title"])
        self.assertIn("Did you mean one of: '-type', '-title'?", msg)


class TestExceptions(unittest.TestCase):

    def test_grammar_error_with_field(self):
        exc = GrammarError("unknown field type: bogus", field="X", token="bogus")

        self.assertEqual(str(exc), "field X: unknown field type: bogus")
        self.assertEqual(exc.token, "bogus")

    def test_grammar_error_without_field(self):
        self.assertEqual(str(GrammarError("unknown flag: -q")), "unknown flag: -q")

    def test_validation_error(self):
        exc = ValidationError("Width", "must be positive")
        self.assertEqual(str(exc), "validation error for field Width: must be positive")


class TestSuggestSimilar(unittest.TestCase):
    """Tests for fuzzy switch suggestions."""

    def test_close_typo(self):
        suggestions = suggest_similar("-tpye", ["-x", "-type", "-title"])
        self.assertEqual(suggestions[0], "-type")

    def test_no_match(self):
        self.assertEqual(suggest_similar("qqqqqqqq", ["-x", "-y"]), [])

    def test_empty_inputs(self):
        self.assertEqual(suggest_similar("", ["-x"]), [])
        self.assertEqual(suggest_similar("-x", []), [])


if __name__ == "__main__":
    unittest.main()
