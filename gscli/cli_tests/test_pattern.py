"""
Unit tests for cli/pattern.py module.
"""

import unittest
from ..cli.pattern import matches


class TestSuffixPatterns(unittest.TestCase):
    """Tests for literal, brace and glob suffix patterns."""

    def test_literal(self):
        self.assertTrue(matches("data.tsv", ".tsv"))
        self.assertFalse(matches("data.csv", ".tsv"))

    def test_case_insensitive(self):
        self.assertTrue(matches("DATA.CSV", ".{tsv,csv}"))
        self.assertTrue(matches("data.csv", ".CSV"))

    def test_braces(self):
        self.assertTrue(matches("data.tsv", ".{tsv,csv}"))
        self.assertFalse(matches("data.json", ".{tsv,csv}"))
        self.assertTrue(matches("data.csv", ".{tsv, csv}"))

    def test_character_class(self):
        self.assertTrue(matches("data.tsv", ".[tc]sv"))
        self.assertTrue(matches("data.csv", ".[tc]sv"))
        self.assertFalse(matches("data.json", ".[tc]sv"))

    def test_star(self):
        self.assertTrue(matches("report.json", "*.json"))
        self.assertFalse(matches("report.yaml", "*.json"))

    def test_question_mark(self):
        self.assertTrue(matches("run1.log", "?.log"))

    def test_malformed_glob_falls_back_to_literal(self):
        """An unterminated class should be treated as a literal suffix."""
        self.assertTrue(matches("odd.[tsv", ".[tsv"))
        self.assertFalse(matches("data.tsv", ".[tsv"))


if __name__ == "__main__":
    unittest.main()
