"""
Smoke tests for cli/ modules.

Verifies that modules can be imported and basic functionality works.
"""
# pylint: disable=import-outside-toplevel

import unittest


class TestCliImports(unittest.TestCase):
    """Test that all CLI modules can be imported."""

    def test_clauses_import(self):
        from . import clauses
        self.assertTrue(hasattr(clauses, 'ClauseParser'))
        self.assertTrue(hasattr(clauses, 'ClauseSet'))

    def test_completion_import(self):
        from . import completion
        self.assertTrue(hasattr(completion, 'CompletionAnalyzer'))
        self.assertTrue(hasattr(completion, 'complete_paths'))

    def test_command_import(self):
        from . import command
        self.assertTrue(hasattr(command, 'GSCommand'))
        self.assertTrue(hasattr(command, 'Commander'))

    def test_completion_gen_import(self):
        from . import completion_gen
        self.assertTrue(hasattr(completion_gen, 'generate_bash_completion'))

    def test_docs_gen_import(self):
        from . import docs_gen
        self.assertTrue(hasattr(docs_gen, 'generate_help'))
        self.assertTrue(hasattr(docs_gen, 'generate_man_page'))


class TestChartFields(unittest.TestCase):
    """The example command's registration table should be well formed."""

    def test_chart_fields_build(self):
        from ..examples.chart import CHART_FIELDS
        from ..grammar import FieldRegistry

        registry = FieldRegistry.from_descriptors(CHART_FIELDS)
        self.assertEqual(len(registry), len(CHART_FIELDS))
        self.assertEqual(registry.primary_input.suffix, ".[tc]sv")

    def test_every_field_has_help(self):
        from ..examples.chart import CHART_FIELDS
        from ..grammar import FieldRegistry

        for descriptor in FieldRegistry.from_descriptors(CHART_FIELDS):
            self.assertTrue(descriptor.help, f"{descriptor.name} has no help text")

    def test_abstract_commander(self):
        from .command import Commander

        with self.assertRaises(TypeError):
            Commander()  # pylint: disable=abstract-class-instantiated


if __name__ == "__main__":
    unittest.main()
