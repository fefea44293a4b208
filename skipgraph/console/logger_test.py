"""
Unit tests for the console logger module.
"""
from __future__ import annotations

import io
import re
import unittest

from rich.console import Console
from rich.table import Table

from skipgraph.console.logger import Logger, get_logger, SKIPGRAPH_THEME


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    ansi_escape = re.compile(r'\x1b\[[0-9;]*m')
    return ansi_escape.sub('', text)


class _CapturedLoggerTest(unittest.TestCase):
    def setUp(self) -> None:
        """Set up test fixtures with a captured console."""
        self.output = io.StringIO()
        self.logger = Logger()
        self.logger.console = Console(
            file=self.output, force_terminal=True, theme=SKIPGRAPH_THEME
        )


class TestLoggerBasicMethods(_CapturedLoggerTest):
    """Tests for basic logging methods."""

    def test_info_includes_icon(self) -> None:
        self.logger.info("Information message")
        output = self.output.getvalue()
        self.assertIn("ℹ", output)
        self.assertIn("Information message", output)

    def test_success_includes_checkmark(self) -> None:
        self.logger.success("Success message")
        output = self.output.getvalue()
        self.assertIn("✓", output)
        self.assertIn("Success message", output)

    def test_warning_includes_icon(self) -> None:
        self.logger.warning("Warning message")
        output = self.output.getvalue()
        self.assertIn("⚠", output)
        self.assertIn("Warning message", output)

    def test_error_includes_icon(self) -> None:
        self.logger.error("Error message")
        output = self.output.getvalue()
        self.assertIn("✗", output)
        self.assertIn("Error message", output)


class TestLoggerStructuredOutput(_CapturedLoggerTest):
    """Tests for structured output methods."""

    def test_key_value_displays_pairs(self) -> None:
        self.logger.key_value({"layers": 3, "scales": 1})
        output = strip_ansi(self.output.getvalue())
        self.assertIn("layers:", output)
        self.assertIn("3", output)
        self.assertIn("scales:", output)

    def test_key_value_with_title(self) -> None:
        self.logger.key_value({"key": "value"}, title="Graph")
        self.assertIn("Graph", self.output.getvalue())

    def test_table_with_data_prints(self) -> None:
        self.logger.table(
            title="Edges",
            columns=["src", "dst"],
            rows=[["0", "2"], ["1", "3"]],
        )
        output = self.output.getvalue()
        self.assertIn("src", output)
        self.assertIn("dst", output)

    def test_table_without_data_returns_table(self) -> None:
        table = self.logger.table(title="Empty")
        self.assertIsInstance(table, Table)
        self.assertEqual(self.output.getvalue(), "")


class TestLoggerGraphSummary(_CapturedLoggerTest):
    """Tests for the graph summary helper."""

    def test_graph_summary_prints_rows(self) -> None:
        table = self.logger.graph_summary(
            "Block",
            [["0", "input", "-", "-"], ["1", "Linear", "0", "0.5"], ["2", "output", "-", "-"]],
        )
        output = strip_ansi(self.output.getvalue())
        self.assertIn("Block", output)
        self.assertIn("Linear", output)
        self.assertIn("0.5", output)
        self.assertEqual(table.row_count, 3)
        self.assertEqual(len(table.columns), 4)


class TestLoggerSingleton(unittest.TestCase):
    """Tests for singleton pattern."""

    def test_get_logger_returns_same_instance(self) -> None:
        logger1 = get_logger()
        logger2 = get_logger()
        self.assertIsInstance(logger1, Logger)
        self.assertIs(logger1, logger2)


if __name__ == "__main__":
    unittest.main()
