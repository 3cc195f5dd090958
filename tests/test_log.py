from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from manshell.log import configure_logging, parse_level


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging("WARNING", None)

    def test_without_log_file_records_are_dropped(self) -> None:
        logger = configure_logging("DEBUG", None)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_log_file_receives_package_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "manshell.log"
            configure_logging("info", log_path)
            logging.getLogger("manshell.shell.session").info("hello %s", "log")
            logging.getLogger("manshell.shell.session").debug("hidden")
            configure_logging("WARNING", None)

            text = log_path.read_text(encoding="utf-8")
        self.assertIn("manshell.shell.session - INFO - hello log", text)
        self.assertNotIn("hidden", text)

    def test_parse_level_falls_back_to_warning(self) -> None:
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level("loud"), logging.WARNING)


if __name__ == "__main__":
    unittest.main()
