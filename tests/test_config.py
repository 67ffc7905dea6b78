"""Tests for read-only config loading and logging setup."""

from __future__ import annotations

import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mantui import config
from mantui.logging_config import setup_logging


class ConfigBehaviorTests(unittest.TestCase):
    def _write(self, tmp: str, payload: str) -> Path:
        path = Path(tmp) / "config.json"
        path.write_text(payload, encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("mantui.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                loaded = config.load_viewer_config()
        self.assertEqual(loaded, config.ViewerConfig())
        self.assertEqual(loaded.tick_seconds, 0.1)
        self.assertEqual(loaded.debounce_seconds, 0.2)

    def test_valid_values_are_applied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(
                tmp,
                json.dumps({"theme": "transparent", "tick_ms": 50, "debounce_ms": 300, "log_file": "~/mantui.log"}),
            )
            loaded = config.load_viewer_config(path)

        self.assertEqual(loaded.theme, "transparent")
        self.assertEqual(loaded.tick_ms, 50)
        self.assertEqual(loaded.debounce_ms, 300)
        self.assertEqual(loaded.log_file, Path("~/mantui.log").expanduser())

    def test_malformed_values_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, json.dumps({"theme": 3, "tick_ms": -1, "debounce_ms": True, "log_file": " "}))
            loaded = config.load_viewer_config(path)
        self.assertEqual(loaded, config.ViewerConfig())

    def test_invalid_json_and_non_object_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(config.load_config(self._write(tmp, "{not json")), {})
            self.assertEqual(config.load_config(self._write(tmp, "[1, 2]")), {})

    def test_loading_never_writes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested" / "config.json"
            config.load_viewer_config(target)
            self.assertFalse(target.parent.exists())


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        setup_logging(None)

    def test_without_log_file_only_null_handler(self) -> None:
        logger = setup_logging(None)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_log_file_receives_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "mantui.log"
            logger = setup_logging(log_path)
            logging.getLogger("mantui.pages").info("opened reader")
            for handler in logger.handlers:
                handler.flush()

            content = log_path.read_text(encoding="utf-8")
            setup_logging(None)

        self.assertIn("mantui.pages - INFO - opened reader", content)


if __name__ == "__main__":
    unittest.main()
