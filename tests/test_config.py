"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
import unittest
from unittest import mock

from statebus.config import DEFAULT_CONFIG, ensure_config_dir, load_config


class ConfigTests(unittest.TestCase):
    """Validate config merge and fallback behavior."""

    def test_missing_config_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config = load_config(config_path=Path(temp_dir) / "config.toml")
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertEqual(config["logging"]["level"], "INFO")
        self.assertEqual(config["store"]["initial_state"], {})
        self.assertFalse(config["bridge"]["enabled"])
        self.assertEqual(config["bridge"]["event_name"], "state.changed")

    def test_partial_config_overrides_selected_values(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[logging]
level = "debug"

[store.initial_state]
theme = "dark"
retries = 3

[bridge]
enabled = true
                """.strip(),
                encoding="utf-8",
            )
            config = load_config(config_path=config_path)
        self.assertEqual(config["logging"]["level"], "DEBUG")
        self.assertEqual(
            config["store"]["initial_state"], {"theme": "dark", "retries": 3}
        )
        self.assertTrue(config["bridge"]["enabled"])
        self.assertEqual(config["bridge"]["event_name"], "state.changed")
        self.assertTrue(config["bus"]["log_failures"])

    def test_invalid_values_fallback_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                """
[logging]
level = "LOUD"

[bridge]
event_name = "   "
                """.strip(),
                encoding="utf-8",
            )
            with self.assertLogs("statebus.config", level="WARNING"):
                config = load_config(config_path=config_path)
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_wildcard_initial_state_key_is_kept(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                '[store.initial_state]\n"*" = 1\n', encoding="utf-8"
            )
            config = load_config(config_path=config_path)
        self.assertEqual(config["store"]["initial_state"], {"*": 1})

    def test_unparseable_toml_falls_back(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[logging\nlevel = ", encoding="utf-8")
            with self.assertLogs("statebus.config", level="WARNING") as logs:
                config = load_config(config_path=config_path)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertTrue(any("Failed to parse config" in line for line in logs.output))

    def test_environment_variable_selects_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "custom.toml"
            config_path.write_text("[bus]\nlog_failures = false\n", encoding="utf-8")
            with mock.patch.dict(os.environ, {"STATEBUS_CONFIG": str(config_path)}):
                config = load_config()
        self.assertFalse(config["bus"]["log_failures"])

    def test_load_config_does_not_mutate_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text(
                "[store.initial_state]\nx = 1\n", encoding="utf-8"
            )
            load_config(config_path=config_path)
        self.assertEqual(DEFAULT_CONFIG["store"]["initial_state"], {})

    def test_ensure_config_dir_creates_directory(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / "nested" / "statebus"
            self.assertEqual(ensure_config_dir(target), target)
            self.assertTrue(target.is_dir())


if __name__ == "__main__":
    unittest.main()
