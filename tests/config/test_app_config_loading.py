import os
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_reads_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [timer]
                    work_minutes = 50
                    short_break_minutes = 10
                    long_break_minutes = 30.5
                    long_break_every = 3

                    [notifications]
                    enabled = true
                    title = "Deep Work"
                    desktop = false
                    chime = false
                    chime_frequency_hz = 440
                    chime_seconds = 0.2
                    volume = 0.5
                    output_device = 2

                    [display]
                    refresh_seconds = 1
                    bar_width = 40
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

        self.assertEqual(str(config_path), app_config.source_file)
        self.assertEqual(50.0, app_config.timer.work_minutes)
        self.assertEqual(10.0, app_config.timer.short_break_minutes)
        self.assertEqual(30.5, app_config.timer.long_break_minutes)
        self.assertEqual(3, app_config.timer.long_break_every)
        self.assertEqual("Deep Work", app_config.notifications.title)
        self.assertFalse(app_config.notifications.desktop)
        self.assertFalse(app_config.notifications.chime)
        self.assertEqual(440.0, app_config.notifications.chime_frequency_hz)
        self.assertEqual(0.5, app_config.notifications.volume)
        self.assertEqual(2, app_config.notifications.output_device)
        self.assertEqual(1.0, app_config.display.refresh_seconds)
        self.assertEqual(40, app_config.display.bar_width)

    def test_missing_sections_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[timer]\nwork_minutes = 30\n")

            app_config = load_app_config(str(config_path))

        self.assertEqual(30.0, app_config.timer.work_minutes)
        self.assertEqual(5.0, app_config.timer.short_break_minutes)
        self.assertEqual(4, app_config.timer.long_break_every)
        self.assertTrue(app_config.notifications.enabled)
        self.assertEqual("Focus Timer", app_config.notifications.title)
        self.assertTrue(app_config.notifications.desktop)
        self.assertIsNone(app_config.notifications.output_device)
        self.assertEqual(0.5, app_config.display.refresh_seconds)

    def test_absent_default_config_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir:
            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=Path(cwd_dir)):
                    app_config = load_app_config()

        self.assertEqual("", app_config.source_file)
        self.assertEqual(25.0, app_config.timer.work_minutes)
        self.assertEqual(15.0, app_config.timer.long_break_minutes)

    def test_explicit_missing_config_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "nope.toml"

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(missing))

        self.assertIn("not found", str(context.exception))

    def test_env_config_path_must_exist(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = str(Path(temp_dir) / "env.toml")
            with patch.dict(os.environ, {"APP_CONFIG_FILE": missing}, clear=True):
                with self.assertRaises(AppConfigurationError):
                    load_app_config()

    def test_invalid_toml_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[timer\nwork_minutes = ")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

        self.assertIn("Failed to parse config TOML", str(context.exception))

    def test_rejects_invalid_values(self) -> None:
        cases = {
            "[timer]\nlong_break_every = 0\n": "timer.long_break_every",
            "[timer]\nwork_minutes = -5\n": "timer.work_minutes",
            "[timer]\nwork_minutes = \"soon\"\n": "timer.work_minutes",
            "[timer]\nshort_break_minutes = inf\n": "timer.short_break_minutes",
            "[timer]\nlong_break_minutes = nan\n": "timer.long_break_minutes",
            "[display]\nrefresh_seconds = \"inf\"\n": "display.refresh_seconds",
            "[timer]\nlong_break_every = true\n": "timer.long_break_every",
            "[notifications]\nvolume = 2.0\n": "notifications.volume",
            "[notifications]\nchime = \"maybe\"\n": "notifications.chime",
            "[display]\nrefresh_seconds = 0\n": "display.refresh_seconds",
            "timer = 5\n": "[timer]",
        }
        for content, field in cases.items():
            with self.subTest(field=field):
                with tempfile.TemporaryDirectory() as temp_dir:
                    config_path = Path(temp_dir) / "config.toml"
                    _write_text(config_path, content)

                    with self.assertRaises(AppConfigurationError) as context:
                        load_app_config(str(config_path))

                self.assertIn(field, str(context.exception))

    def test_string_values_are_coerced(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                '[timer]\nwork_minutes = "45"\nlong_break_every = "2"\n'
                '[notifications]\nchime = "off"\n',
            )

            app_config = load_app_config(str(config_path))

        self.assertEqual(45.0, app_config.timer.work_minutes)
        self.assertEqual(2, app_config.timer.long_break_every)
        self.assertFalse(app_config.notifications.chime)

    def test_resolve_config_path_prefers_explicit_then_env(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            explicit = Path(temp_dir) / "explicit.toml"
            from_env = Path(temp_dir) / "env.toml"
            _write_text(explicit, "")
            _write_text(from_env, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(from_env)}, clear=True):
                self.assertEqual(explicit, resolve_config_path(str(explicit)))
                self.assertEqual(from_env, resolve_config_path())

    def test_resolve_config_path_uses_bundled_config_when_frozen(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as bundle_dir:
            bundled = Path(bundle_dir) / "config.toml"
            _write_text(bundled, "[timer]\nwork_minutes = 20\n")

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=Path(cwd_dir)):
                    with patch.object(sys, "_MEIPASS", bundle_dir, create=True):
                        resolved = resolve_config_path()

        self.assertEqual(bundled, resolved)


if __name__ == "__main__":
    unittest.main()
