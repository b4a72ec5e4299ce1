import io
import logging
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from app_config_schema import TimerSettings
from main import (
    build_arg_parser,
    build_engine_config,
    create_audio_output,
    create_desktop_notifier,
    main,
)
from notify import NotifierConfig, PlyerDesktopNotifier


class BuildEngineConfigTests(unittest.TestCase):
    def test_uses_timer_settings_without_overrides(self) -> None:
        args = build_arg_parser().parse_args([])

        config = build_engine_config(args, TimerSettings())

        self.assertEqual(1500.0, config.work_seconds)
        self.assertEqual(300.0, config.short_break_seconds)
        self.assertEqual(900.0, config.long_break_seconds)
        self.assertEqual(4, config.long_break_every)

    def test_flags_override_timer_settings(self) -> None:
        args = build_arg_parser().parse_args(
            ["--work", "50m", "--short", "90s", "--long", "1h", "--long-every", "2"]
        )

        config = build_engine_config(args, TimerSettings())

        self.assertEqual(3000.0, config.work_seconds)
        self.assertEqual(90.0, config.short_break_seconds)
        self.assertEqual(3600.0, config.long_break_seconds)
        self.assertEqual(2, config.long_break_every)

    def test_invalid_duration_flag_exits(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                build_arg_parser().parse_args(["--work", "soon"])

        self.assertEqual(2, context.exception.code)


class MainExitCodeTests(unittest.TestCase):
    def test_missing_config_file_returns_one(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = str(Path(temp_dir) / "missing.toml")

            self.assertEqual(1, main(["--config", missing, "--log-level", "ERROR"]))

    def test_invalid_cadence_returns_one(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            config_path.write_text("[timer]\nwork_minutes = 1\n", encoding="utf-8")

            exit_code = main(
                ["--config", str(config_path), "--long-every", "0", "--log-level", "ERROR"]
            )

        self.assertEqual(1, exit_code)


class CreateAudioOutputTests(unittest.TestCase):
    def test_no_output_when_chime_disabled(self) -> None:
        logger = logging.getLogger("test.main")

        self.assertIsNone(create_audio_output(NotifierConfig(chime=False), logger))
        self.assertIsNone(create_audio_output(NotifierConfig(enabled=False), logger))


class CreateDesktopNotifierTests(unittest.TestCase):
    def test_desktop_notifier_follows_config(self) -> None:
        self.assertIsInstance(
            create_desktop_notifier(NotifierConfig()),
            PlyerDesktopNotifier,
        )
        self.assertIsNone(create_desktop_notifier(NotifierConfig(desktop=False)))
        self.assertIsNone(create_desktop_notifier(NotifierConfig(enabled=False)))

    def test_no_desktop_flag(self) -> None:
        self.assertTrue(build_arg_parser().parse_args(["--no-desktop"]).no_desktop)
        self.assertFalse(build_arg_parser().parse_args([]).no_desktop)


if __name__ == "__main__":
    unittest.main()
