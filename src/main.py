import argparse
import logging
import signal
import sys
from typing import Optional, Sequence

from rich.console import Console

from app_config import AppConfigurationError, load_app_config
from durations import parse_duration_seconds
from notify import (
    AudioOutput,
    DesktopNotifier,
    NotifierConfig,
    NotifierConfigurationError,
    PhaseNotifier,
    PlyerDesktopNotifier,
)
from pomodoro import EngineConfig, InvalidEngineConfigError, PhaseEngine
from runtime import RuntimeLoop, RuntimeSettings


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=log_file,
    )
    return logging.getLogger("focus_timer")


def setup_signal_handlers(loop: RuntimeLoop) -> None:
    """Stop the runtime loop gracefully on SIGTERM."""

    def signal_handler(signum: int, frame) -> None:
        logging.getLogger("focus_timer").info(
            "%s received, stopping...", signal.Signals(signum).name
        )
        loop.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)


def _duration_arg(value: str) -> float:
    try:
        return parse_duration_seconds(value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(str(error)) from error


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="focus-timer",
        description="Terminal focus timer cycling work, short and long breaks.",
    )
    parser.add_argument("--config", default=None, help="path to config.toml")
    parser.add_argument(
        "--work",
        type=_duration_arg,
        default=None,
        help="work duration, e.g. 25m (bare numbers are minutes)",
    )
    parser.add_argument(
        "--short",
        type=_duration_arg,
        default=None,
        help="short break duration",
    )
    parser.add_argument(
        "--long",
        type=_duration_arg,
        default=None,
        help="long break duration",
    )
    parser.add_argument(
        "--long-every",
        type=int,
        default=None,
        help="take a long break every N work sessions",
    )
    parser.add_argument(
        "--no-chime",
        action="store_true",
        help="disable the audible chime on phase changes",
    )
    parser.add_argument(
        "--no-desktop",
        action="store_true",
        help="disable desktop notifications on phase changes",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", default=None, help="write logs to this file")
    return parser


def build_engine_config(args: argparse.Namespace, timer_settings) -> EngineConfig:
    """Merge command-line overrides over the `[timer]` settings."""
    return EngineConfig(
        work_seconds=(
            args.work if args.work is not None else timer_settings.work_minutes * 60.0
        ),
        short_break_seconds=(
            args.short
            if args.short is not None
            else timer_settings.short_break_minutes * 60.0
        ),
        long_break_seconds=(
            args.long if args.long is not None else timer_settings.long_break_minutes * 60.0
        ),
        long_break_every=(
            args.long_every
            if args.long_every is not None
            else timer_settings.long_break_every
        ),
    )


def create_audio_output(
    config: NotifierConfig,
    logger: logging.Logger,
) -> Optional[AudioOutput]:
    if not (config.enabled and config.chime):
        return None
    try:
        # sounddevice loads PortAudio on import.
        from notify.output import SoundDeviceAudioOutput
    except (ImportError, OSError) as error:
        logger.warning("Chime disabled, audio output unavailable: %s", error)
        return None
    return SoundDeviceAudioOutput(
        output_device_index=config.output_device_index,
        logger=logging.getLogger("notify.output"),
    )


def create_desktop_notifier(config: NotifierConfig) -> Optional[DesktopNotifier]:
    if not (config.enabled and config.desktop):
        return None
    return PlyerDesktopNotifier(
        app_name=config.title,
        logger=logging.getLogger("notify.desktop"),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the focus timer in the terminal."""
    args = build_arg_parser().parse_args(argv)
    logger = setup_logging(
        level=getattr(logging, args.log_level),
        log_file=args.log_file,
    )

    try:
        app_config = load_app_config(args.config)
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", app_config.source_file)
        engine_config = build_engine_config(args, app_config.timer)
        notifier_config = NotifierConfig.from_settings(
            app_config.notifications,
            chime=False if args.no_chime else None,
            desktop=False if args.no_desktop else None,
        )
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1
    except (InvalidEngineConfigError, NotifierConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    engine = PhaseEngine(engine_config, logger=logging.getLogger("pomodoro"))
    loop = RuntimeLoop(
        engine,
        settings=RuntimeSettings(
            title=notifier_config.title,
            refresh_seconds=app_config.display.refresh_seconds,
            bar_width=app_config.display.bar_width,
        ),
        console=Console(),
        logger=logging.getLogger("runtime"),
    )
    notifier = PhaseNotifier(
        notifier_config,
        output=create_audio_output(notifier_config, logger),
        desktop=create_desktop_notifier(notifier_config),
        sink=loop.post_message,
        logger=logging.getLogger("notify"),
    )
    engine.set_subscriber(notifier)
    setup_signal_handlers(loop)

    logger.info(
        "Starting focus timer: work=%ss short=%ss long=%ss long_every=%d",
        engine_config.work_seconds,
        engine_config.short_break_seconds,
        engine_config.long_break_seconds,
        engine_config.long_break_every,
    )
    return loop.run()


if __name__ == "__main__":
    sys.exit(main())
