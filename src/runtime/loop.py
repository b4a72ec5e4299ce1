"""Terminal runtime loop driving the phase engine from typed commands."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Optional, TextIO

from rich.console import Console
from rich.live import Live

from pomodoro import PhaseEngine
from pomodoro.constants import ACTION_QUIT

from .commands import CommandDispatcher, CommandResult, parse_command
from .console import render_engine


@dataclass(frozen=True)
class RuntimeSettings:
    """Display tuning for the runtime loop."""
    title: str = "Focus Timer"
    refresh_seconds: float = 0.5
    bar_width: int = 32


class RuntimeLoop:
    """Reads commands on a daemon thread and redraws the status panel.

    Input lines are queued by the reader thread; the main loop drains the
    queue with the refresh interval as timeout so the countdown keeps
    updating while the user is idle.
    """
    def __init__(
        self,
        engine: PhaseEngine,
        *,
        settings: RuntimeSettings,
        console: Optional[Console] = None,
        input_stream: Optional[TextIO] = None,
        dispatcher: Optional[CommandDispatcher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._engine = engine
        self._settings = settings
        self._console = console or Console()
        self._input = input_stream if input_stream is not None else sys.stdin
        self._logger = logger or logging.getLogger("runtime")
        self._dispatcher = dispatcher or CommandDispatcher(
            engine,
            logger=self._logger.getChild("commands"),
        )

        self._commands: Queue[Optional[str]] = Queue()
        self._stop_event = threading.Event()
        self._message_lock = threading.Lock()
        self._message = ""

    def post_message(self, title: str, body: str) -> None:
        """Show a notification line in the panel; safe from any thread."""
        with self._message_lock:
            self._message = f"{title}: {body}" if title else body

    def request_stop(self) -> None:
        self._stop_event.set()

    def run(self) -> int:
        reader = threading.Thread(
            target=self._read_input,
            daemon=True,
            name="runtime-input",
        )
        reader.start()

        try:
            with Live(
                self._render(),
                console=self._console,
                auto_refresh=False,
            ) as live:
                while not self._stop_event.is_set():
                    try:
                        raw = self._commands.get(timeout=self._settings.refresh_seconds)
                    except Empty:
                        live.update(self._render(), refresh=True)
                        continue

                    if raw is None:
                        self._logger.info("Input closed; shutting down.")
                        break
                    if not raw:
                        continue

                    result = self.handle_input(raw)
                    live.update(self._render(), refresh=True)
                    if result is not None and result.action == ACTION_QUIT:
                        break
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
        finally:
            self._engine.close()
        return 0

    def handle_input(self, raw: str) -> Optional[CommandResult]:
        action = parse_command(raw)
        if action is None:
            self.post_message("", f"Unknown command: {raw.strip()!r}")
            return None

        result = self._dispatcher.apply(action)
        self._logger.debug(
            "Command applied: action=%s accepted=%s reason=%s",
            result.action,
            result.accepted,
            result.reason,
        )
        if not result.accepted:
            self.post_message("", f"Ignored {result.action}: {result.reason.replace('_', ' ')}")
        return result

    def _read_input(self) -> None:
        try:
            for line in self._input:
                self._commands.put(line.strip())
        except (OSError, ValueError) as error:
            self._logger.warning("Input reader stopped: %s", error)
        self._commands.put(None)

    def _render(self):
        with self._message_lock:
            message = self._message
        return render_engine(
            self._engine,
            title=self._settings.title,
            bar_width=self._settings.bar_width,
            message=message,
        )
