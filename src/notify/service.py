"""Phase-change notifier fanning out to logs, the terminal, desktop and chime."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

import numpy as np

from pomodoro import PhaseState

from .chime import DEFAULT_SAMPLE_RATE_HZ, NotificationError, chime_for_state
from .config import NotifierConfig
from .messages import notification_body, phase_message

MessageSink = Callable[[str, str], None]


class AudioOutput(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = True) -> None:
        ...


class DesktopNotifier(Protocol):
    def show(self, title: str, message: str) -> None:
        ...


class PhaseNotifier:
    """Engine subscriber announcing every phase change and stop.

    Delivery failures are logged and never propagate back into the engine.
    """
    def __init__(
        self,
        config: NotifierConfig,
        *,
        output: Optional[AudioOutput] = None,
        desktop: Optional[DesktopNotifier] = None,
        sink: Optional[MessageSink] = None,
        sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._output = output
        self._desktop = desktop
        self._sink = sink
        self._sample_rate_hz = sample_rate_hz
        self._logger = logger or logging.getLogger("notify")

    def __call__(self, snapshot: PhaseState) -> None:
        self.notify(snapshot)

    def notify(self, snapshot: PhaseState) -> None:
        if not self._config.enabled:
            return

        title = self._config.title
        body = notification_body(snapshot)
        message = phase_message(snapshot)
        self._logger.info("%s: %s", title, body)

        if self._sink is not None:
            try:
                self._sink(title, f"{body}. {message}")
            except Exception as error:
                self._logger.warning("Notification sink failed: %s", error)

        if self._config.desktop and self._desktop is not None:
            try:
                self._desktop.show(title, f"{body}. {message}")
            except NotificationError as error:
                self._logger.error("Desktop notification failed: %s", error)

        if self._config.chime and self._output is not None:
            try:
                wav = chime_for_state(
                    snapshot,
                    base_frequency_hz=self._config.chime_frequency_hz,
                    seconds=self._config.chime_seconds,
                    volume=self._config.volume,
                    sample_rate_hz=self._sample_rate_hz,
                )
                self._output.play(wav, self._sample_rate_hz)
            except NotificationError as error:
                self._logger.error("Chime playback failed: %s", error)
