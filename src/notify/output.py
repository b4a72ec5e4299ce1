"""Sounddevice-backed playback for notification chimes."""

import logging
from typing import Optional

import numpy as np
import sounddevice as sd

from .chime import NotificationError


class SoundDeviceAudioOutput:
    """Plays short mono float32 buffers on the selected output device."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger(__name__)

    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = True) -> None:
        if wav.ndim != 1:
            raise NotificationError("Expected mono PCM array for playback")
        if len(wav) == 0:
            raise NotificationError("Cannot play empty audio buffer")

        self._logger.debug(
            "Playing %d chime samples at %d Hz (device=%s)",
            len(wav),
            sample_rate_hz,
            self._output_device_index,
        )
        try:
            sd.play(wav, samplerate=sample_rate_hz, device=self._output_device_index)
            if blocking:
                sd.wait()
        except Exception as error:
            raise NotificationError(f"Audio playback failed: {error}") from error
