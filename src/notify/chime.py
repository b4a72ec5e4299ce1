"""Synthesized notification tones for phase changes."""

from __future__ import annotations

import numpy as np

from pomodoro import Phase, PhaseState

DEFAULT_SAMPLE_RATE_HZ = 44100
_FADE_SECONDS = 0.01
_GAP_SECONDS = 0.08


class NotificationError(Exception):
    """Raised when a notification cannot be delivered."""


def synthesize_tone(
    frequency_hz: float,
    seconds: float,
    *,
    volume: float = 0.3,
    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
) -> np.ndarray:
    """Return a mono float32 sine tone with short linear fades."""
    if frequency_hz <= 0 or seconds <= 0:
        raise NotificationError("Tone frequency and length must be positive")

    sample_count = max(1, int(round(seconds * sample_rate_hz)))
    t = np.arange(sample_count, dtype=np.float32) / float(sample_rate_hz)
    wave = np.sin(2.0 * np.pi * frequency_hz * t).astype(np.float32)

    fade = min(sample_count // 2, int(_FADE_SECONDS * sample_rate_hz))
    if fade > 0:
        ramp = np.linspace(0.0, 1.0, fade, dtype=np.float32)
        wave[:fade] *= ramp
        wave[-fade:] *= ramp[::-1]
    return wave * np.float32(volume)


def chime_for_state(
    snapshot: PhaseState,
    *,
    base_frequency_hz: float,
    seconds: float,
    volume: float,
    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
) -> np.ndarray:
    """Build the chime pattern for a phase snapshot.

    Work gets one rising pair, breaks a falling pair, a long break three
    notes and the idle snapshot (after stop) a single low note.
    """
    if snapshot.is_idle:
        ratios = [0.5]
    elif snapshot.phase is Phase.WORK:
        ratios = [1.0, 1.5]
    elif snapshot.phase is Phase.LONG_BREAK:
        ratios = [1.5, 1.25, 1.0]
    else:
        ratios = [1.5, 1.0]

    gap = np.zeros(int(_GAP_SECONDS * sample_rate_hz), dtype=np.float32)
    parts: list[np.ndarray] = []
    for index, ratio in enumerate(ratios):
        if index:
            parts.append(gap)
        parts.append(
            synthesize_tone(
                base_frequency_hz * ratio,
                seconds,
                volume=volume,
                sample_rate_hz=sample_rate_hz,
            )
        )
    return np.concatenate(parts)
