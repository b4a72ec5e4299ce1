"""Configuration model for phase-change notifications and chime playback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class NotifierConfigurationError(Exception):
    """Raised when notifier configuration is invalid."""


@dataclass(frozen=True)
class NotifierConfig:
    """Resolved notification settings and optional output-device selection."""
    enabled: bool = True
    title: str = "Focus Timer"
    desktop: bool = True
    chime: bool = True
    chime_frequency_hz: float = 880.0
    chime_seconds: float = 0.35
    volume: float = 0.3
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.chime_frequency_hz <= 0:
            raise NotifierConfigurationError("chime_frequency_hz must be positive")
        if self.chime_seconds <= 0:
            raise NotifierConfigurationError("chime_seconds must be positive")
        if not 0.0 <= self.volume <= 1.0:
            raise NotifierConfigurationError(
                f"volume must be in [0, 1], got: {self.volume}"
            )

    @classmethod
    def from_settings(
        cls,
        settings,
        *,
        chime: Optional[bool] = None,
        desktop: Optional[bool] = None,
    ) -> "NotifierConfig":
        title = (settings.title or "").strip() or "Focus Timer"
        return cls(
            enabled=bool(settings.enabled),
            title=title,
            desktop=bool(settings.desktop) if desktop is None else desktop,
            chime=bool(settings.chime) if chime is None else chime,
            chime_frequency_hz=float(settings.chime_frequency_hz),
            chime_seconds=float(settings.chime_seconds),
            volume=float(settings.volume),
            output_device_index=settings.output_device,
        )
