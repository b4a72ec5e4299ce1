"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Phase durations and long-break cadence from `[timer]`."""
    work_minutes: float = 25.0
    short_break_minutes: float = 5.0
    long_break_minutes: float = 15.0
    long_break_every: int = 4


@dataclass(frozen=True)
class NotificationSettings:
    """Phase-change notification settings from `[notifications]`."""
    enabled: bool = True
    title: str = "Focus Timer"
    desktop: bool = True
    chime: bool = True
    chime_frequency_hz: float = 880.0
    chime_seconds: float = 0.35
    volume: float = 0.3
    output_device: Optional[int] = None


@dataclass(frozen=True)
class DisplaySettings:
    """Terminal display settings from `[display]`."""
    refresh_seconds: float = 0.5
    bar_width: int = 32


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    notifications: NotificationSettings
    display: DisplaySettings
    source_file: str
