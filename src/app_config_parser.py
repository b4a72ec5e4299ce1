"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import math
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    DisplaySettings,
    NotificationSettings,
    TimerSettings,
)


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    notifications = _parse_notification_settings(_section(raw, "notifications"))
    display = _parse_display_settings(_section(raw, "display"))

    return AppConfig(
        timer=timer,
        notifications=notifications,
        display=display,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    settings = TimerSettings(
        work_minutes=_as_float(section.get("work_minutes", 25.0), "timer.work_minutes"),
        short_break_minutes=_as_float(
            section.get("short_break_minutes", 5.0),
            "timer.short_break_minutes",
        ),
        long_break_minutes=_as_float(
            section.get("long_break_minutes", 15.0),
            "timer.long_break_minutes",
        ),
        long_break_every=_as_int(
            section.get("long_break_every", 4),
            "timer.long_break_every",
        ),
    )
    for field in ("work_minutes", "short_break_minutes", "long_break_minutes"):
        if getattr(settings, field) < 0:
            raise AppConfigurationError(f"timer.{field} cannot be negative.")
    if settings.long_break_every < 1:
        raise AppConfigurationError("timer.long_break_every must be at least 1.")
    return settings


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    volume = _as_float(section.get("volume", 0.3), "notifications.volume")
    if not 0.0 <= volume <= 1.0:
        raise AppConfigurationError("notifications.volume must be in [0, 1].")
    chime_seconds = _as_float(
        section.get("chime_seconds", 0.35),
        "notifications.chime_seconds",
    )
    if chime_seconds <= 0:
        raise AppConfigurationError("notifications.chime_seconds must be positive.")
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
        title=(
            _as_str(section.get("title", "Focus Timer"), "notifications.title")
            or "Focus Timer"
        ),
        desktop=_as_bool(section.get("desktop", True), "notifications.desktop"),
        chime=_as_bool(section.get("chime", True), "notifications.chime"),
        chime_frequency_hz=_as_float(
            section.get("chime_frequency_hz", 880.0),
            "notifications.chime_frequency_hz",
        ),
        chime_seconds=chime_seconds,
        volume=volume,
        output_device=(
            _as_int(section.get("output_device"), "notifications.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_display_settings(section: Mapping[str, Any]) -> DisplaySettings:
    refresh_seconds = _as_float(
        section.get("refresh_seconds", 0.5),
        "display.refresh_seconds",
    )
    if refresh_seconds <= 0:
        raise AppConfigurationError("display.refresh_seconds must be positive.")
    return DisplaySettings(
        refresh_seconds=refresh_seconds,
        bar_width=_as_int(section.get("bar_width", 32), "display.bar_width"),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    else:
        raise AppConfigurationError(f"{field} must be a float.")
    if not math.isfinite(parsed):
        raise AppConfigurationError(f"{field} must be a finite number.")
    return parsed
