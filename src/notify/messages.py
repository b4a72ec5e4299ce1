"""Status and notification text builders for phase snapshots."""

from __future__ import annotations

import math

from pomodoro import Phase, PhaseState


def format_duration(seconds: float) -> str:
    """Format seconds as `MM:SS` (`H:MM:SS` past an hour), rounding partial seconds up."""
    total = max(0, math.ceil(seconds))
    hours, rest = divmod(total, 3600)
    minutes, remainder = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{remainder:02d}"
    return f"{minutes:02d}:{remainder:02d}"


def notification_body(snapshot: PhaseState) -> str:
    if snapshot.is_idle:
        return f"Timer stopped. Completed sessions: {snapshot.completed_work_count}"
    return f"Phase: {snapshot.phase}"


def phase_message(snapshot: PhaseState) -> str:
    """Human-readable line describing the phase the snapshot has entered."""
    if snapshot.is_idle:
        return "Timer stopped."
    if snapshot.phase is Phase.WORK:
        return "Back to work. Time to focus."
    if snapshot.phase is Phase.LONG_BREAK:
        return (
            f"Long break earned after {snapshot.completed_work_count} sessions. "
            "Step away for a while."
        )
    return f"Session {snapshot.completed_work_count} done. Take a short break."
