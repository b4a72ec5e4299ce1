"""Rich renderables for the terminal status panel."""

from __future__ import annotations

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from notify import format_duration
from pomodoro import Phase, PhaseEngine, PhaseState

HELP_TEXT = "[s] start/resume  [p] pause  [r] reset  [q] quit  (then Enter)"

_PHASE_STYLES = {
    Phase.WORK: "bold red",
    Phase.SHORT_BREAK: "bold green",
    Phase.LONG_BREAK: "bold cyan",
}


def progress_ratio(total_seconds: float, remaining_seconds: float) -> float:
    """Fraction of the phase already elapsed, clamped to [0, 1]."""
    if total_seconds <= 0:
        return 0.0
    done = total_seconds - remaining_seconds
    return min(1.0, max(0.0, done / total_seconds))


def render_status(
    snapshot: PhaseState,
    *,
    remaining_seconds: float,
    total_seconds: float,
    title: str,
    bar_width: int = 32,
    message: str = "",
) -> RenderableType:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()

    phase_text = Text(str(snapshot.phase), style=_PHASE_STYLES.get(snapshot.phase, "bold"))
    if snapshot.is_idle:
        phase_text.append("  (idle)", style="dim")
    grid.add_row("Phase", phase_text)
    grid.add_row("Remaining", format_duration(remaining_seconds))
    grid.add_row("Completed", str(snapshot.completed_work_count))
    grid.add_row("Paused", "yes" if snapshot.paused else "no")

    ratio = progress_ratio(total_seconds, remaining_seconds)
    bar = ProgressBar(total=1.0, completed=ratio, width=max(4, bar_width))

    parts: list[RenderableType] = [grid, Text(""), bar, Text("")]
    if message:
        parts.append(Text(message, style="italic"))
    parts.append(Text(HELP_TEXT, style="dim"))

    return Panel(
        Group(*parts),
        title=Text(title, style="bold underline"),
        box=box.ROUNDED,
        padding=(1, 2),
        expand=False,
    )


def render_engine(
    engine: PhaseEngine,
    *,
    title: str,
    bar_width: int = 32,
    message: str = "",
) -> RenderableType:
    snapshot = engine.state()
    total = 0.0 if snapshot.is_idle else engine.phase_duration(snapshot.phase)
    return render_status(
        snapshot,
        remaining_seconds=engine.remaining(),
        total_seconds=total,
        title=title,
        bar_width=bar_width,
        message=message,
    )
