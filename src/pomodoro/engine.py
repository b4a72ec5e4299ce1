"""Thread-safe deadline-based phase engine for work/break cycles."""

from __future__ import annotations

import enum
import logging
import math
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from .clock import Clock, MonotonicClock, TimerHandle
from .constants import (
    DEFAULT_LONG_BREAK_EVERY,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_WORK_SECONDS,
)


class InvalidEngineConfigError(ValueError):
    """Raised when engine durations or cadence are invalid."""


class Phase(enum.Enum):
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EngineConfig:
    """Phase durations in seconds and the long-break cadence."""
    work_seconds: float = DEFAULT_WORK_SECONDS
    short_break_seconds: float = DEFAULT_SHORT_BREAK_SECONDS
    long_break_seconds: float = DEFAULT_LONG_BREAK_SECONDS
    long_break_every: int = DEFAULT_LONG_BREAK_EVERY

    def __post_init__(self) -> None:
        if isinstance(self.long_break_every, bool) or not isinstance(
            self.long_break_every, int
        ):
            raise InvalidEngineConfigError("long_break_every must be an integer")
        if self.long_break_every <= 0:
            raise InvalidEngineConfigError(
                f"long_break_every must be at least 1, got: {self.long_break_every}"
            )
        for field_name in ("work_seconds", "short_break_seconds", "long_break_seconds"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise InvalidEngineConfigError(f"{field_name} must be finite, got: {value}")
            if value < 0:
                raise InvalidEngineConfigError(f"{field_name} cannot be negative")


@dataclass(frozen=True)
class PhaseState:
    """Immutable engine snapshot handed to readers and subscribers."""
    phase: Phase = Phase.WORK
    started_at: Optional[float] = None
    ends_at: Optional[float] = None
    completed_work_count: int = 0
    paused: bool = False

    @property
    def is_idle(self) -> bool:
        return self.started_at is None

    @property
    def is_running(self) -> bool:
        return not self.is_idle and not self.paused


PhaseSubscriber = Callable[[PhaseState], None]


@dataclass(frozen=True)
class _Watcher:
    generation: int
    timer: TimerHandle


class PhaseEngine:
    """Work/break cycle state machine with a single deadline watcher thread.

    Every mutation happens under one lock. Each running phase owns exactly
    one watcher; replacing or cancelling it guarantees the previous watcher
    can no longer change state. Subscribers are called on their own thread,
    outside the lock.
    """

    def __init__(
        self,
        config: EngineConfig,
        *,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._clock: Clock = clock or MonotonicClock()
        self._logger = logger or logging.getLogger("pomodoro")
        self._lock = threading.Lock()

        self._state = PhaseState()
        self._paused_remaining = 0.0
        self._watcher: Optional[_Watcher] = None
        self._generation = 0
        self._subscriber: Optional[PhaseSubscriber] = None

    @property
    def config(self) -> EngineConfig:
        return self._config

    def set_subscriber(self, fn: Optional[PhaseSubscriber]) -> None:
        """Register the callback invoked on every phase change and on stop."""
        with self._lock:
            self._subscriber = fn

    def state(self) -> PhaseState:
        with self._lock:
            return self._state

    def remaining(self) -> float:
        """Seconds left in the current phase, never negative."""
        with self._lock:
            return self._remaining_locked()

    def phase_duration(self, phase: Any) -> float:
        if not isinstance(phase, Phase):
            return 0.0
        durations = {
            Phase.WORK: self._config.work_seconds,
            Phase.SHORT_BREAK: self._config.short_break_seconds,
            Phase.LONG_BREAK: self._config.long_break_seconds,
        }
        return float(durations.get(phase, 0.0))

    def start(self) -> None:
        """(Re)start the WORK phase from its full duration."""
        with self._lock:
            now = self._clock.now()
            self._state = replace(
                self._state,
                phase=Phase.WORK,
                started_at=now,
                ends_at=now + self._config.work_seconds,
                paused=False,
            )
            self._paused_remaining = 0.0
            self._spawn_locked()
            self._logger.info(
                "Phase started: phase=%s duration=%ss",
                Phase.WORK,
                self._config.work_seconds,
            )

    def pause(self) -> None:
        """Freeze the remaining time of the running phase."""
        with self._lock:
            if self._state.paused or self._state.is_idle:
                self._logger.debug("Pause ignored: engine is not running")
                return

            self._paused_remaining = self._running_remaining_locked()
            self._state = replace(self._state, paused=True)
            self._cancel_watcher_locked()
            self._logger.info(
                "Phase paused: phase=%s remaining=%.1fs",
                self._state.phase,
                self._paused_remaining,
            )

    def resume(self) -> None:
        """Continue a paused phase from its frozen remaining time."""
        with self._lock:
            if not self._state.paused:
                self._logger.debug("Resume ignored: engine is not paused")
                return

            now = self._clock.now()
            remaining = max(0.0, self._paused_remaining)
            self._state = replace(
                self._state,
                started_at=now,
                ends_at=now + remaining,
                paused=False,
            )
            self._paused_remaining = 0.0
            self._spawn_locked()
            self._logger.info(
                "Phase resumed: phase=%s remaining=%.1fs",
                self._state.phase,
                remaining,
            )

    def stop(self) -> None:
        """Cancel the current phase and return to idle WORK.

        The completed work count is kept; the subscriber receives the idle
        snapshot.
        """
        with self._lock:
            self._cancel_watcher_locked()
            self._state = PhaseState(
                completed_work_count=self._state.completed_work_count,
            )
            self._paused_remaining = 0.0
            snapshot = self._state
            subscriber = self._subscriber
            self._logger.info("Engine stopped")
        self._notify(subscriber, snapshot)

    def close(self) -> None:
        """Cancel the active watcher without notifying; used on shutdown."""
        with self._lock:
            self._cancel_watcher_locked()

    def _spawn_locked(self) -> None:
        self._cancel_watcher_locked()
        ends_at = self._state.ends_at if self._state.ends_at is not None else 0.0
        delay = max(0.0, ends_at - self._clock.now())

        self._generation += 1
        watcher = _Watcher(
            generation=self._generation,
            timer=self._clock.new_timer(delay),
        )
        self._watcher = watcher
        thread = threading.Thread(
            target=self._watch,
            args=(watcher,),
            daemon=True,
            name=f"phase-watcher-{watcher.generation}",
        )
        thread.start()

    def _cancel_watcher_locked(self) -> None:
        watcher = self._watcher
        if watcher is None:
            return
        self._watcher = None
        if not watcher.timer.cancel():
            # Already fired; _advance discards it because it is no longer current.
            self._logger.debug(
                "Watcher %d fired before cancellation; draining",
                watcher.generation,
            )

    def _watch(self, watcher: _Watcher) -> None:
        if watcher.timer.wait():
            self._advance(watcher)

    def _advance(self, watcher: _Watcher) -> None:
        with self._lock:
            if self._watcher is not watcher:
                self._logger.debug(
                    "Discarding stale deadline from watcher %d",
                    watcher.generation,
                )
                return
            self._watcher = None

            now = self._clock.now()
            previous = self._state.phase
            completed = self._state.completed_work_count
            if previous is Phase.WORK:
                completed += 1
                if completed % self._config.long_break_every == 0:
                    next_phase = Phase.LONG_BREAK
                else:
                    next_phase = Phase.SHORT_BREAK
            else:
                next_phase = Phase.WORK

            self._state = PhaseState(
                phase=next_phase,
                started_at=now,
                ends_at=now + self.phase_duration(next_phase),
                completed_work_count=completed,
                paused=False,
            )
            self._spawn_locked()
            snapshot = self._state
            subscriber = self._subscriber
            self._logger.info(
                "Phase advanced: %s -> %s (completed=%d)",
                previous,
                next_phase,
                completed,
            )
        self._notify(subscriber, snapshot)

    def _notify(
        self,
        subscriber: Optional[PhaseSubscriber],
        snapshot: PhaseState,
    ) -> None:
        if subscriber is None:
            return
        thread = threading.Thread(
            target=self._deliver,
            args=(subscriber, snapshot),
            daemon=True,
            name="phase-notify",
        )
        thread.start()

    def _deliver(self, subscriber: PhaseSubscriber, snapshot: PhaseState) -> None:
        try:
            subscriber(snapshot)
        except Exception as error:
            self._logger.error("Phase subscriber failed: %s", error, exc_info=True)

    def _remaining_locked(self) -> float:
        if self._state.paused:
            return max(0.0, self._paused_remaining)
        if self._state.is_idle:
            return 0.0
        return self._running_remaining_locked()

    def _running_remaining_locked(self) -> float:
        if self._state.ends_at is None:
            return 0.0
        return max(0.0, self._state.ends_at - self._clock.now())
