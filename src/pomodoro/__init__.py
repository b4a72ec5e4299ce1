from .clock import Clock, MonotonicClock, MonotonicTimer, TimerHandle
from .engine import (
    EngineConfig,
    InvalidEngineConfigError,
    Phase,
    PhaseEngine,
    PhaseState,
    PhaseSubscriber,
)

__all__ = [
    "Clock",
    "EngineConfig",
    "InvalidEngineConfigError",
    "MonotonicClock",
    "MonotonicTimer",
    "Phase",
    "PhaseEngine",
    "PhaseState",
    "PhaseSubscriber",
    "TimerHandle",
]
