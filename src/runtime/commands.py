"""Maps user input to phase engine commands with accept/reject results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pomodoro import PhaseEngine, PhaseState
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_QUIT,
    ACTION_RESUME,
    ACTION_START,
    ACTION_STOP,
    REASON_ALREADY_RUNNING,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_QUIT,
    REASON_RESUMED,
    REASON_STARTED,
    REASON_STOPPED,
    REASON_UNSUPPORTED_ACTION,
)

_INPUT_TO_ACTION = {
    "s": ACTION_START,
    "start": ACTION_START,
    "resume": ACTION_RESUME,
    "p": ACTION_PAUSE,
    "pause": ACTION_PAUSE,
    "r": ACTION_STOP,
    "reset": ACTION_STOP,
    "stop": ACTION_STOP,
    "q": ACTION_QUIT,
    "quit": ACTION_QUIT,
    "exit": ACTION_QUIT,
}


@dataclass(frozen=True)
class CommandResult:
    """Result envelope returned after applying a user command."""
    action: str
    accepted: bool
    reason: str
    snapshot: PhaseState


def parse_command(raw: str) -> Optional[str]:
    """Return the action for a typed command, or None if it is unknown."""
    return _INPUT_TO_ACTION.get(raw.strip().lower())


class CommandDispatcher:
    """Applies start-or-resume, resume, pause, stop and quit to a phase engine."""
    def __init__(self, engine: PhaseEngine, logger: Optional[logging.Logger] = None):
        self._engine = engine
        self._logger = logger or logging.getLogger("runtime.commands")

    def apply(self, action: str) -> CommandResult:
        engine = self._engine
        if action == ACTION_START:
            current = engine.state()
            if current.is_idle:
                engine.start()
                return self._result(action, True, REASON_STARTED)
            if current.paused:
                engine.resume()
                return self._result(action, True, REASON_RESUMED)
            return self._result(action, False, REASON_ALREADY_RUNNING)

        if action == ACTION_RESUME:
            if not engine.state().paused:
                return self._result(action, False, REASON_NOT_PAUSED)
            engine.resume()
            return self._result(action, True, REASON_RESUMED)

        if action == ACTION_PAUSE:
            if not engine.state().is_running:
                return self._result(action, False, REASON_NOT_RUNNING)
            engine.pause()
            return self._result(action, True, REASON_PAUSED)

        if action == ACTION_STOP:
            engine.stop()
            return self._result(action, True, REASON_STOPPED)

        if action == ACTION_QUIT:
            return self._result(action, True, REASON_QUIT)

        self._logger.warning("Unsupported runtime action: %s", action)
        return self._result(action, False, REASON_UNSUPPORTED_ACTION)

    def _result(self, action: str, accepted: bool, reason: str) -> CommandResult:
        if not accepted:
            self._logger.debug("Command rejected: action=%s reason=%s", action, reason)
        return CommandResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._engine.state(),
        )
