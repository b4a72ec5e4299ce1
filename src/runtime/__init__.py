"""Runtime engine exports."""

from .commands import CommandDispatcher, CommandResult, parse_command
from .loop import RuntimeLoop, RuntimeSettings

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "RuntimeLoop",
    "RuntimeSettings",
    "parse_command",
]
