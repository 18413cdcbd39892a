"""Core command dispatch components."""

from .dispatcher import CommandDispatcher, create_dispatcher, create_strategy
from .runner import CommandResult, CommandRunner, SubprocessRunner
from .strategies import PlatformOp, PlatformStrategy

__all__ = [
    "CommandDispatcher",
    "CommandResult",
    "CommandRunner",
    "create_dispatcher",
    "create_strategy",
    "PlatformOp",
    "PlatformStrategy",
    "SubprocessRunner",
]
