"""
Invocable, observable commands.

Commands wrap an action plus an optional executability predicate, guard the
action against overlapping invocations, and notify observers whenever their
executability may have changed.
"""

from .async_command import AsyncAction, AsyncCommand
from .base import CanExecuteChangedHandler, Command, CommandBase
from .fire_and_forget import fire_and_forget
from .relay_command import RelayCommand

__all__ = [
    "AsyncAction",
    "AsyncCommand",
    "CanExecuteChangedHandler",
    "Command",
    "CommandBase",
    "RelayCommand",
    "fire_and_forget",
]
