"""Control surface core: lock gesture, activity timer, dispatch."""

from .actions import ActionRunner
from .activity import ActivityClock, ActivityTimer
from .commands import CommandEntry, CommandTable, Dispatcher
from .coordinator import Coordinator
from .lock_sequence import LockSequence, LockTransition
from .state import SurfaceState

__all__ = [
    "ActionRunner",
    "ActivityClock",
    "ActivityTimer",
    "CommandEntry",
    "CommandTable",
    "Coordinator",
    "Dispatcher",
    "LockSequence",
    "LockTransition",
    "SurfaceState",
]
