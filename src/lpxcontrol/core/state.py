"""Shared mutable state of the control surface."""

import threading
from dataclasses import dataclass, field
from typing import Optional

from lpxcontrol.models import LockState


@dataclass
class SurfaceState:
    """
    Source of truth for the control pads.

    Owned by the Coordinator and shared with the activity timer. Every read
    or write happens while holding `lock`.

    Attributes:
        last_identifier: Last qualifying control id seen, dispatched or not.
            The lock gesture compares each press against it.
        active_identifier: Control whose activate action ran last. Its
            deactivate action runs before the next activation, and its pad
            is skipped by bulk repaints.
        pads_enabled: Whether the control pads currently show as enabled
        lock_state: Lock gesture state
    """

    last_identifier: Optional[int] = None
    active_identifier: Optional[int] = None
    pads_enabled: bool = False
    lock_state: LockState = LockState.UNLOCKED
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)
