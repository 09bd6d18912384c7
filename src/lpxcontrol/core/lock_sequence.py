"""Lock gesture state machine.

The surface locks when the lock pads are pressed in ascending order
(91, 92, 93, 94) and unlocks when they are pressed in descending order
(94, 93, 92, 91). The run sits in a corner of the grid, so it is unlikely
to be pressed by accident while playing. Any deviation mid-gesture snaps
back to the boundary state it started from.

    UNLOCKED --91--> LOCKING --92--> LOCKING --93--> LOCKING --94--> LOCKED
    LOCKED   --94--> UNLOCKING --93--> UNLOCKING --92--> UNLOCKING --91--> UNLOCKED

"Next in the run" means `last_identifier + 1` (or `- 1` when unlocking),
where `last_identifier` is the last control pressed of any kind, not a
dedicated step counter.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from lpxcontrol.models import LockState


@dataclass(frozen=True)
class LockTransition:
    """Outcome of one control press."""

    state: LockState
    dispatch: bool  # Forward the press to the command table


class LockSequence:
    """Transition table for the lock gesture."""

    def __init__(self, sequence: Sequence[int] = (91, 92, 93, 94)):
        """
        Args:
            sequence: Consecutive ascending pad ids forming the gesture
        """
        if len(sequence) < 2 or any(b != a + 1 for a, b in zip(sequence, sequence[1:])):
            raise ValueError(f"Lock sequence must be consecutive ascending ids, got {list(sequence)}")
        self.first = sequence[0]
        self.final = sequence[-1]

    def in_band(self, identifier: int) -> bool:
        """True for ids at or above the start of the gesture band; these never dispatch."""
        return identifier >= self.first

    def advance(
        self, state: LockState, last_identifier: Optional[int], identifier: int
    ) -> LockTransition:
        """
        Apply one control press.

        Args:
            state: Current lock state
            last_identifier: Previous control id pressed (None if none yet)
            identifier: Control id just pressed

        Returns:
            Next state and whether the press should be dispatched
        """
        if state is LockState.UNLOCKED:
            if identifier == self.first:
                return LockTransition(LockState.LOCKING, False)
            return LockTransition(LockState.UNLOCKED, not self.in_band(identifier))

        if state is LockState.LOCKING:
            if last_identifier is None or identifier != last_identifier + 1:
                return LockTransition(LockState.UNLOCKED, False)
            if identifier == self.final:
                return LockTransition(LockState.LOCKED, False)
            return LockTransition(LockState.LOCKING, False)

        if state is LockState.LOCKED:
            if identifier == self.final:
                return LockTransition(LockState.UNLOCKING, False)
            return LockTransition(LockState.LOCKED, False)

        # UNLOCKING
        if last_identifier is None or identifier != last_identifier - 1:
            return LockTransition(LockState.LOCKED, False)
        if identifier == self.first:
            return LockTransition(LockState.UNLOCKED, False)
        return LockTransition(LockState.UNLOCKING, False)
