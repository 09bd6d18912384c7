"""Enumerations for the Launchpad control surface."""

from enum import Enum


class EventKind(str, Enum):
    """Inbound device event kinds, keyed by MIDI status byte."""

    CONTROL_CHANGE = "control_change"  # 0xB0, a control button
    NOTE_ON = "note_on"  # 0x90, a grid pad struck

    @property
    def status(self) -> int:
        """MIDI status byte (channel 1) for this kind."""
        return {
            EventKind.CONTROL_CHANGE: 0xB0,
            EventKind.NOTE_ON: 0x90,
        }[self]


class LockState(str, Enum):
    """Lock gesture states. Cycles indefinitely, no terminal state."""

    UNLOCKED = "unlocked"
    LOCKING = "locking"  # Part way through the ascending gesture
    LOCKED = "locked"
    UNLOCKING = "unlocking"  # Part way through the descending gesture
