"""Control surface devices."""

from .launchpad import LaunchpadOutput, LaunchpadSysEx

__all__ = ["LaunchpadOutput", "LaunchpadSysEx"]
