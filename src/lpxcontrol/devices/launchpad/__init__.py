"""Launchpad X device support."""

from .output import LaunchpadOutput
from .sysex import LAUNCHPAD_X_HEADER, LaunchpadSysEx, Layout, LightingMode

__all__ = [
    "LAUNCHPAD_X_HEADER",
    "LaunchpadOutput",
    "LaunchpadSysEx",
    "Layout",
    "LightingMode",
]
