"""CLI commands for lpxcontrol."""

from .config import config_group
from .device import colour, mode
from .midi import midi_group
from .run import run, run_daemon

__all__ = ["colour", "config_group", "midi_group", "mode", "run", "run_daemon"]
