"""lpxcontrol: run programs from a Novation Launchpad X control column."""

__version__ = "0.1.0"

# Core
from .core import Coordinator

# Device output
from .devices import LaunchpadOutput

__all__ = [
    "Coordinator",
    "LaunchpadOutput",
]
