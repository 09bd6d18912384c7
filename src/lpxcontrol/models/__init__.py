"""Data models for the Launchpad control surface."""

from .color import Color
from .config import AppConfig
from .enums import EventKind, LockState
from .events import ControlEvent

__all__ = [
    "AppConfig",
    # Models
    "Color",
    "ControlEvent",
    # Enums
    "EventKind",
    "LockState",
]
