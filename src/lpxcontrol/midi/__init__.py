"""MIDI device link."""

from .connection import MidiConnection

__all__ = ["MidiConnection"]
