"""Inbound control surface events."""

from collections.abc import Sequence
from typing import Optional

import mido
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .enums import EventKind

_KIND_BY_STATUS = {kind.status: kind for kind in EventKind}


class ControlEvent(BaseModel):
    """A single 3-byte event from the surface. Consumed once, never retained."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    identifier: int = Field(ge=0, le=127, description="Control or note number (0-127)")
    value: int = Field(ge=0, le=127, description="Control value or velocity (0-127)")

    @classmethod
    def from_bytes(cls, data: Sequence[int]) -> Optional["ControlEvent"]:
        """
        Parse a raw `[status, id, value]` triple.

        Returns:
            ControlEvent, or None for anything that is not a 3-byte
            control change or note on (channel 1) with in-range data bytes
        """
        if len(data) != 3:
            return None

        kind = _KIND_BY_STATUS.get(data[0])
        if kind is None:
            return None

        try:
            return cls(kind=kind, identifier=data[1], value=data[2])
        except ValidationError:
            return None

    @classmethod
    def from_message(cls, msg: mido.Message) -> Optional["ControlEvent"]:
        """Parse a mido message into a ControlEvent, or None."""
        if msg.type == "clock":
            return None
        return cls.from_bytes(msg.bytes())

    @property
    def is_control_change(self) -> bool:
        """True for control button events."""
        return self.kind is EventKind.CONTROL_CHANGE

    @property
    def is_note_on(self) -> bool:
        """True for note on events, including velocity 0 (a release)."""
        return self.kind is EventKind.NOTE_ON
