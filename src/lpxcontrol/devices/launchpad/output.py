"""Launchpad output/LED control."""

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Optional

from lpxcontrol.exceptions import SendError
from lpxcontrol.midi import MidiConnection
from lpxcontrol.models import Color

from .sysex import LaunchpadSysEx, Layout

logger = logging.getLogger(__name__)


class LaunchpadOutput:
    """
    Paint Launchpad pads through a single serialised outbound channel.

    Every send goes through one re-entrant lock. Callers that need several
    sends (and anything in between) to appear atomic to other threads hold
    `exclusive()` around them.

    Send failures are logged and swallowed; each method returns whether the
    frame went out.
    """

    def __init__(self, link: MidiConnection, sysex: Optional[LaunchpadSysEx] = None):
        """
        Initialize Launchpad output controller.

        Args:
            link: Open connection used for sending frames
            sysex: Frame builder (default: Launchpad X)
        """
        self.link = link
        self.sysex = sysex or LaunchpadSysEx()
        self._channel_lock = threading.RLock()

    @contextmanager
    def exclusive(self) -> Iterator["LaunchpadOutput"]:
        """Hold the outbound channel for a sequence of operations."""
        with self._channel_lock:
            yield self

    def _send(self, frame: list[int], what: str) -> bool:
        with self._channel_lock:
            try:
                self.link.send(frame)
                return True
            except SendError as e:
                logger.warning(f"Failed to {what}: {e.technical_message}")
                return False

    def set_pad_static(self, pad: int, colour: int) -> bool:
        """Set a pad to a steady palette colour."""
        return self._send(self.sysex.led_static(pad, colour), f"set pad {pad} to colour {colour}")

    def set_pad_pulsing(self, pad: int, colour: int) -> bool:
        """Set a pad to a pulsing palette colour."""
        return self._send(self.sysex.led_pulsing(pad, colour), f"pulse pad {pad} in colour {colour}")

    def set_pad_rgb(self, pad: int, color: Color) -> bool:
        """Set a pad to an RGB colour."""
        return self._send(
            self.sysex.led_rgb(pad, *color.to_rgb_tuple()), f"set pad {pad} to {color.to_rgb_tuple()}"
        )

    def paint_pads(self, pads: Iterable[int], colour: int, exclude: Optional[int] = None) -> int:
        """
        Paint several pads one frame each, skipping `exclude`.

        Returns:
            Number of frames sent successfully
        """
        sent = 0
        with self._channel_lock:
            for pad in pads:
                if pad == exclude:
                    continue
                if self.set_pad_static(pad, colour):
                    sent += 1
        return sent

    def select_layout(self, layout: Layout | int) -> bool:
        """Switch the device layout."""
        return self._send(self.sysex.select_layout(layout), f"select layout {layout}")
