"""Activity timer: suppress control pads for a while after notes are played.

Notes and control presses come from the same hands on the same surface, so
a note strike must not be read as a control press. A background thread
advances a shared tick counter; a note sets a target tick and the control
pads stay suppressed until the counter reaches it.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from lpxcontrol.exceptions import ErrorContext

logger = logging.getLogger(__name__)


@dataclass
class ActivityClock:
    """Shared tick counter. `sleep_until == 0` means not suppressed."""

    tick: int = 0
    sleep_until: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class ActivityTimer:
    """
    Debounce window driven by a periodic background tick.

    `set_pads_enabled` is called with False when a window opens and True
    when it expires. It runs while the clock lock is held, so it must not
    call back into the timer.
    """

    def __init__(
        self,
        set_pads_enabled: Callable[[bool], None],
        tick_interval: float = 0.1,
        clock: Optional[ActivityClock] = None,
    ):
        """
        Args:
            set_pads_enabled: Repaints the control pads enabled/disabled
            tick_interval: Seconds between ticks
            clock: Shared clock (a fresh one by default)
        """
        self._set_pads_enabled = set_pads_enabled
        self._tick_interval = tick_interval
        self.clock = clock or ActivityClock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def ticks_per_second(self) -> int:
        return max(1, round(1 / self._tick_interval))

    @property
    def suppressed(self) -> bool:
        """True while a debounce window is open."""
        with self.clock.lock:
            return self.clock.sleep_until != 0

    def record_activity(self, seconds: int) -> None:
        """
        Open (or extend) the debounce window and disable the control pads.

        Args:
            seconds: Window length from the current tick
        """
        with self.clock.lock:
            # Never 0, which would read as "not suppressed" and never wake
            self.clock.sleep_until = max(self.clock.tick + seconds * self.ticks_per_second, 1)
            logger.debug(
                f"Activity: tick={self.clock.tick} sleep_until={self.clock.sleep_until}"
            )
            self._set_pads_enabled(False)

    def tick(self) -> None:
        """Advance the clock by one tick and close an expired window."""
        with self.clock.lock:
            self.clock.tick += 1
            if self.clock.sleep_until != 0 and self.clock.tick >= self.clock.sleep_until:
                logger.debug(f"Activity window expired at tick {self.clock.tick}")
                self.clock.sleep_until = 0
                self.clock.tick = 0
                self._set_pads_enabled(True)

    def start(self) -> None:
        """Start the background tick thread."""
        if self._thread and self._thread.is_alive():
            logger.warning("ActivityTimer is already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="activity-timer", daemon=True)
        self._thread.start()
        logger.debug(f"ActivityTimer started (interval={self._tick_interval}s)")

    def stop(self, timeout: float = 1.0) -> None:
        """Stop the background thread and wait up to `timeout` seconds for it to exit."""
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                # Usually stuck on the state lock behind a running action
                logger.warning(f"ActivityTimer thread still running after {timeout}s, abandoning it")
        self._thread = None
        logger.debug("ActivityTimer stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop_event.wait(self._tick_interval):
            with ErrorContext("advance activity timer", logger_instance=logger, re_raise=False):
                self.tick()
